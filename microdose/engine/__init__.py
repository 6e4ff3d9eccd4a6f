from .calculator import (
    DoseCalculator,
    DoseParameters,
    DoseResult,
    ScheduledDose,
    ValidationResult,
)
from .protocols import (
    Nootropic,
    ProtocolDefinition,
    ProtocolEvent,
    ProtocolScheduleGenerator,
    adherence_statistics,
    schedule_generator,
    summarize_schedule,
    validate_protocol,
)
from .substances import substance_catalog
