"""
Planning Service - validation, dose calculation and protocol expansion in one call.
"""
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Dict, List, Optional
import logging

from microdose.config import get_settings
from microdose.engine.calculator import DoseCalculator, DoseParameters, DoseResult, ScheduledDose
from microdose.engine.protocols import (
    ProtocolDefinition,
    ProtocolEvent,
    schedule_generator,
    summarize_schedule,
    validate_protocol,
)
from microdose.services.reminders import NotificationSettings, Reminder, plan_reminders

logger = logging.getLogger(__name__)


class PlanningError(ValueError):
    """Input failed validation; `errors` holds every message."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class ProtocolPlan:
    definition: ProtocolDefinition
    end_date: date
    events: List[ProtocolEvent] = field(hash=False)
    reminders: List[Reminder] = field(default_factory=list, hash=False)
    summary: Dict = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict:
        summary = dict(self.summary)
        for key in ("first_dose_date", "last_dose_date"):
            if summary.get(key) is not None:
                summary[key] = summary[key].isoformat()
        return {
            "type": self.definition.type,
            "name": self.definition.name,
            "start_date": self.definition.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "cycle_length_weeks": self.definition.cycle_length_weeks,
            "nootropics": [asdict(n) for n in self.definition.nootropics],
            "events": [e.to_dict() for e in self.events],
            "reminders": [r.to_dict() for r in self.reminders],
            "summary": summary,
        }


def calculate_dose(params: DoseParameters, calculator: DoseCalculator = None) -> DoseResult:
    """Validate then calculate. Raises PlanningError on invalid input."""
    calculator = calculator or DoseCalculator(locale=get_settings().default_locale)

    validation = calculator.validate(params)
    if not validation.is_valid:
        logger.warning(f"Dose parameters rejected: {validation.errors}")
        raise PlanningError(validation.errors)

    result = calculator.calculate(params)
    logger.info(f"Calculated {result.calculated_dose} {result.dose_unit} {result.substance}")
    return result


def create_protocol_plan(
    definition: ProtocolDefinition,
    dose: ScheduledDose,
    notification_settings: Optional[NotificationSettings] = None,
    locale: str = None,
) -> ProtocolPlan:
    """
    Validate a protocol and expand it into events (and reminders, when
    notification settings are given).

    `dose` may be a ScheduledDose or a DoseResult.
    """
    if isinstance(dose, DoseResult):
        dose = dose.as_scheduled_dose()

    validation = validate_protocol(definition, locale or get_settings().default_locale)
    if not validation.is_valid:
        logger.warning(f"Protocol definition rejected: {validation.errors}")
        raise PlanningError(validation.errors)

    events = schedule_generator.generate(definition, dose)

    reminders = []
    if notification_settings is not None:
        reminders = plan_reminders(events, notification_settings)

    summary = summarize_schedule(events)
    logger.info(
        f"Planned {definition.type} protocol: {summary['dose_days']} dose days, "
        f"{summary['pause_days']} pause days, {len(reminders)} reminders"
    )

    return ProtocolPlan(
        definition=definition,
        end_date=definition.end_date,
        events=events,
        reminders=reminders,
        summary=summary,
    )
