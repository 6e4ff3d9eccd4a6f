"""
Protocol schedule generation.

Expands a protocol definition into one event per calendar day:

- fadiman: 1 day on, 2 days off (3-day period)
- stamets: 4 days on, 3 days off (7-day period)
- custom:  user-selected weekdays

Weekday indices follow the 0=Sunday ... 6=Saturday convention.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional, List, Dict, FrozenSet, Iterable, Mapping, Tuple, Union

import pytz

from .calculator import ScheduledDose, ValidationResult, round_dose
from .messages import DEFAULT_LOCALE, validation_message

logger = logging.getLogger(__name__)

PROTOCOL_TYPES = ("fadiman", "stamets", "custom")

CYCLE_LENGTH_RANGE_WEEKS = (2, 6)
MAX_CUSTOM_DOSE_DAYS = 4

FADIMAN_PERIOD = 3
STAMETS_PERIOD = 7
STAMETS_DOSE_DAYS = 4

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def normalize_start_date(value: Union[date, datetime]) -> date:
    """
    Reduce a start date/timestamp to its UTC calendar day.

    Naive datetimes are taken to already be UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(pytz.utc)
        return value.date()
    return value


def weekday_index(day: date) -> int:
    """Weekday with 0=Sunday (date.weekday() uses 0=Monday)."""
    return (day.weekday() + 1) % 7


@dataclass(frozen=True)
class Nootropic:
    name: str
    dose: float
    unit: str


@dataclass(frozen=True)
class ProtocolDefinition:
    type: str
    start_date: date
    cycle_length_weeks: int
    dose_days: FrozenSet[int] = frozenset()  # custom protocols only
    name: Optional[str] = None
    nootropics: Tuple[Nootropic, ...] = ()  # stack taken alongside stamets doses

    def __post_init__(self):
        object.__setattr__(self, "start_date", normalize_start_date(self.start_date))
        object.__setattr__(self, "dose_days", frozenset(self.dose_days or ()))
        object.__setattr__(self, "nootropics", tuple(self.nootropics or ()))

    @property
    def end_date(self) -> date:
        """Last calendar day of the protocol (inclusive)."""
        return self.start_date + timedelta(days=self.cycle_length_weeks * 7)


@dataclass(frozen=True)
class ProtocolEvent:
    date: date
    type: str  # "dose" or "pause"
    substance: Optional[str] = None
    dose: Optional[Union[int, float]] = None
    dose_unit: Optional[str] = None
    status: str = "scheduled"
    metadata: Dict = field(default_factory=dict, hash=False)

    @property
    def is_dose_day(self) -> bool:
        return self.type == "dose"

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "type": self.type,
            "status": self.status,
            "substance": self.substance,
            "dose": self.dose,
            "dose_unit": self.dose_unit,
            "metadata": dict(self.metadata),
        }


def validate_protocol(definition: ProtocolDefinition, locale: str = DEFAULT_LOCALE) -> ValidationResult:
    """Check a definition before it is handed to the generator."""
    errors = []

    if definition.type not in PROTOCOL_TYPES:
        errors.append(validation_message("protocol_type", locale))

    low, high = CYCLE_LENGTH_RANGE_WEEKS
    cycle_length = definition.cycle_length_weeks
    if not isinstance(cycle_length, int) or isinstance(cycle_length, bool) or not low <= cycle_length <= high:
        errors.append(validation_message("cycle_length", locale))

    if definition.type == "custom":
        dose_days = definition.dose_days
        if not dose_days:
            errors.append(validation_message("dose_days_required", locale))
        elif len(dose_days) > MAX_CUSTOM_DOSE_DAYS:
            errors.append(validation_message("dose_days_max", locale))
        if any(isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6 for d in dose_days):
            errors.append(validation_message("dose_days_range", locale))

    return ValidationResult(errors=errors)


class ProtocolScheduleGenerator:
    """Turns a validated protocol definition into a day-by-day schedule."""

    def is_dose_day(self, definition: ProtocolDefinition, days_since_start: int, day_of_week: int) -> bool:
        if definition.type == "fadiman":
            return days_since_start % FADIMAN_PERIOD == 0
        elif definition.type == "stamets":
            return days_since_start % STAMETS_PERIOD < STAMETS_DOSE_DAYS
        elif definition.type == "custom":
            return day_of_week in definition.dose_days
        return False

    def generate(self, definition: ProtocolDefinition, dose: ScheduledDose) -> List[ProtocolEvent]:
        """
        Build one event per day from start_date through end_date inclusive.

        The definition is assumed valid (see validate_protocol).
        """
        start_date = definition.start_date
        end_date = definition.end_date

        logger.info(
            f"Generating {definition.type} events from {start_date.isoformat()} to {end_date.isoformat()}"
        )

        events = []
        current = start_date
        while current <= end_date:
            days_since_start = (current - start_date).days
            day_of_week = weekday_index(current)
            dose_day = self.is_dose_day(definition, days_since_start, day_of_week)

            logger.debug(
                f"Day {days_since_start}: {current.isoformat()} ({WEEKDAY_NAMES[day_of_week]}) - "
                f"{'DOSE' if dose_day else 'PAUSE'}"
            )

            events.append(ProtocolEvent(
                date=current,
                type="dose" if dose_day else "pause",
                substance=dose.substance if dose_day else None,
                dose=dose.dose if dose_day else None,
                dose_unit=dose.dose_unit if dose_day else None,
                metadata={
                    "days_since_start": days_since_start,
                    "day_of_week": day_of_week,
                    "is_dose_day": dose_day,
                    "protocol_type": definition.type,
                },
            ))
            current += timedelta(days=1)

        logger.info(f"Generated {len(events)} events")
        return events


def summarize_schedule(events: Iterable[ProtocolEvent]) -> Dict:
    """Counts and dose-day bounds for a generated schedule."""
    events = list(events)
    dose_dates = [e.date for e in events if e.is_dose_day]

    return {
        "total_days": len(events),
        "dose_days": len(dose_dates),
        "pause_days": len(events) - len(dose_dates),
        "first_dose_date": dose_dates[0] if dose_dates else None,
        "last_dose_date": dose_dates[-1] if dose_dates else None,
    }


ADHERENCE_SCORES = {
    "completed": 4,
    "skipped": 2,
    "missed": 1,
    "scheduled": 0,
}

JOURNAL_BONUSES = {
    "intention": 0.5,
    "reflection": 0.5,
    "assessment": 1.0,
}

MAX_ADHERENCE_SCORE = 5


def adherence_score(event: ProtocolEvent, entry_types: Iterable[str] = ()) -> float:
    """Day score from the event status plus a bonus per journal entry type, capped at 5."""
    score = ADHERENCE_SCORES.get(event.status, 0)
    for entry_type in set(entry_types):
        score += JOURNAL_BONUSES.get(entry_type, 0)
    return min(score, MAX_ADHERENCE_SCORE)


def adherence_statistics(
    events: Iterable[ProtocolEvent],
    journal_entries: Optional[Mapping[date, Iterable[str]]] = None,
) -> Dict:
    """
    Score each tracked day and aggregate adherence over the whole schedule.

    Args:
        events: Protocol events with their current status
        journal_entries: Journal entry types written per event date

    Returns:
        Per-day scores keyed by ISO date plus the overall statistics.
        Overall adherence is completed days over non-scheduled days, in percent.
    """
    events = list(events)
    journal_entries = {day: list(types) for day, types in (journal_entries or {}).items()}

    scores = {}
    for event in events:
        # one score per calendar day, later events overwrite earlier ones
        scores[event.date.isoformat()] = adherence_score(event, journal_entries.get(event.date, ()))

    tracked = [e for e in events if e.status != "scheduled"]
    completed = sum(1 for e in events if e.status == "completed")
    missed = sum(1 for e in events if e.status == "missed")
    skipped = sum(1 for e in events if e.status == "skipped")

    overall = completed / len(tracked) * 100 if tracked else 0
    average = sum(scores.values()) / len(scores) if scores else 0
    event_dates = {e.date for e in events}

    return {
        "scores": scores,
        "overall_adherence": round_dose(overall, 0),
        "average_score": round_dose(average, 1),
        "total_days": len(tracked),
        "completed_days": completed,
        "missed_days": missed,
        "skipped_days": skipped,
        "journal_entries": sum(len(types) for day, types in journal_entries.items() if day in event_dates),
    }


# Singleton instance
schedule_generator = ProtocolScheduleGenerator()
