"""
Reminder planning - derives reminder timestamps for protocol dose days.

Only computes when reminders are due; sending them is left to whatever
delivery channel consumes the plan.
"""
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Dict, Iterable, List, Tuple
import logging
import re

import pytz

from microdose.config import get_settings
from microdose.engine.protocols import ProtocolEvent

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

CHANNELS = ("email", "push")


def parse_time(value: str) -> time:
    """Parse an "HH:MM" string."""
    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Time must be in HH:MM format, got {value!r}")
    return time(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True)
class ReminderSetting:
    enabled: bool
    time: str  # "HH:MM"


@dataclass(frozen=True)
class NotificationSettings:
    morning_reminder: ReminderSetting
    evening_reflection: ReminderSetting
    timezone: str = "UTC"
    channels: Tuple[str, ...] = ()

    @classmethod
    def defaults(cls) -> "NotificationSettings":
        """Both reminders on, at the configured default times."""
        settings = get_settings()
        return cls(
            morning_reminder=ReminderSetting(enabled=True, time=settings.default_morning_time),
            evening_reflection=ReminderSetting(enabled=True, time=settings.default_evening_time),
            timezone=settings.default_timezone,
            channels=CHANNELS,
        )


@dataclass(frozen=True)
class Reminder:
    type: str  # "reminder" or "reflection"
    scheduled_for: datetime  # timezone-aware
    channels: Tuple[str, ...] = ()
    metadata: Dict = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict:
        return {
            "type": self.type,
            "scheduled_for": self.scheduled_for.isoformat(),
            "channels": list(self.channels),
            "metadata": dict(self.metadata),
        }


def _localize(tz, event: ProtocolEvent, at: time) -> datetime:
    # localize() picks the offset for that day, normalize() moves wall times
    # that fall in a DST gap forward to a real instant
    return tz.normalize(tz.localize(datetime.combine(event.date, at)))


def plan_reminders(events: Iterable[ProtocolEvent], settings: NotificationSettings) -> List[Reminder]:
    """
    Morning reminder and evening reflection for every dose day, in event order.

    Raises ValueError for an unknown timezone or a malformed time.
    """
    try:
        tz = pytz.timezone(settings.timezone)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {settings.timezone}")

    morning_time = parse_time(settings.morning_reminder.time) if settings.morning_reminder.enabled else None
    evening_time = parse_time(settings.evening_reflection.time) if settings.evening_reflection.enabled else None

    reminders = []
    for event in events:
        if not event.is_dose_day:
            continue

        if morning_time is not None:
            reminders.append(Reminder(
                type="reminder",
                scheduled_for=_localize(tz, event, morning_time),
                channels=tuple(settings.channels),
                metadata={
                    "event_date": event.date.isoformat(),
                    "event_type": event.type,
                    "substance": event.substance,
                    "dose": event.dose,
                    "dose_unit": event.dose_unit,
                },
            ))

        if evening_time is not None:
            reminders.append(Reminder(
                type="reflection",
                scheduled_for=_localize(tz, event, evening_time),
                channels=tuple(settings.channels),
                metadata={
                    "event_date": event.date.isoformat(),
                    "event_type": event.type,
                },
            ))

    logger.info(f"Planned {len(reminders)} reminders")
    return reminders
