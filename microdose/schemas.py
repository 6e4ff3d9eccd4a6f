"""
Request schemas - parse raw request bodies into engine inputs.

Bodies use camelCase keys; snake_case is accepted as well.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from microdose.config import get_settings
from microdose.engine.calculator import DoseParameters
from microdose.engine.protocols import Nootropic, ProtocolDefinition
from microdose.services.reminders import NotificationSettings, ReminderSetting, parse_time


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DoseCalculationRequest(RequestModel):
    gender: Literal["male", "female", "other"]
    weight: float = Field(ge=30, le=200)  # kg
    substance: Literal["psilocybin", "lsd", "amanita", "ketamine"]
    intake_form: str = Field(min_length=1)
    sensitivity: float = Field(default=1.0, ge=0.3, le=2.0)
    goal: Literal["sub_perceptual", "standard", "upper_microdose"]
    experience: Optional[Literal["beginner", "intermediate", "experienced", ""]] = None
    current_medication: Optional[str] = None

    def to_parameters(self) -> DoseParameters:
        # Empty strings from optional form fields mean "not given"
        return DoseParameters(
            gender=self.gender,
            weight_kg=self.weight,
            substance=self.substance,
            intake_form=self.intake_form,
            sensitivity=self.sensitivity,
            goal=self.goal,
            experience=self.experience or None,
            current_medication=self.current_medication or None,
        )


class NootropicSchema(RequestModel):
    name: str = Field(min_length=1)
    dose: float = Field(gt=0)
    unit: str = Field(min_length=1)

    def to_nootropic(self) -> Nootropic:
        return Nootropic(name=self.name, dose=self.dose, unit=self.unit)


class StametsSettings(RequestModel):
    nootropics: List[NootropicSchema] = []


class CustomSettings(RequestModel):
    dose_days: List[int]

    @field_validator("dose_days")
    @classmethod
    def validate_weekdays(cls, v):
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("Dose days must be between 0 (Sunday) and 6 (Saturday)")
        return v


class ProtocolSettings(RequestModel):
    stamets: Optional[StametsSettings] = None
    custom: Optional[CustomSettings] = None


class ReminderSettingSchema(RequestModel):
    enabled: bool
    time: str  # HH:MM

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        parse_time(v)
        return v


class NotificationSettingsSchema(RequestModel):
    morning_reminder: ReminderSettingSchema
    evening_reflection: ReminderSettingSchema
    channels: List[Literal["email", "push"]] = []
    timezone: Optional[str] = None

    def to_settings(self) -> NotificationSettings:
        return NotificationSettings(
            morning_reminder=ReminderSetting(**self.morning_reminder.model_dump()),
            evening_reflection=ReminderSetting(**self.evening_reflection.model_dump()),
            timezone=self.timezone or get_settings().default_timezone,
            channels=tuple(self.channels),
        )


class ProtocolCreateRequest(RequestModel):
    type: Literal["fadiman", "stamets", "custom"]
    name: str = Field(min_length=1, max_length=100)
    start_date: datetime
    cycle_length: int = Field(ge=2, le=6)  # weeks
    settings: ProtocolSettings = ProtocolSettings()
    notification_settings: Optional[NotificationSettingsSchema] = None

    def to_definition(self) -> ProtocolDefinition:
        dose_days = ()
        if self.type == "custom" and self.settings.custom is not None:
            dose_days = self.settings.custom.dose_days
        nootropics = ()
        if self.type == "stamets" and self.settings.stamets is not None:
            nootropics = tuple(n.to_nootropic() for n in self.settings.stamets.nootropics)
        return ProtocolDefinition(
            type=self.type,
            start_date=self.start_date,
            cycle_length_weeks=self.cycle_length,
            dose_days=frozenset(dose_days),
            name=self.name,
            nootropics=nootropics,
        )

    def to_notification_settings(self) -> Optional[NotificationSettings]:
        if self.notification_settings is None:
            return None
        return self.notification_settings.to_settings()
