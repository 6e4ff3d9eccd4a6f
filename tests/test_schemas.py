"""
Tests for the request schemas that turn request bodies into engine inputs.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from microdose.engine import Nootropic
from microdose.schemas import DoseCalculationRequest, ProtocolCreateRequest


@pytest.fixture
def dose_body() -> dict:
    return {
        "gender": "female",
        "weight": 62.5,
        "substance": "lsd",
        "intakeForm": "blotter",
        "goal": "standard",
        "experience": "",
        "currentMedication": "",
    }


@pytest.fixture
def protocol_body() -> dict:
    return {
        "type": "custom",
        "name": "Weekday routine",
        "startDate": "2024-01-01T09:30:00Z",
        "cycleLength": 4,
        "settings": {"custom": {"doseDays": [1, 3, 5]}},
        "notificationSettings": {
            "morningReminder": {"enabled": True, "time": "07:00"},
            "eveningReflection": {"enabled": True, "time": "21:30"},
            "channels": ["email", "push"],
        },
    }


class TestDoseCalculationRequest:

    def test_parses_camel_case_body(self, dose_body):
        params = DoseCalculationRequest.model_validate(dose_body).to_parameters()

        assert params.weight_kg == 62.5
        assert params.intake_form == "blotter"

    def test_sensitivity_defaults_to_average(self, dose_body):
        params = DoseCalculationRequest.model_validate(dose_body).to_parameters()

        assert params.sensitivity == 1.0

    def test_empty_optional_fields_become_none(self, dose_body):
        params = DoseCalculationRequest.model_validate(dose_body).to_parameters()

        assert params.experience is None
        assert params.current_medication is None

    def test_keeps_given_optional_fields(self, dose_body):
        dose_body.update(experience="beginner", currentMedication="lithium")
        params = DoseCalculationRequest.model_validate(dose_body).to_parameters()

        assert params.experience == "beginner"
        assert params.current_medication == "lithium"

    @pytest.mark.parametrize("field,value", [
        ("weight", 250),
        ("sensitivity", 0.1),
        ("substance", "caffeine"),
        ("goal", "heroic"),
        ("intakeForm", ""),
    ])
    def test_rejects_out_of_domain(self, dose_body, field, value):
        dose_body[field] = value

        with pytest.raises(ValidationError):
            DoseCalculationRequest.model_validate(dose_body)


class TestProtocolCreateRequest:

    def test_to_definition(self, protocol_body):
        definition = ProtocolCreateRequest.model_validate(protocol_body).to_definition()

        assert definition.type == "custom"
        assert definition.start_date == date(2024, 1, 1)
        assert definition.cycle_length_weeks == 4
        assert definition.dose_days == frozenset({1, 3, 5})
        assert definition.name == "Weekday routine"

    def test_dose_days_only_for_custom(self, protocol_body):
        protocol_body["type"] = "fadiman"
        definition = ProtocolCreateRequest.model_validate(protocol_body).to_definition()

        assert definition.dose_days == frozenset()

    def test_stamets_nootropics(self, protocol_body):
        protocol_body["type"] = "stamets"
        protocol_body["settings"] = {
            "stamets": {"nootropics": [
                {"name": "Lion's mane", "dose": 1000, "unit": "mg"},
                {"name": "Niacin", "dose": 100, "unit": "mg"},
            ]},
        }
        definition = ProtocolCreateRequest.model_validate(protocol_body).to_definition()

        assert definition.nootropics == (
            Nootropic(name="Lion's mane", dose=1000, unit="mg"),
            Nootropic(name="Niacin", dose=100, unit="mg"),
        )

    def test_nootropics_only_for_stamets(self, protocol_body):
        protocol_body["type"] = "fadiman"
        protocol_body["settings"] = {"stamets": {"nootropics": [{"name": "Niacin", "dose": 100, "unit": "mg"}]}}
        definition = ProtocolCreateRequest.model_validate(protocol_body).to_definition()

        assert definition.nootropics == ()

    def test_rejects_nootropic_without_dose(self, protocol_body):
        protocol_body["settings"] = {"stamets": {"nootropics": [{"name": "Niacin", "dose": 0, "unit": "mg"}]}}

        with pytest.raises(ValidationError):
            ProtocolCreateRequest.model_validate(protocol_body)

    def test_notification_settings(self, protocol_body):
        settings = ProtocolCreateRequest.model_validate(protocol_body).to_notification_settings()

        assert settings.morning_reminder.time == "07:00"
        assert settings.evening_reflection.enabled is True
        assert settings.timezone == "UTC"
        assert settings.channels == ("email", "push")

    def test_notification_settings_optional(self, protocol_body):
        del protocol_body["notificationSettings"]

        assert ProtocolCreateRequest.model_validate(protocol_body).to_notification_settings() is None

    @pytest.mark.parametrize("cycle_length", [1, 7])
    def test_rejects_cycle_length(self, protocol_body, cycle_length):
        protocol_body["cycleLength"] = cycle_length

        with pytest.raises(ValidationError):
            ProtocolCreateRequest.model_validate(protocol_body)

    def test_rejects_bad_weekday(self, protocol_body):
        protocol_body["settings"]["custom"]["doseDays"] = [1, 9]

        with pytest.raises(ValidationError):
            ProtocolCreateRequest.model_validate(protocol_body)

    def test_rejects_bad_time(self, protocol_body):
        protocol_body["notificationSettings"]["morningReminder"]["time"] = "7am"

        with pytest.raises(ValidationError):
            ProtocolCreateRequest.model_validate(protocol_body)

    def test_rejects_unknown_channel(self, protocol_body):
        protocol_body["notificationSettings"]["channels"] = ["sms"]

        with pytest.raises(ValidationError):
            ProtocolCreateRequest.model_validate(protocol_body)
