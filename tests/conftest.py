"""
Pytest fixtures for the microdose engine tests.
"""

from datetime import date

import pytest

from microdose.config import get_settings
from microdose.engine import DoseCalculator, DoseParameters, ProtocolDefinition, ScheduledDose


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def calculator() -> DoseCalculator:
    return DoseCalculator()


@pytest.fixture
def reference_params() -> DoseParameters:
    """70kg, average sensitivity, standard goal, reference intake form."""
    return DoseParameters(
        gender="female",
        weight_kg=70,
        substance="psilocybin",
        intake_form="dried_mushrooms",
        sensitivity=1.0,
        goal="standard",
    )


@pytest.fixture
def monday() -> date:
    # 2024-01-01 was a Monday
    return date(2024, 1, 1)


@pytest.fixture
def psilocybin_dose() -> ScheduledDose:
    return ScheduledDose(substance="psilocybin", dose=200, dose_unit="mg")


@pytest.fixture
def fadiman_protocol(monday) -> ProtocolDefinition:
    return ProtocolDefinition(type="fadiman", start_date=monday, cycle_length_weeks=4)
