import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Union

from .substances import (
    SUBSTANCE_PROFILES,
    GOAL_FACTORS,
    GENDERS,
    EXPERIENCE_LEVELS,
    WEIGHT_RANGE_KG,
    SENSITIVITY_RANGE,
    REFERENCE_WEIGHT_KG,
    get_substance_profile,
    get_intake_form_factor,
)
from .messages import DEFAULT_LOCALE, get_catalog, validation_message, recommendation_block


@dataclass(frozen=True)
class DoseParameters:
    """A person's inputs to the dose formula."""
    gender: Optional[str]
    weight_kg: Optional[float]
    substance: Optional[str]
    intake_form: Optional[str]
    goal: Optional[str]
    sensitivity: Optional[float] = 1.0  # 1.0 = average
    experience: Optional[str] = None  # beginner, intermediate, experienced
    current_medication: Optional[str] = None  # only presence matters


@dataclass(frozen=True)
class ScheduledDose:
    """The part of a dose result that gets stamped onto protocol dose days."""
    substance: str
    dose: Union[int, float]
    dose_unit: str


@dataclass(frozen=True)
class DoseResult:
    substance: str
    calculated_dose: Union[int, float]
    dose_unit: str
    base_dose: float
    weight_factor: float
    sensitivity_factor: float
    goal_factor: float
    intake_form_factor: float
    explanation: str
    recommendations: List[str] = field(default_factory=list, hash=False)

    def as_scheduled_dose(self) -> ScheduledDose:
        return ScheduledDose(
            substance=self.substance,
            dose=self.calculated_dose,
            dose_unit=self.dose_unit,
        )

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ValidationResult:
    errors: List[str] = field(default_factory=list, hash=False)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _in_range(value, bounds) -> bool:
    low, high = bounds
    return _is_number(value) and low <= value <= high


def round_dose(value: float, decimals: int) -> Union[int, float]:
    """
    Round half-up at the given precision.

    Whole-number precision returns an int, anything finer a float.
    Non-finite values (inf, nan) come back unchanged.
    """
    if not math.isfinite(value):
        return value

    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # enough digits for the integer part plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if decimals == 0:
        return int(rounded)
    return float(rounded)


class DoseCalculator:
    """
    Personalized microdose calculator.

    Formula:
        dose = base_dose × (weight / 70) × F_sensitivity × F_goal × F_intake_form

    validate() and calculate() are independent: calculate() trusts its input
    and never raises for out-of-range numbers, so callers validate first.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale

    def validate(self, params: DoseParameters) -> ValidationResult:
        """Check every field and report all violations at once."""
        errors = []

        if params.gender not in GENDERS:
            errors.append(validation_message("gender", self.locale))

        if not _in_range(params.weight_kg, WEIGHT_RANGE_KG):
            errors.append(validation_message("weight", self.locale))

        if params.substance not in SUBSTANCE_PROFILES:
            errors.append(validation_message("substance", self.locale))

        if not params.intake_form:
            errors.append(validation_message("intake_form", self.locale))

        if not _in_range(params.sensitivity, SENSITIVITY_RANGE):
            errors.append(validation_message("sensitivity", self.locale))

        if params.goal not in GOAL_FACTORS:
            errors.append(validation_message("goal", self.locale))

        if params.experience is not None and params.experience not in EXPERIENCE_LEVELS:
            errors.append(validation_message("experience", self.locale))

        return ValidationResult(errors=errors)

    def calculate(self, params: DoseParameters) -> DoseResult:
        profile = get_substance_profile(params.substance)

        weight_factor = params.weight_kg / REFERENCE_WEIGHT_KG
        sensitivity_factor = params.sensitivity
        goal_factor = GOAL_FACTORS[params.goal]
        intake_form_factor = get_intake_form_factor(params.intake_form)

        raw_dose = profile.base_dose * weight_factor * sensitivity_factor * goal_factor * intake_form_factor
        dose = round_dose(raw_dose, profile.decimals)

        explanation = self._build_explanation(
            substance=params.substance,
            unit=profile.unit,
            base_dose=profile.base_dose,
            weight_kg=params.weight_kg,
            weight_factor=weight_factor,
            sensitivity_factor=sensitivity_factor,
            goal_factor=goal_factor,
            intake_form_factor=intake_form_factor,
            dose=dose,
        )

        return DoseResult(
            substance=params.substance,
            calculated_dose=dose,
            dose_unit=profile.unit,
            base_dose=profile.base_dose,
            weight_factor=weight_factor,
            sensitivity_factor=sensitivity_factor,
            goal_factor=goal_factor,
            intake_form_factor=intake_form_factor,
            explanation=explanation,
            recommendations=self._build_recommendations(params),
        )

    def _build_explanation(self, **facts) -> str:
        template = get_catalog(self.locale)["explanation"]
        lines = [
            template["header"].format(**facts),
            "",
            template["base_dose"].format(**facts),
            template["weight"].format(**facts),
            template["sensitivity"].format(**facts),
            template["goal"].format(**facts),
            template["intake_form"].format(**facts),
            "",
            template["result"].format(**facts),
        ]
        return "\n".join(lines)

    def _build_recommendations(self, params: DoseParameters) -> List[str]:
        """Base advice, then substance advice, then conditional blocks."""
        recommendations = recommendation_block("base", self.locale)
        recommendations += recommendation_block(params.substance, self.locale)

        if params.experience == "beginner":
            recommendations += recommendation_block("beginner", self.locale)

        if params.current_medication:
            recommendations += recommendation_block("medication", self.locale)

        return recommendations
