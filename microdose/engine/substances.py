"""
Substance reference tables.

Base doses are defined for a 70kg reference person at standard sensitivity,
standard goal and the reference intake form of each substance.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

MICROGRAM = "µg"
MILLIGRAM = "mg"

REFERENCE_WEIGHT_KG = 70


@dataclass(frozen=True)
class SubstanceProfile:
    """Static dosing reference for one substance."""
    id: str
    name: str
    base_dose: float
    unit: str
    description: str = ""
    intake_forms: Tuple[str, ...] = ()  # forms offered to the user, reference form first

    @property
    def decimals(self) -> int:
        """Rounding precision for calculated doses."""
        return 1 if self.unit == MICROGRAM else 0


SUBSTANCE_PROFILES: Dict[str, SubstanceProfile] = {
    "psilocybin": SubstanceProfile(
        id="psilocybin",
        name="Psilocybin (Magic Mushrooms)",
        base_dose=200,
        unit=MILLIGRAM,
        description="Dried psilocybin mushrooms",
        intake_forms=("dried_mushrooms", "fresh_mushrooms", "truffles", "pure_extract"),
    ),
    "lsd": SubstanceProfile(
        id="lsd",
        name="LSD",
        base_dose=10,
        unit=MICROGRAM,
        description="Lysergic acid diethylamide",
        intake_forms=("blotter", "liquid"),
    ),
    "amanita": SubstanceProfile(
        id="amanita",
        name="Amanita muscaria",
        base_dose=100,
        unit=MILLIGRAM,
        description="Dried fly agaric",
        intake_forms=("capsules",),
    ),
    "ketamine": SubstanceProfile(
        id="ketamine",
        name="Ketamine",
        base_dose=10,
        unit=MILLIGRAM,
        description="Dissociative anesthetic",
        intake_forms=("liquid_ketamine",),
    ),
}

INTAKE_FORM_NAMES: Dict[str, str] = {
    "dried_mushrooms": "Dried mushrooms",
    "fresh_mushrooms": "Fresh mushrooms",
    "truffles": "Truffles",
    "pure_extract": "Pure extract",
    "blotter": "Blotter",
    "liquid": "Liquid",
    "capsules": "Capsules",
    "liquid_ketamine": "Liquid",
}

# Must stay strictly increasing: sub_perceptual < standard < upper_microdose
GOAL_FACTORS: Dict[str, float] = {
    "sub_perceptual": 0.5,
    "standard": 1.0,
    "upper_microdose": 2.0,
}

INTAKE_FORM_FACTORS: Dict[str, float] = {
    # Psilocybin
    "dried_mushrooms": 1.0,   # reference
    "fresh_mushrooms": 10.0,  # ~90% water content
    "truffles": 2.0,          # ~50% potency of dried mushrooms
    "pure_extract": 0.01,     # isolated psilocybin

    # LSD
    "blotter": 1.0,
    "liquid": 1.0,

    # Amanita
    "capsules": 1.0,

    # Ketamine
    "liquid_ketamine": 1.0,
}

GENDERS = ("male", "female", "other")
EXPERIENCE_LEVELS = ("beginner", "intermediate", "experienced")

WEIGHT_RANGE_KG = (30, 200)
SENSITIVITY_RANGE = (0.3, 2.0)


def get_substance_profile(substance: str) -> SubstanceProfile:
    return SUBSTANCE_PROFILES[substance]


def get_intake_form_factor(intake_form: str) -> float:
    """Multiplier for an intake form; unknown forms count as the reference form."""
    return INTAKE_FORM_FACTORS.get(intake_form, 1.0)


def substance_catalog() -> List[Dict]:
    """Substances with their selectable intake forms, for client pickers."""
    return [
        {
            "id": profile.id,
            "name": profile.name,
            "description": profile.description,
            "unit": profile.unit,
            "base_dose": profile.base_dose,
            "intake_forms": [
                {"id": form, "name": INTAKE_FORM_NAMES.get(form, form)}
                for form in profile.intake_forms
            ],
        }
        for profile in SUBSTANCE_PROFILES.values()
    ]
