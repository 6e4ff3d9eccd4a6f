"""
Localized text for dose explanations, recommendations and validation errors.

Every locale must define the same keys. Lookups for unknown locales fall back
to DEFAULT_LOCALE.
"""

from typing import Dict, List

DEFAULT_LOCALE = "en"

MESSAGES: Dict[str, Dict] = {
    "en": {
        "explanation": {
            "header": "Calculation for {substance}:",
            "base_dose": "• Base dose (70kg, standard): {base_dose} {unit}",
            "weight": "• Weight factor ({weight_kg:.1f}kg): {weight_factor:.2f}x",
            "sensitivity": "• Sensitivity factor: {sensitivity_factor:.1f}x",
            "goal": "• Goal factor: {goal_factor:.1f}x",
            "intake_form": "• Intake form factor: {intake_form_factor:.2f}x",
            "result": "Result: {dose} {unit}",
        },
        "recommendations": {
            "base": [
                "Start with half of the calculated dose for your first test",
                "Wait at least 3-4 hours between doses",
                "Keep a journal of your experiences",
            ],
            "psilocybin": [
                "Take psilocybin on an empty stomach",
                "Avoid alcohol and other substances",
            ],
            "lsd": [
                "LSD is very potent - use precise measuring tools",
                "Store LSD cool and dark",
            ],
            "amanita": [
                "Amanita muscaria works through different mechanisms than psilocybin",
                "Be especially careful with your first dose",
            ],
            "ketamine": [
                "Ketamine microdosing should only happen under medical supervision",
                "Watch for possible bladder problems with regular use",
            ],
            "beginner": [
                "As a beginner, dose especially conservatively",
                "Inform yourself thoroughly about the substance",
            ],
            "medication": [
                "Discuss taking this with your doctor",
                "SSRIs can affect the effects of psychedelics",
            ],
        },
        "validation": {
            "gender": "Gender is required",
            "weight": "Weight must be between 30 and 200 kg",
            "substance": "Substance is required",
            "intake_form": "Intake form is required",
            "sensitivity": "Sensitivity must be between 0.3 and 2.0",
            "goal": "Goal is required",
            "experience": "Experience must be beginner, intermediate or experienced",
            "protocol_type": "Protocol type must be fadiman, stamets or custom",
            "cycle_length": "Cycle length must be between 2 and 6 weeks",
            "dose_days_required": "Custom protocol requires dose days",
            "dose_days_max": "Maximum 4 dose days per week allowed for safety",
            "dose_days_range": "Dose days must be weekday indices between 0 and 6",
        },
    },
    "de": {
        "explanation": {
            "header": "Berechnung für {substance}:",
            "base_dose": "• Basis-Dosis (70kg, Standard): {base_dose} {unit}",
            "weight": "• Gewichtsfaktor ({weight_kg:.1f}kg): {weight_factor:.2f}x",
            "sensitivity": "• Empfindlichkeitsfaktor: {sensitivity_factor:.1f}x",
            "goal": "• Ziel-Faktor: {goal_factor:.1f}x",
            "intake_form": "• Einnahmeform-Faktor: {intake_form_factor:.2f}x",
            "result": "Ergebnis: {dose} {unit}",
        },
        "recommendations": {
            "base": [
                "Beginnen Sie mit der Hälfte der berechneten Dosis für den ersten Test",
                "Warten Sie mindestens 3-4 Stunden zwischen Einnahmen",
                "Führen Sie ein Tagebuch über Ihre Erfahrungen",
            ],
            "psilocybin": [
                "Nehmen Sie Psilocybin auf nüchternen Magen ein",
                "Vermeiden Sie Alkohol und andere Substanzen",
            ],
            "lsd": [
                "LSD ist sehr potent - verwenden Sie präzise Messgeräte",
                "Bewahren Sie LSD kühl und dunkel auf",
            ],
            "amanita": [
                "Amanita muscaria hat andere Wirkmechanismen als Psilocybin",
                "Seien Sie besonders vorsichtig bei der ersten Einnahme",
            ],
            "ketamine": [
                "Ketamin-Mikrodosierung sollte nur unter ärztlicher Aufsicht erfolgen",
                "Achten Sie auf mögliche Blasenprobleme bei regelmäßiger Einnahme",
            ],
            "beginner": [
                "Als Anfänger sollten Sie besonders konservativ dosieren",
                "Informieren Sie sich gründlich über die Substanz",
            ],
            "medication": [
                "Besprechen Sie die Einnahme mit Ihrem Arzt",
                "SSRIs können die Wirkung von Psychedelika beeinflussen",
            ],
        },
        "validation": {
            "gender": "Geschlecht ist erforderlich",
            "weight": "Gewicht muss zwischen 30 und 200 kg liegen",
            "substance": "Substanz ist erforderlich",
            "intake_form": "Einnahmeform ist erforderlich",
            "sensitivity": "Empfindlichkeit muss zwischen 0.3 und 2.0 liegen",
            "goal": "Ziel ist erforderlich",
            "experience": "Erfahrung muss beginner, intermediate oder experienced sein",
            "protocol_type": "Protokolltyp muss fadiman, stamets oder custom sein",
            "cycle_length": "Zykluslänge muss zwischen 2 und 6 Wochen liegen",
            "dose_days_required": "Ein individuelles Protokoll benötigt Dosistage",
            "dose_days_max": "Maximal 4 Dosistage pro Woche aus Sicherheitsgründen erlaubt",
            "dose_days_range": "Dosistage müssen Wochentage zwischen 0 und 6 sein",
        },
    },
}


def get_catalog(locale: str = None) -> Dict:
    return MESSAGES.get(locale or DEFAULT_LOCALE, MESSAGES[DEFAULT_LOCALE])


def validation_message(key: str, locale: str = None) -> str:
    return get_catalog(locale)["validation"][key]


def recommendation_block(key: str, locale: str = None) -> List[str]:
    """Copy of one recommendation block; unknown keys give an empty list."""
    return list(get_catalog(locale)["recommendations"].get(key, []))
