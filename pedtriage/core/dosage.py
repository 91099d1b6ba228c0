"""Weight-based anaphylaxis dosing."""

from __future__ import annotations

from typing import Optional

from ..content import load_catalogue
from ..schemas.triage import Catalogue, DosageRecommendation, PatientInput

__all__ = ["anaphylaxis_dosage", "calculate_dosage", "EPINEPHRINE_MAX_MG"]

EPINEPHRINE_MG_PER_KG = 0.01
EPINEPHRINE_MAX_MG = 0.3


def calculate_dosage(weight: Optional[float], age_years: Optional[int]) -> DosageRecommendation:
    """Epinephrine IM, methylprednisolone, hydrocortisone and antihistamine doses in mg."""

    if weight is None or weight <= 0:
        return DosageRecommendation(determined=False)
    return DosageRecommendation(
        determined=True,
        epinephrine_mg=round(min(weight * EPINEPHRINE_MG_PER_KG, EPINEPHRINE_MAX_MG), 2),
        methylprednisolone_mg=(round(weight * 1, 1), round(weight * 2, 1)),
        hydrocortisone_mg=(round(weight * 2, 1), round(weight * 4, 1)),
        antihistamine_mg=5.0 if (age_years or 0) < 6 else 10.0,
    )


def anaphylaxis_dosage(
    patient: PatientInput, catalogue: Catalogue | None = None
) -> Optional[DosageRecommendation]:
    """Return doses only while an anaphylaxis symptom is selected."""

    catalogue = catalogue or load_catalogue()
    if not patient.symptoms & catalogue.anaphylaxis_ids:
        return None
    return calculate_dosage(patient.weight, patient.age_years)
