"""Rule aggregation: symptoms, vital findings and risk factors to one triage level."""

from __future__ import annotations

from typing import List

from ...content import load_catalogue
from ...schemas.triage import (
    Catalogue,
    PatientInput,
    RiskFactor,
    Symptom,
    TriageAssessment,
    TriageLevel,
)
from ..normalizer.age import normalize_age
from .vitals import classify

__all__ = ["aggregate", "selected_risk_factors", "selected_symptoms"]

# Vital findings only ever carry these levels; most severe first.
_VITAL_PRIORITY = (TriageLevel.CRITICAL, TriageLevel.EMERGENT, TriageLevel.URGENT)


def selected_symptoms(patient: PatientInput, catalogue: Catalogue) -> List[Symptom]:
    """Selected symptoms in catalogue order; unknown ids are ignored."""

    return [symptom for symptom in catalogue.iter_symptoms() if symptom.id in patient.symptoms]


def selected_risk_factors(patient: PatientInput, catalogue: Catalogue) -> List[RiskFactor]:
    return [factor for factor in catalogue.risk_factors if factor.id in patient.risk_factors]


def aggregate(patient: PatientInput, catalogue: Catalogue | None = None) -> TriageAssessment:
    """Reduce every signal in *patient* to the final level and its reasons."""

    catalogue = catalogue or load_catalogue()
    age = normalize_age(patient.age_years, patient.age_months, patient.age_days)
    findings = classify(patient.vitals, age)
    symptoms = selected_symptoms(patient, catalogue)
    factors = selected_risk_factors(patient, catalogue)

    level = TriageLevel.NON_URGENT
    for symptom in symptoms:
        level = min(level, symptom.level)

    for severity in _VITAL_PRIORITY:
        if any(finding.level == severity for finding in findings):
            level = min(level, severity)
            break

    escalated = any(factor.escalates for factor in factors)
    if escalated:
        level = TriageLevel(max(TriageLevel.CRITICAL, level - 1))

    reasons = [finding.label for finding in findings]
    reasons.extend(symptom.name for symptom in symptoms)
    reasons.extend(factor.name for factor in factors)

    return TriageAssessment(
        level=level,
        result=catalogue.profile(level),
        findings=findings,
        reasons=reasons,
        escalated=escalated,
    )
