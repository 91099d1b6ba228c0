"""High-level entry points composing aggregation, dosing and narrative input."""

from __future__ import annotations

from typing import Any, Mapping, Union

from ..content import load_catalogue
from ..schemas.triage import Catalogue, NarrativeRequest, PatientInput, TriageAssessment
from .dosage import anaphylaxis_dosage
from .rules.engine import aggregate, selected_risk_factors, selected_symptoms

__all__ = ["NARRATIVE_FAILURE", "RISK_PREFIX", "build_narrative_request", "triage"]

RISK_PREFIX = "[风险] "
NARRATIVE_FAILURE = "报告生成失败"

Entry = Union[PatientInput, Mapping[str, Any]]


def _as_patient(entry: Entry) -> PatientInput:
    if isinstance(entry, PatientInput):
        return entry
    return PatientInput.model_validate(entry)


def triage(entry: Entry, catalogue: Catalogue | None = None) -> TriageAssessment:
    """Assess *entry* and attach anaphylaxis dosing when it applies."""

    patient = _as_patient(entry)
    catalogue = catalogue or load_catalogue()
    assessment = aggregate(patient, catalogue)
    dosage = anaphylaxis_dosage(patient, catalogue)
    if dosage is None:
        return assessment
    return assessment.model_copy(update={"dosage": dosage})


def build_narrative_request(
    entry: Entry,
    assessment: TriageAssessment,
    catalogue: Catalogue | None = None,
) -> NarrativeRequest:
    patient = _as_patient(entry)
    catalogue = catalogue or load_catalogue()
    findings = [symptom.name for symptom in selected_symptoms(patient, catalogue)]
    findings.extend(
        f"{RISK_PREFIX}{factor.name}" for factor in selected_risk_factors(patient, catalogue)
    )
    return NarrativeRequest(
        age_years=patient.age_years,
        age_months=patient.age_months,
        age_days=patient.age_days,
        weight=patient.weight,
        vitals=patient.vitals,
        findings=tuple(findings),
        level_name=assessment.result.name,
    )
