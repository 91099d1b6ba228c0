"""Pydantic schemas shared by the engine and the API."""

from .triage import (
    Catalogue,
    DosageRecommendation,
    LevelProfile,
    NarrativeRequest,
    PatientInput,
    RiskFactor,
    ScoreResult,
    Symptom,
    SymptomCategory,
    TriageAssessment,
    TriageLevel,
    VitalFinding,
    VitalSigns,
)

__all__ = [
    "Catalogue",
    "DosageRecommendation",
    "LevelProfile",
    "NarrativeRequest",
    "PatientInput",
    "RiskFactor",
    "ScoreResult",
    "Symptom",
    "SymptomCategory",
    "TriageAssessment",
    "TriageLevel",
    "VitalFinding",
    "VitalSigns",
]
