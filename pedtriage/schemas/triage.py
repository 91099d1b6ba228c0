"""Schemas describing the triage catalogue, patient input and assessment."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from pydantic import Field, computed_field, field_serializer, model_validator

from .common import StrictModel


class TriageLevel(IntEnum):
    """Paediatric CTAS level; a lower value is more urgent."""

    CRITICAL = 1
    EMERGENT = 2
    URGENT = 3
    SEMI_URGENT = 4
    NON_URGENT = 5


class Symptom(StrictModel):
    id: str
    name: str
    level: TriageLevel
    category: str
    confirmation: Optional[str] = None


class SymptomCategory(StrictModel):
    id: str
    name: str
    symptoms: Tuple[Symptom, ...] = ()


class RiskFactor(StrictModel):
    id: str
    name: str
    escalates: bool = False
    confirmation: Optional[str] = None


class LevelProfile(StrictModel):
    """Response metadata shown for a final triage level."""

    level: TriageLevel
    name: str
    response_time: str
    zone: str
    description: str
    interventions: Tuple[str, ...]


class Catalogue(StrictModel):
    """Static registry of symptoms, risk factors and level profiles."""

    version: str
    categories: Tuple[SymptomCategory, ...]
    risk_factors: Tuple[RiskFactor, ...]
    levels: Dict[TriageLevel, LevelProfile]
    anaphylaxis_ids: FrozenSet[str] = frozenset()

    @field_serializer("anaphylaxis_ids")
    def _sorted_ids(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)

    @model_validator(mode="after")
    def _check_integrity(self) -> "Catalogue":
        symptom_ids = [symptom.id for symptom in self.iter_symptoms()]
        factor_ids = [factor.id for factor in self.risk_factors]
        if len(set(symptom_ids)) != len(symptom_ids):
            raise ValueError("duplicate symptom id in catalogue")
        if len(set(factor_ids)) != len(factor_ids):
            raise ValueError("duplicate risk factor id in catalogue")
        shared = set(symptom_ids) & set(factor_ids)
        if shared:
            raise ValueError(f"ids shared by symptoms and risk factors: {sorted(shared)}")
        missing = [level for level in TriageLevel if level not in self.levels]
        if missing:
            raise ValueError(f"no profile for levels {[int(level) for level in missing]}")
        for level, profile in self.levels.items():
            if profile.level != level:
                raise ValueError(f"profile for level {int(level)} declares level {int(profile.level)}")
        unknown = self.anaphylaxis_ids - set(symptom_ids)
        if unknown:
            raise ValueError(f"anaphylaxis ids not in catalogue: {sorted(unknown)}")
        return self

    def iter_symptoms(self) -> Iterator[Symptom]:
        """Yield every symptom in category and definition order."""

        for category in self.categories:
            yield from category.symptoms

    def symptom(self, symptom_id: str) -> Symptom:
        for symptom in self.iter_symptoms():
            if symptom.id == symptom_id:
                return symptom
        raise KeyError(symptom_id)

    def risk_factor(self, factor_id: str) -> RiskFactor:
        for factor in self.risk_factors:
            if factor.id == factor_id:
                return factor
        raise KeyError(factor_id)

    def profile(self, level: TriageLevel) -> LevelProfile:
        return self.levels[TriageLevel(level)]


class VitalSigns(StrictModel):
    temperature: Optional[float] = None
    heart_rate: Optional[float] = None
    resp_rate: Optional[float] = None
    systolic_bp: Optional[float] = None
    spo2: Optional[float] = None
    crt: Optional[float] = None


class PatientInput(StrictModel):
    """Snapshot of the triage form; replaced wholesale on every edit."""

    age_years: Optional[int] = Field(default=None, ge=0)
    age_months: Optional[int] = Field(default=None, ge=0)
    age_days: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    vitals: VitalSigns = VitalSigns()
    symptoms: FrozenSet[str] = frozenset()
    risk_factors: FrozenSet[str] = frozenset()

    @field_serializer("symptoms", "risk_factors")
    def _sorted_ids(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)


class VitalFinding(StrictModel):
    vital: str
    prefix: str
    tag: str
    level: TriageLevel

    @computed_field
    @property
    def label(self) -> str:
        return f"{self.prefix}: {self.tag} ({int(self.level)}级)"


class DosageRecommendation(StrictModel):
    """Anaphylaxis drug doses in mg; ``determined`` is False without a weight."""

    determined: bool
    epinephrine_mg: Optional[float] = None
    methylprednisolone_mg: Optional[Tuple[float, float]] = None
    hydrocortisone_mg: Optional[Tuple[float, float]] = None
    antihistamine_mg: Optional[float] = None


class TriageAssessment(StrictModel):
    level: TriageLevel
    result: LevelProfile
    findings: List[VitalFinding] = []
    reasons: List[str] = []
    escalated: bool = False
    dosage: Optional[DosageRecommendation] = None


class ScoreResult(StrictModel):
    name: str
    total: int
    symptom_id: Optional[str] = None


class NarrativeRequest(StrictModel):
    """Structured patient summary handed to the narrative generator."""

    age_years: Optional[int] = None
    age_months: Optional[int] = None
    age_days: Optional[int] = None
    weight: Optional[float] = None
    vitals: VitalSigns = VitalSigns()
    findings: Tuple[str, ...] = ()
    level_name: str
