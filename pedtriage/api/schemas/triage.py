"""Request and response bodies for the triage API."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ...schemas.triage import PatientInput, ScoreResult, TriageAssessment


class ScoreInfo(BaseModel):
    name: str
    components: Dict[str, List[int]]
    injects: List[str]


class ScoreRequest(BaseModel):
    components: Dict[str, int]
    patient: Optional[PatientInput] = None


class ScoreResponse(BaseModel):
    result: ScoreResult
    patient: Optional[PatientInput] = None
    assessment: Optional[TriageAssessment] = None


class DosageRequest(BaseModel):
    weight: Optional[float] = Field(default=None, ge=0)
    age_years: Optional[int] = Field(default=None, ge=0)


class NarrativeResponse(BaseModel):
    level_name: str
    text: str
