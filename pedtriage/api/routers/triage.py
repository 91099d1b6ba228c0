"""API endpoints for triage assessment, dosing and narratives."""
from __future__ import annotations

from fastapi import APIRouter

from ...content import load_catalogue
from ...core.dosage import calculate_dosage
from ...core.orchestrator import triage
from ...schemas.triage import Catalogue, DosageRecommendation, PatientInput, TriageAssessment
from ..schemas.triage import DosageRequest, NarrativeResponse
from ..services.narrative_service import narrative_service

router = APIRouter(prefix="/api", tags=["triage"])


@router.get("/catalogue", response_model=Catalogue)
async def get_catalogue() -> Catalogue:
    return load_catalogue()


@router.post("/triage/assess", response_model=TriageAssessment)
async def assess(payload: PatientInput) -> TriageAssessment:
    return triage(payload)


@router.post("/dosage", response_model=DosageRecommendation)
async def dosage(payload: DosageRequest) -> DosageRecommendation:
    return calculate_dosage(payload.weight, payload.age_years)


@router.post("/narrative", response_model=NarrativeResponse)
async def narrative(payload: PatientInput) -> NarrativeResponse:
    assessment, text = await narrative_service.for_patient(payload)
    return NarrativeResponse(level_name=assessment.result.name, text=text)
