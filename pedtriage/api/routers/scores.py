"""Endpoints for the GCS and PTS calculators."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException

from ...core.orchestrator import triage
from ...core.scores import (
    ScoreInputError,
    UnknownScoreError,
    apply_score,
    available_scores,
    run_score,
)
from ..schemas.triage import ScoreInfo, ScoreRequest, ScoreResponse

router = APIRouter(prefix="/api/scores", tags=["scores"])


@router.get("/", response_model=List[ScoreInfo])
async def list_scores() -> List[ScoreInfo]:
    return [
        ScoreInfo(
            name=definition.name,
            components={key: list(values) for key, values in definition.components.items()},
            injects=list(definition.injects),
        )
        for definition in available_scores().values()
    ]


@router.post("/{name}", response_model=ScoreResponse)
async def compute_score(name: str, payload: ScoreRequest) -> ScoreResponse:
    try:
        result = run_score(name, payload.components)
    except UnknownScoreError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ScoreInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if payload.patient is None:
        return ScoreResponse(result=result)
    patient = apply_score(payload.patient, result)
    return ScoreResponse(result=result, patient=patient, assessment=triage(patient))
