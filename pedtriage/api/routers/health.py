"""Health check endpoint."""
from __future__ import annotations

from fastapi import APIRouter

from ... import __version__
from ...content import load_catalogue
from ..core.config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
def healthcheck() -> dict[str, str]:
    return {
        "status": "ok",
        "version": __version__,
        "catalogue": load_catalogue().version,
        "provider": settings.llm_provider,
        "model": settings.llm_model,
    }
