"""FastAPI application bootstrap."""
from __future__ import annotations

from fastapi import FastAPI

from .. import __version__
from .core.config import settings
from .core.logging import register_middleware, setup_logging
from .core.security import enable_cors
from .routers import health, scores, triage

setup_logging(settings.log_level)

app = FastAPI(title="PedTriage API", version=__version__)

register_middleware(app)
enable_cors(app, settings.allowed_origins)

app.include_router(health.router)
app.include_router(triage.router)
app.include_router(scores.router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "PedTriage API", "health": "/health"}
