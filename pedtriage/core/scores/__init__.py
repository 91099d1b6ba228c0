"""Score package with registry and implementations."""

from . import gcs, pts  # noqa: F401
from .registry import (
    ScoreDefinition,
    ScoreInputError,
    UnknownScoreError,
    apply_score,
    available_scores,
    get_score,
    run_score,
)

__all__ = [
    "ScoreDefinition",
    "ScoreInputError",
    "UnknownScoreError",
    "apply_score",
    "available_scores",
    "get_score",
    "run_score",
]
