"""Deterministic triage core: rules, scores, dosing and session state."""

from .orchestrator import build_narrative_request, triage
from .session import ItemKind, PendingConfirmation, SelectionState, TriageSession

__all__ = [
    "ItemKind",
    "PendingConfirmation",
    "SelectionState",
    "TriageSession",
    "build_narrative_request",
    "triage",
]
