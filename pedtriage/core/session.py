"""In-memory triage session: form edits, selection state machine and narrative state.

The session owns one immutable :class:`PatientInput` snapshot and replaces it on
every accepted edit. Symptoms and risk factors that carry confirmation text go
through a single pending-confirmation slot before they count as selected; the
AI narrative is generated single-flight and cleared whenever a new finding is
selected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, FrozenSet, Mapping, Optional, Tuple, Union

from ..content import load_catalogue
from ..schemas.triage import (
    Catalogue,
    NarrativeRequest,
    PatientInput,
    RiskFactor,
    ScoreResult,
    Symptom,
    TriageAssessment,
)
from .normalizer.units import VITAL_FIELDS, accepts_decimal, accepts_integer, to_decimal, to_integer
from .orchestrator import NARRATIVE_FAILURE, build_narrative_request, triage
from .scores import apply_score, run_score

__all__ = [
    "ItemKind",
    "NarrativeGenerator",
    "PendingConfirmation",
    "SelectionState",
    "TriageSession",
]

logger = logging.getLogger(__name__)

NarrativeGenerator = Callable[[NarrativeRequest], Awaitable[str]]

_AGE_FIELDS = {"years": "age_years", "months": "age_months", "days": "age_days"}


class SelectionState(str, Enum):
    UNSELECTED = "unselected"
    PENDING_CONFIRMATION = "pending_confirmation"
    SELECTED = "selected"


class ItemKind(str, Enum):
    SYMPTOM = "symptom"
    RISK_FACTOR = "risk_factor"


@dataclass(frozen=True)
class PendingConfirmation:
    kind: ItemKind
    item_id: str
    name: str
    text: str


class TriageSession:
    def __init__(self, catalogue: Catalogue | None = None) -> None:
        self.catalogue = catalogue or load_catalogue()
        self.patient = PatientInput()
        self.pending: Optional[PendingConfirmation] = None
        self.narrative: Optional[str] = None
        self.generating = False
        self._epoch = 0

    # -- form edits -----------------------------------------------------

    def edit_age(self, part: str, raw: str) -> bool:
        """Apply an age edit (``years``/``months``/``days``); rejected text is ignored."""

        field = _AGE_FIELDS[part]
        if not accepts_integer(raw):
            logger.debug("Ignoring non-integer edit for %s", field)
            return False
        self._update(**{field: to_integer(raw)})
        return True

    def edit_weight(self, raw: str) -> bool:
        if not accepts_decimal(raw):
            logger.debug("Ignoring non-decimal weight edit")
            return False
        self._update(weight=to_decimal(raw))
        return True

    def edit_vital(self, name: str, raw: str) -> bool:
        if name not in VITAL_FIELDS:
            raise KeyError(name)
        if not accepts_decimal(raw):
            logger.debug("Ignoring non-decimal edit for %s", name)
            return False
        vitals = self.patient.vitals.model_copy(update={name: to_decimal(raw)})
        self._update(vitals=vitals)
        return True

    def reset(self) -> None:
        self.patient = PatientInput()
        self.pending = None
        self._invalidate_narrative()

    def _invalidate_narrative(self) -> None:
        self.narrative = None
        self._epoch += 1

    def _update(self, **changes: object) -> None:
        self.patient = self.patient.model_copy(update=changes)

    # -- selection state machine ----------------------------------------

    def _lookup(self, item_id: str) -> Tuple[ItemKind, Union[Symptom, RiskFactor]]:
        try:
            return ItemKind.SYMPTOM, self.catalogue.symptom(item_id)
        except KeyError:
            return ItemKind.RISK_FACTOR, self.catalogue.risk_factor(item_id)

    def _selected(self, kind: ItemKind) -> FrozenSet[str]:
        if kind is ItemKind.SYMPTOM:
            return self.patient.symptoms
        return self.patient.risk_factors

    def _store(self, kind: ItemKind, ids: FrozenSet[str]) -> None:
        if kind is ItemKind.SYMPTOM:
            self._update(symptoms=ids)
        else:
            self._update(risk_factors=ids)

    def _select(self, kind: ItemKind, item_id: str) -> None:
        self._store(kind, self._selected(kind) | {item_id})
        self._invalidate_narrative()

    def state_of(self, item_id: str) -> SelectionState:
        kind, _ = self._lookup(item_id)
        if item_id in self._selected(kind):
            return SelectionState.SELECTED
        if self.pending is not None and self.pending.item_id == item_id:
            return SelectionState.PENDING_CONFIRMATION
        return SelectionState.UNSELECTED

    def toggle(self, item_id: str) -> SelectionState:
        """Toggle a symptom or risk factor; items with confirmation text go pending first."""

        kind, item = self._lookup(item_id)
        selected = self._selected(kind)
        if item_id in selected:
            self._store(kind, selected - {item_id})
            if kind is ItemKind.RISK_FACTOR:
                self._invalidate_narrative()
            return SelectionState.UNSELECTED
        if item.confirmation:
            self.pending = PendingConfirmation(kind, item.id, item.name, item.confirmation)
            return SelectionState.PENDING_CONFIRMATION
        self._select(kind, item_id)
        return SelectionState.SELECTED

    def toggle_symptom(self, symptom_id: str) -> SelectionState:
        self.catalogue.symptom(symptom_id)
        return self.toggle(symptom_id)

    def toggle_risk_factor(self, factor_id: str) -> SelectionState:
        self.catalogue.risk_factor(factor_id)
        return self.toggle(factor_id)

    def confirm(self) -> Optional[str]:
        """Select the pending item; returns its id, or None when nothing is pending."""

        if self.pending is None:
            return None
        pending, self.pending = self.pending, None
        self._select(pending.kind, pending.item_id)
        return pending.item_id

    def cancel(self) -> None:
        self.pending = None

    # -- calculators and results ----------------------------------------

    def apply_score(self, name: str, components: Mapping[str, int]) -> ScoreResult:
        """Run a score calculator and inject its band tag into the selected symptoms."""

        result = run_score(name, components)
        before = self.patient.symptoms
        self.patient = apply_score(self.patient, result)
        if result.symptom_id and result.symptom_id not in before:
            self._invalidate_narrative()
        return result

    def assess(self) -> TriageAssessment:
        return triage(self.patient, self.catalogue)

    async def request_narrative(self, generate: NarrativeGenerator) -> Optional[str]:
        """Generate the narrative once and store it.

        A request while one is in flight is a no-op returning None. Generator
        failures store the failure placeholder. A result that arrives after the
        narrative was invalidated is discarded and None is returned.
        """

        if self.generating:
            logger.debug("Narrative generation already in flight")
            return None
        self.generating = True
        epoch = self._epoch
        try:
            request = build_narrative_request(self.patient, self.assess(), self.catalogue)
            text = await generate(request)
        except Exception as exc:  # any generator failure ends as the placeholder
            logger.warning("Narrative generation failed: %s", exc)
            text = NARRATIVE_FAILURE
        finally:
            self.generating = False
        if epoch != self._epoch:
            logger.debug("Discarding narrative for a superseded selection")
            return None
        self.narrative = text
        return text
