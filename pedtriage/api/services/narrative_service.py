"""AI clinical narrative generation with a fixed failure placeholder."""
from __future__ import annotations

import logging
import time
from typing import Tuple

from ...core.orchestrator import NARRATIVE_FAILURE, build_narrative_request, triage
from ...schemas.triage import NarrativeRequest, PatientInput, TriageAssessment
from ..llm import prompts
from ..llm.client import LLMClient, client as default_client

logger = logging.getLogger(__name__)

FAILURE_PLACEHOLDER = NARRATIVE_FAILURE


class NarrativeService:
    """Turn a triage snapshot into free text; failures never reach the caller."""

    def __init__(self, *, client: LLMClient = default_client) -> None:
        self.client = client

    async def generate(self, request: NarrativeRequest) -> str:
        messages = prompts.build_messages(request)
        start = time.perf_counter()
        try:
            text = await self.client.generate(messages)
        except Exception as exc:  # network, auth and provider errors all end here
            logger.warning("Narrative generation failed: %s", exc)
            return FAILURE_PLACEHOLDER
        latency_ms = int((time.perf_counter() - start) * 1000)
        if not text or not text.strip():
            logger.warning("Narrative provider returned an empty response after %d ms", latency_ms)
            return FAILURE_PLACEHOLDER
        logger.info("Narrative generated in %d ms", latency_ms)
        return text.strip()

    async def for_patient(self, patient: PatientInput) -> Tuple[TriageAssessment, str]:
        assessment = triage(patient)
        request = build_narrative_request(patient, assessment)
        return assessment, await self.generate(request)


narrative_service = NarrativeService()
