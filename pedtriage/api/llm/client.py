"""Client abstraction over the LLM providers used for clinical narratives."""
from __future__ import annotations

import logging
from typing import Dict, List

import httpx

from ..core.config import Settings, settings

logger = logging.getLogger(__name__)

Messages = List[Dict[str, str]]


class LLMClient:
    """Simple HTTP client to talk with Gemini, OpenAI, OpenRouter or Ollama.

    Each call is a single attempt; retrying is left to the person asking for
    the narrative.
    """

    def __init__(self, cfg: Settings = settings):
        self.cfg = cfg

    @property
    def provider(self) -> str:
        return self.cfg.llm_provider.lower()

    async def generate(self, messages: Messages, *, temperature: float | None = None) -> str:
        """Generate a completion using the configured provider."""

        temperature = temperature if temperature is not None else self.cfg.temperature
        provider = self.provider
        logger.info("Requesting narrative from %s (%s)", provider, self.cfg.llm_model)
        if provider == "gemini":
            return await self._call_gemini(messages, temperature)
        if provider == "openai":
            return await self._call_openai(messages, temperature)
        if provider == "openrouter":
            return await self._call_openrouter(messages, temperature)
        if provider == "ollama":
            return await self._call_ollama(messages, temperature)
        if provider == "mock":
            return self._call_mock(messages)
        raise ValueError(f"Unsupported provider: {self.cfg.llm_provider}")

    async def _post(self, url: str, payload: Dict, headers: Dict[str, str] | None = None) -> Dict:
        async with httpx.AsyncClient(timeout=self.cfg.request_timeout_s) as client:
            response = await client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            return response.json()

    async def _call_gemini(self, messages: Messages, temperature: float) -> str:
        if not self.cfg.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is not configured")
        url = f"{self.cfg.gemini_base_url.rstrip('/')}/models/{self.cfg.llm_model}:generateContent"
        system = "\n".join(m["content"] for m in messages if m["role"] == "system")
        payload: Dict = {
            "contents": [
                {"role": "user", "parts": [{"text": m["content"]}]}
                for m in messages
                if m["role"] != "system"
            ],
            "generationConfig": {"temperature": temperature},
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}
        data = await self._post(url, payload, {"x-goog-api-key": self.cfg.gemini_api_key})
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts).strip()

    async def _call_openai(self, messages: Messages, temperature: float) -> str:
        url = f"{self.cfg.openai_base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {self.cfg.openai_api_key}"}
        payload = {
            "model": self.cfg.llm_model,
            "temperature": temperature,
            "messages": messages,
        }
        data = await self._post(url, payload, headers)
        return data["choices"][0]["message"]["content"].strip()

    async def _call_openrouter(self, messages: Messages, temperature: float) -> str:
        url = f"{self.cfg.openrouter_base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.cfg.openrouter_api_key}",
            "HTTP-Referer": "https://pedtriage.local/",
            "X-Title": "PedTriage",
        }
        payload = {
            "model": self.cfg.llm_model,
            "temperature": temperature,
            "messages": messages,
        }
        data = await self._post(url, payload, headers)
        return data["choices"][0]["message"]["content"].strip()

    async def _call_ollama(self, messages: Messages, temperature: float) -> str:
        url = f"{self.cfg.ollama_base_url.rstrip('/')}/api/chat"
        payload = {
            "model": self.cfg.llm_model,
            "options": {"temperature": temperature},
            "messages": messages,
            "stream": False,
        }
        data = await self._post(url, payload)
        return data.get("message", {}).get("content", "").strip()

    @staticmethod
    def _call_mock(messages: Messages) -> str:
        """Deterministic offline narrative echoing the prompt's patient block."""

        user = messages[-1]["content"] if messages else ""
        summary = [line.strip() for line in user.splitlines() if line.strip().startswith("-")]
        return "\n".join(["【病情评估】(离线模拟)", *summary])


client = LLMClient()
