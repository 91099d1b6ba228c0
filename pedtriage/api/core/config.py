"""Application configuration loaded from the environment."""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Narrative generator
    llm_provider: str = Field(default="gemini", alias="LLM_PROVIDER")
    llm_model: str = Field(default="gemini-2.5-flash", alias="LLM_MODEL")
    gemini_api_key: str = Field(default="", alias=AliasChoices("GEMINI_API_KEY", "API_KEY"))
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta", alias="GEMINI_BASE_URL"
    )
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openrouter_api_key: str = Field(default="", alias="OPENROUTER_API_KEY")
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1", alias="OPENROUTER_BASE_URL")
    ollama_base_url: str = Field(default="http://127.0.0.1:11434", alias="OLLAMA_BASE_URL")
    temperature: float = Field(default=0.2, alias="TEMPERATURE")
    # None keeps the request open until the provider answers.
    request_timeout_s: Optional[float] = Field(default=None, alias="REQUEST_TIMEOUT_S")

    # Service
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: str = Field(
        default="*",
        alias=AliasChoices("CORS_ALLOW_ORIGINS", "ALLOWED_ORIGINS"),
    )

    @property
    def allowed_origins(self) -> List[str]:
        value = self.cors_allow_origins.strip()
        if not value or value == "*":
            return ["*"]
        items = [item.strip() for item in value.split(",") if item.strip()]
        return items or ["*"]

    @field_validator("temperature", mode="after")
    @classmethod
    def _clamp_temperature(cls, value: float) -> float:
        return min(max(value, 0.0), 1.0)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
