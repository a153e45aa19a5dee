"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TRACING_PROJECT = "harry-potter-3d-chatbot"


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="Harry Avatar Chat", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")

    frontend_origin: AnyHttpUrl | None = Field(
        default=None,
        description="Allowed frontend origin (CORS). If omitted, defaults to localhost dev server.",
    )
    additional_origins: List[AnyHttpUrl] = Field(
        default_factory=list,
        description="Additional allowed CORS origins for multi-client deployments.",
    )

    llm_provider: Literal["gemini", "openrouter"] = Field(
        default="gemini",
        description="Which chat model backend answers turns and rebuilds summaries.",
    )
    gemini_api_key: str | None = Field(default=None, description="Google Gemini API key.")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model identifier.")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Gemini REST API base URL.",
    )

    openrouter_api_key: str | None = Field(
        default=None,
        description="OpenRouter API key, used when llm_provider is 'openrouter'.",
    )
    openrouter_model: str = Field(
        default="meta-llama/llama-3.3-70b-instruct",
        description="OpenRouter model identifier.",
    )
    openrouter_referer: str | None = Field(
        default=None,
        description="Referer header required by OpenRouter (your app URL).",
    )
    openrouter_title: str | None = Field(
        default="Harry Avatar Chat",
        description="Title header sent to OpenRouter.",
    )

    llm_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-call LLM timeout.")
    chat_temperature: float = Field(default=0.4, ge=0, le=2)
    chat_max_tokens: int = Field(default=2048, ge=1)
    summary_temperature: float = Field(default=0.2, ge=0, le=2)
    summary_max_tokens: int = Field(default=512, ge=1)

    elevenlabs_api_key: str | None = Field(default=None, description="ElevenLabs API key.")
    elevenlabs_voice_id: str | None = Field(default=None, description="ElevenLabs voice identity.")
    elevenlabs_model_id: str | None = Field(
        default=None,
        description="ElevenLabs synthesis model; blank falls back to eleven_monolingual_v1.",
    )
    elevenlabs_base_url: str = Field(default="https://api.elevenlabs.io")
    tts_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-call TTS timeout.")

    session_ttl_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="Lifetime of a session's summary memory, counted from first touch.",
    )
    summary_failure_policy: Literal["strict", "best_effort"] = Field(
        default="strict",
        description="Whether a failed summary rebuild fails the whole turn.",
    )

    langchain_project: str | None = Field(default=None, description="Tracing project name.")
    langsmith_project: str | None = Field(default=None, description="Fallback tracing project name.")

    @property
    def cors_origins(self) -> list[str]:
        """Return the full list of allowed CORS origins."""

        origins: list[str] = []

        if self.frontend_origin:
            origins.append(str(self.frontend_origin).rstrip("/"))
        else:
            origins.extend([
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            ])

        for origin in self.additional_origins:
            origins.append(str(origin).rstrip("/"))

        seen: set[str] = set()
        unique: list[str] = []
        for origin in origins:
            if origin not in seen:
                seen.add(origin)
                unique.append(origin)

        return unique

    @property
    def secure_cookies(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def tracing_project(self) -> str:
        for candidate in (self.langchain_project, self.langsmith_project):
            if candidate and candidate.strip():
                return candidate.strip()
        return DEFAULT_TRACING_PROJECT


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
