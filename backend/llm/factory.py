"""Build chat models from application settings."""

from __future__ import annotations

import httpx

from backend.core.config import Settings
from backend.llm.base import ChatModel
from backend.llm.gemini import GeminiChatModel
from backend.llm.openrouter import OpenRouterChatModel


def build_chat_model(
    settings: Settings,
    *,
    temperature: float,
    max_tokens: int,
    http_client: httpx.AsyncClient | None = None,
) -> ChatModel:
    if settings.llm_provider == "openrouter":
        return OpenRouterChatModel(
            settings.openrouter_api_key,
            settings.openrouter_model,
            referer=settings.openrouter_referer,
            title=settings.openrouter_title,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=settings.llm_timeout_seconds,
            http_client=http_client,
        )

    return GeminiChatModel(
        settings.gemini_api_key,
        settings.gemini_model,
        base_url=settings.gemini_base_url,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=settings.llm_timeout_seconds,
        http_client=http_client,
    )
