"""Google Gemini ``generateContent`` client."""

from __future__ import annotations

from typing import Any

import httpx

from backend.llm.base import ChatModel, LLMMessage

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class GeminiChatModel(ChatModel):
    """Return Gemini candidates as a list of ``{"text": ...}`` parts."""

    provider = "gemini"
    credential_name = "GEMINI_API_KEY"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_GEMINI_MODEL,
        *,
        base_url: str = "https://generativelanguage.googleapis.com",
        temperature: float = 0.4,
        max_tokens: int = 2048,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            api_key,
            (model or "").strip() or DEFAULT_GEMINI_MODEL,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            http_client=http_client,
        )
        self.base_url = base_url.rstrip("/")

    async def _complete(self, api_key: str, system: str, user: str) -> LLMMessage:
        model_name = self.model if self.model.startswith("models/") else f"models/{self.model}"
        url = f"{self.base_url}/v1beta/{model_name}:generateContent"
        payload = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": user}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
            },
        }
        data = await self._post_json(url, {"x-goog-api-key": api_key}, payload)
        return LLMMessage(content=self._parts(data))

    @staticmethod
    def _parts(data: Any) -> list[Any]:
        if not isinstance(data, dict):
            return []
        candidates = data.get("candidates") or []
        if not candidates or not isinstance(candidates[0], dict):
            return []
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return list(parts) if isinstance(parts, list) else []
