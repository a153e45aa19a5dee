"""OpenRouter chat-completions client."""

from __future__ import annotations

from typing import Any

import httpx

from backend.llm.base import ChatModel, LLMMessage

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class OpenRouterChatModel(ChatModel):
    """Return the first choice's message content as a string."""

    provider = "openrouter"
    credential_name = "OPENROUTER_API_KEY"

    def __init__(
        self,
        api_key: str | None,
        model: str,
        *,
        referer: str | None = None,
        title: str | None = None,
        temperature: float = 0.4,
        max_tokens: int = 2048,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            api_key,
            model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            http_client=http_client,
        )
        self._referer = referer
        self._title = title or "Harry Avatar Chat"

    async def _complete(self, api_key: str, system: str, user: str) -> LLMMessage:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if self._referer:
            headers["HTTP-Referer"] = self._referer
        if self._title:
            headers["X-Title"] = self._title

        payload = {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        data = await self._post_json(OPENROUTER_URL, headers, payload)
        return LLMMessage(content=self._first_choice(data))

    @staticmethod
    def _first_choice(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        choices = data.get("choices") or [{}]
        first = choices[0] if isinstance(choices[0], dict) else {}
        content = (first.get("message") or {}).get("content")
        return content if isinstance(content, str) else ""
