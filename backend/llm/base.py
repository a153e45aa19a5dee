"""Chat model abstraction shared by the chat turn and the summary memory."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from backend.core.errors import ConfigurationError


@dataclass(slots=True)
class LLMMessage:
    """Raw completion content: a string, or a list of string / dict chunks."""

    content: str | list[Any]


class ChatModel(ABC):
    """A single-shot completion endpoint taking a system and a user message."""

    provider: str
    credential_name: str

    def __init__(
        self,
        api_key: str | None,
        model: str,
        *,
        temperature: float,
        max_tokens: int,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key.strip() if api_key else None
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._timeout = timeout
        self._client = http_client
        self._logger = logging.getLogger(f"harry.llm.{self.provider}")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(f"{self.credential_name} must be configured.")
        return self.api_key

    async def invoke(
        self,
        system: str,
        user: str,
        *,
        metadata: Mapping[str, str] | None = None,
    ) -> LLMMessage:
        """Send one completion request and return the raw message."""

        api_key = self.require_api_key()
        self._logger.debug(
            "Invoking %s model=%s metadata=%s",
            self.provider,
            self.model,
            dict(metadata or {}),
        )
        return await self._complete(api_key, system, user)

    @abstractmethod
    async def _complete(self, api_key: str, system: str, user: str) -> LLMMessage:
        """Provider-specific request and response handling."""

    async def _post_json(self, url: str, headers: dict[str, str], payload: dict[str, Any]) -> Any:
        if self._client is not None:
            response = await self._client.post(url, headers=headers, json=payload, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(url, headers=headers, json=payload)
        response.raise_for_status()
        return response.json()
