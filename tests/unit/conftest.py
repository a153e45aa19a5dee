"""Pytest unit test fixtures."""

from __future__ import annotations

from typing import Any, Mapping

import pytest

from backend.llm.base import ChatModel, LLMMessage
from backend.memory.store import SummaryMemoryStore


class FakeChatModel(ChatModel):
    """Chat model that replays queued responses instead of calling a provider."""

    provider = "fake"
    credential_name = "FAKE_API_KEY"

    def __init__(self, responses: list[Any] | None = None, api_key: str | None = "test-key") -> None:
        super().__init__(api_key, "fake-model", temperature=0.0, max_tokens=256)
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    async def invoke(
        self,
        system: str,
        user: str,
        *,
        metadata: Mapping[str, str] | None = None,
    ) -> LLMMessage:
        self.calls.append({"system": system, "user": user, "metadata": dict(metadata or {})})
        return await super().invoke(system, user, metadata=metadata)

    async def _complete(self, api_key: str, system: str, user: str) -> LLMMessage:
        if not self.responses:
            raise AssertionError("FakeChatModel has no queued response")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            # Coroutine functions let a test hold the call open.
            item = await item()
        return item if isinstance(item, LLMMessage) else LLMMessage(content=item)


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def summary_model() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture()
def chat_model() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture()
def unconfigured_chat_model() -> FakeChatModel:
    return FakeChatModel(api_key=None)


@pytest.fixture()
def memory_store(summary_model, fake_clock):
    return SummaryMemoryStore(summary_model, ttl_seconds=3600, clock=fake_clock)
