"""Integration fixtures that talk to the real FastAPI app."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend import main as backend_main
from backend.chat.models import ChatTurnResult, Sentiment
from backend.voice.base import SynthesizedAudio


@pytest.fixture()
def client():
    # Fresh client per test so session cookies never leak between cases.
    backend_main.memory_store.reset()
    with TestClient(backend_main.app) as test_client:
        yield test_client
    backend_main.memory_store.reset()


@pytest.fixture()
def stub_pipeline(monkeypatch):
    """Replace the turn and the synthesis with recorders returning canned values."""

    calls: dict[str, list] = {"turns": [], "speech": []}

    async def fake_execute_turn(turn):
        calls["turns"].append(turn)
        return ChatTurnResult(reply="Hi there", sentiment=Sentiment.HAPPY)

    async def fake_synthesize(text):
        calls["speech"].append(text)
        return SynthesizedAudio(base64="abc", mime_type="audio/mpeg")

    monkeypatch.setattr(backend_main.orchestrator, "execute_turn", fake_execute_turn)
    monkeypatch.setattr(backend_main.synthesizer, "synthesize", fake_synthesize)
    return calls
