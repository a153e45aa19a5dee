from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def chat_hello_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "chat_hello.json").read_text(encoding="utf-8"))


@pytest.fixture
def structured_reply(fixtures_dir: Path) -> str:
    return (fixtures_dir / "structured_reply.json").read_text(encoding="utf-8")


@pytest.fixture
def anyio_backend():
    return "asyncio"
