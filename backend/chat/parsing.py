"""Helpers that turn raw model output into plain text and structured replies."""

from __future__ import annotations

import re
from typing import Any

from backend.chat.models import ChatReply
from backend.llm.base import LLMMessage

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


def extract_text_content(message: LLMMessage) -> str:
    """Return the first non-empty text carried by a model message.

    String content is trimmed as-is. List content is scanned in order for a
    non-blank string chunk or a dict chunk with a non-blank ``text`` field.
    Returns an empty string when nothing qualifies.
    """

    content: Any = message.content
    if isinstance(content, str):
        return content.strip()

    if isinstance(content, list):
        for chunk in content:
            if isinstance(chunk, str):
                text = chunk.strip()
                if text:
                    return text
            elif isinstance(chunk, dict):
                value = chunk.get("text")
                if isinstance(value, str) and value.strip():
                    return value.strip()

    return ""


def parse_chat_reply(raw: str) -> ChatReply:
    """Validate ``raw`` against the reply contract.

    A surrounding Markdown code fence is tolerated. Raises ``ValueError``
    (pydantic's ``ValidationError`` included) on malformed JSON or schema
    violations.
    """

    match = _CODE_FENCE.search(raw)
    payload = match.group(1) if match else raw.strip()
    return ChatReply.model_validate_json(payload)
