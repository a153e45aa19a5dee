"""Validation of untrusted user messages before they reach a prompt."""

from __future__ import annotations

import re

from backend.core.errors import InputSanitizationError

MAX_MESSAGE_LENGTH = 2000

PROMPT_INJECTION_PATTERNS = (
    re.compile(r"ignore\s+(?:all|previous)\s+(?:rules|instructions)", re.IGNORECASE),
    re.compile(r"system\s+prompt", re.IGNORECASE),
    re.compile(r"forget\s+what\s+I\s+said", re.IGNORECASE),
    re.compile(r"pretend\s+to\s+be\s+", re.IGNORECASE),
    re.compile(r"you\s+are\s+no\s+longer", re.IGNORECASE),
)


def sanitize_user_message(value: object) -> str:
    """Return the trimmed message or raise ``InputSanitizationError``.

    Rejects non-strings, blank or oversized messages and common
    prompt-injection phrasing.
    """

    if not isinstance(value, str):
        raise InputSanitizationError("Message must be a string.")

    trimmed = value.strip()
    if not trimmed:
        raise InputSanitizationError("Message cannot be empty.")

    if len(trimmed) > MAX_MESSAGE_LENGTH:
        raise InputSanitizationError("Message exceeds length limit.")

    if any(pattern.search(trimmed) for pattern in PROMPT_INJECTION_PATTERNS):
        raise InputSanitizationError("Message rejected due to suspected prompt-injection attempt.")

    return trimmed
