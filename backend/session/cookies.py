"""Anonymous session identity carried in a cookie.

Only simple ``name=value`` parsing is implemented so the session handling stays
independent of the web framework and easy to unit test.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from typing import Callable
from urllib.parse import unquote

SESSION_COOKIE_NAME = "harry_session"
SESSION_COOKIE_MAX_AGE_SECONDS = 60 * 60

_SESSION_ID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


@dataclass(slots=True, frozen=True)
class SessionResolution:
    """Session id for a request and whether the response must set the cookie."""

    session_id: str
    should_set_cookie: bool


def new_session_id() -> str:
    return str(uuid.uuid4())


def _safe_decode(value: str) -> str:
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


def parse_cookie_header(header: str | None) -> dict[str, str]:
    """Parse a raw ``Cookie`` header into a name/value mapping."""

    if not header:
        return {}

    cookies: dict[str, str] = {}
    for part in header.split(";"):
        trimmed = part.strip()
        if not trimmed:
            continue

        equals_index = trimmed.find("=")
        if equals_index <= 0:
            continue

        name = trimmed[:equals_index].strip()
        value = trimmed[equals_index + 1 :].strip()
        if not name or not value:
            continue

        cookies[name] = _safe_decode(value)

    return cookies


def is_valid_session_id(value: str | None) -> bool:
    """Accept only UUID v1-v5 strings.

    Keeps arbitrary cookie values out of the memory store's keys.
    """

    if not value:
        return False
    return _SESSION_ID_PATTERN.fullmatch(value) is not None


def resolve_session_id(
    cookie_header: str | None,
    generate: Callable[[], str] = new_session_id,
) -> SessionResolution:
    """Reuse the session cookie when valid, otherwise mint a fresh id."""

    existing = parse_cookie_header(cookie_header).get(SESSION_COOKIE_NAME)
    if is_valid_session_id(existing):
        return SessionResolution(session_id=existing, should_set_cookie=False)  # type: ignore[arg-type]

    return SessionResolution(session_id=generate(), should_set_cookie=True)
