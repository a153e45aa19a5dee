"""Dataclasses representing per-session summary memory."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SessionMemoryEntry:
    """Rolling summary for one session and the instant it stops being readable."""

    summary: str | None
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now
