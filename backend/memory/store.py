"""Per-session rolling summary memory with a fixed time-to-live."""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable

import httpx

from backend.chat.parsing import extract_text_content
from backend.chat.prompts import build_summary_system_prompt, build_summary_user_prompt
from backend.core.errors import SummaryMemoryError
from backend.llm.base import ChatModel

from .models import SessionMemoryEntry

DEFAULT_TTL_SECONDS = 60 * 60

logger = logging.getLogger("harry.memory")


class MemoryStore(ABC):
    """Abstract interface for reading and rebuilding session summaries."""

    @abstractmethod
    def get(self, session_id: str) -> str | None:
        """Return the live summary for a session, if any."""

    @abstractmethod
    async def rebuild(
        self,
        session_id: str,
        user_message: str,
        assistant_reply: str,
        previous_summary: str | None = None,
    ) -> str:
        """Fold the latest turn into the session summary and return it."""

    @abstractmethod
    def reset(self, session_id: str | None = None) -> None:
        """Drop one session's summary, or every summary when no id is given."""


class SummaryMemoryStore(MemoryStore):
    """In-process summary store.

    Entries expire ``ttl_seconds`` after they are first touched; reads and
    rebuilds never push the expiry back. Expired entries are pruned lazily on
    the next ``get`` or ``rebuild``. The lock only guards the mapping and is
    never held while the model is being called.
    """

    def __init__(
        self,
        chat_model: ChatModel,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        project: str | None = None,
    ) -> None:
        self._chat_model = chat_model
        self._ttl = ttl_seconds
        self._clock = clock
        self._project = project
        self._entries: dict[str, SessionMemoryEntry] = {}
        self._lock = threading.Lock()

    def _prune_locked(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Pruned %d expired session summaries", len(expired))

    def _ensure_entry(self, session_id: str) -> SessionMemoryEntry:
        with self._lock:
            now = self._clock()
            self._prune_locked(now)
            entry = self._entries.get(session_id)
            if entry is None:
                entry = SessionMemoryEntry(summary=None, expires_at=now + self._ttl)
                self._entries[session_id] = entry
            return entry

    def get(self, session_id: str) -> str | None:
        return self._ensure_entry(session_id).summary

    async def rebuild(
        self,
        session_id: str,
        user_message: str,
        assistant_reply: str,
        previous_summary: str | None = None,
    ) -> str:
        entry = self._ensure_entry(session_id)
        prior = previous_summary if previous_summary is not None else entry.summary

        try:
            response = await self._chat_model.invoke(
                build_summary_system_prompt(),
                build_summary_user_prompt(user_message, assistant_reply, prior),
                metadata={"project": self._project or "", "source": "summary_memory"},
            )
        except httpx.TimeoutException as exc:
            raise SummaryMemoryError("Summary model timed out.") from exc

        refreshed = extract_text_content(response)
        if not refreshed:
            raise SummaryMemoryError("Summary model returned an empty summary.")

        summary = refreshed.strip()
        with self._lock:
            # A reset or expiry during the model call drops the result.
            if self._entries.get(session_id) is entry:
                entry.summary = summary
        return summary

    def reset(self, session_id: str | None = None) -> None:
        with self._lock:
            if session_id is None:
                self._entries.clear()
            else:
                self._entries.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
