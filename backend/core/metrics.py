"""Lightweight in-memory metrics collector."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricSnapshot:
    total_turns: int
    sentiments: Dict[str, int]
    errors: Dict[str, int]


class MetricsCollector:
    """Thread-safe counter storage for chat turn outcomes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_turns = 0
        self._sentiments: Counter[str] = Counter()
        self._errors: Counter[str] = Counter()

    def record_turn(self, sentiment: str) -> None:
        with self._lock:
            self._total_turns += 1
            self._sentiments[sentiment] += 1

    def record_error(self, kind: str) -> None:
        with self._lock:
            self._errors[kind] += 1

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_turns=self._total_turns,
                sentiments=dict(self._sentiments),
                errors=dict(self._errors),
            )
