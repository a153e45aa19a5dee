"""Speech synthesis abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(slots=True)
class SynthesizedAudio:
    """Encoded audio for one assistant reply."""

    base64: str
    mime_type: str

    def to_payload(self) -> dict[str, str]:
        return {"base64": self.base64, "mimeType": self.mime_type}


class SpeechSynthesizer(ABC):
    """Turns reply text into playable audio."""

    name: str

    @abstractmethod
    async def synthesize(self, text: str) -> SynthesizedAudio:
        """Return base64 audio for ``text``."""
