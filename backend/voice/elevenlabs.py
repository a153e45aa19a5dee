"""ElevenLabs text-to-speech client."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from backend.core.errors import SpeechConfigurationError, SpeechSynthesisError
from backend.voice.base import SpeechSynthesizer, SynthesizedAudio

DEFAULT_MODEL_ID = "eleven_monolingual_v1"
DEFAULT_MIME_TYPE = "audio/mpeg"
VOICE_SETTINGS = {"stability": 0.3, "similarity_boost": 0.85}


def _require(value: str | None, message: str) -> str:
    if value and value.strip():
        return value.strip()
    raise SpeechConfigurationError(message)


def build_synthesis_error(response: httpx.Response) -> SpeechSynthesisError:
    """Describe a failed synthesis using whatever the error body offers."""

    base_message = f"ElevenLabs synthesis failed ({response.status_code})"

    try:
        body: Any = response.json()
    except ValueError:
        fallback = response.text.strip()
        if fallback:
            return SpeechSynthesisError(f"{base_message}: {fallback}")
        return SpeechSynthesisError(base_message)

    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return SpeechSynthesisError(f"{base_message}: {value.strip()}")

    return SpeechSynthesisError(base_message)


class ElevenLabsSynthesizer(SpeechSynthesizer):
    """Call the ElevenLabs streaming endpoint and buffer the audio."""

    name = "elevenlabs"

    def __init__(
        self,
        api_key: str | None,
        voice_id: str | None,
        *,
        model_id: str | None = None,
        base_url: str = "https://api.elevenlabs.io",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._voice_id = voice_id
        self._model_id = (model_id or "").strip() or DEFAULT_MODEL_ID
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = http_client
        self._logger = logging.getLogger("harry.voice")

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._api_key.strip() and self._voice_id and self._voice_id.strip())

    async def synthesize(self, text: str) -> SynthesizedAudio:
        trimmed = text.strip()
        if not trimmed:
            raise SpeechSynthesisError("Cannot synthesize an empty response.")

        api_key = _require(self._api_key, "ELEVENLABS_API_KEY must be configured.")
        voice_id = _require(self._voice_id, "ELEVENLABS_VOICE_ID must be configured.")

        url = f"{self._base_url}/v1/text-to-speech/{voice_id}/stream"
        headers = {
            "Content-Type": "application/json",
            "Accept": DEFAULT_MIME_TYPE,
            "xi-api-key": api_key,
        }
        payload = {
            "text": trimmed,
            "model_id": self._model_id,
            "voice_settings": VOICE_SETTINGS,
        }

        try:
            if self._client is not None:
                response = await self._client.post(url, headers=headers, json=payload, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise SpeechSynthesisError("ElevenLabs synthesis timed out.") from exc

        if not response.is_success:
            raise build_synthesis_error(response)

        audio = response.content
        self._logger.debug("Synthesized %d bytes of audio with model=%s", len(audio), self._model_id)
        return SynthesizedAudio(
            base64=base64.b64encode(audio).decode("ascii"),
            mime_type=response.headers.get("content-type") or DEFAULT_MIME_TYPE,
        )
