import base64
import json

import httpx
import pytest

from backend.core.errors import SpeechConfigurationError, SpeechSynthesisError
from backend.voice.elevenlabs import DEFAULT_MODEL_ID, ElevenLabsSynthesizer


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_throws_when_api_key_missing():
    synthesizer = ElevenLabsSynthesizer(None, "voice")

    with pytest.raises(SpeechConfigurationError, match="ELEVENLABS_API_KEY"):
        await synthesizer.synthesize("hello")


@pytest.mark.anyio
async def test_throws_when_voice_id_missing():
    synthesizer = ElevenLabsSynthesizer("secret", "  ")

    with pytest.raises(SpeechConfigurationError, match="ELEVENLABS_VOICE_ID"):
        await synthesizer.synthesize("hello")


@pytest.mark.anyio
async def test_rejects_empty_text():
    synthesizer = ElevenLabsSynthesizer("secret", "voice")

    with pytest.raises(SpeechSynthesisError, match="empty response"):
        await synthesizer.synthesize("   ")


@pytest.mark.anyio
async def test_returns_base64_audio_when_synthesis_succeeds():
    audio = bytes([0, 1, 2, 3])
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=audio, headers={"Content-Type": "audio/mpeg"})

    async with _client(handler) as client:
        synthesizer = ElevenLabsSynthesizer("secret", "voice", model_id="test-model", http_client=client)
        result = await synthesizer.synthesize("  Hello friend ")

    assert result.mime_type == "audio/mpeg"
    assert result.base64 == base64.b64encode(audio).decode("ascii")
    assert result.to_payload() == {"base64": result.base64, "mimeType": "audio/mpeg"}

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.elevenlabs.io/v1/text-to-speech/voice/stream"
    assert request.headers["xi-api-key"] == "secret"
    body = json.loads(request.content)
    assert body["text"] == "Hello friend"
    assert body["model_id"] == "test-model"
    assert body["voice_settings"] == {"stability": 0.3, "similarity_boost": 0.85}


@pytest.mark.anyio
async def test_defaults_model_and_mime_type():
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["model_id"] == DEFAULT_MODEL_ID
        return httpx.Response(200, content=b"\xff\xfb")

    async with _client(handler) as client:
        synthesizer = ElevenLabsSynthesizer("secret", "voice", model_id="  ", http_client=client)
        result = await synthesizer.synthesize("Hello")

    assert result.mime_type == "audio/mpeg"


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (
            httpx.Response(429, json={"detail": "quota exceeded"}),
            "ElevenLabs synthesis failed (429): quota exceeded",
        ),
        (
            httpx.Response(401, json={"detail": {"status": "invalid"}, "message": "bad key"}),
            "ElevenLabs synthesis failed (401): bad key",
        ),
        (
            httpx.Response(400, json={"error": "voice not found"}),
            "ElevenLabs synthesis failed (400): voice not found",
        ),
        (
            httpx.Response(503, text="upstream unavailable"),
            "ElevenLabs synthesis failed (503): upstream unavailable",
        ),
        (httpx.Response(500, json={"other": 1}), "ElevenLabs synthesis failed (500)"),
        (httpx.Response(502, content=b""), "ElevenLabs synthesis failed (502)"),
    ],
)
async def test_describes_provider_errors(response, expected):
    async with _client(lambda request: response) as client:
        synthesizer = ElevenLabsSynthesizer("secret", "voice", http_client=client)
        with pytest.raises(SpeechSynthesisError) as excinfo:
            await synthesizer.synthesize("Hello")

    assert str(excinfo.value) == expected


@pytest.mark.anyio
async def test_timeout_is_a_synthesis_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with _client(handler) as client:
        synthesizer = ElevenLabsSynthesizer("secret", "voice", http_client=client)
        with pytest.raises(SpeechSynthesisError, match="timed out"):
            await synthesizer.synthesize("Hello")
