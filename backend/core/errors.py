"""Error taxonomy for the chat pipeline and the HTTP handlers that map it."""

from __future__ import annotations

import logging
from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("harry.errors")

GENERIC_ERROR_MESSAGE = "Unable to chat with Harry right now. Please retry."


class ErrorKind(str, Enum):
    """Failure categories surfaced by the chat pipeline."""

    CONFIGURATION = "configuration"
    INPUT = "input"
    PROVIDER = "provider"
    MEMORY = "memory"
    SPEECH_CONFIGURATION = "speech_configuration"
    SPEECH_SYNTHESIS = "speech_synthesis"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.INPUT: 400,
    ErrorKind.PROVIDER: 502,
    ErrorKind.MEMORY: 502,
    ErrorKind.SPEECH_CONFIGURATION: 500,
    ErrorKind.SPEECH_SYNTHESIS: 502,
}


class ChatPipelineError(Exception):
    """Base class for every error the chat boundary knows how to report.

    Subclasses only pin ``kind``; the message is surfaced to the caller verbatim.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ConfigurationError(ChatPipelineError):
    """Raised when the LLM credentials or the session id are missing."""

    kind = ErrorKind.CONFIGURATION


class InputSanitizationError(ChatPipelineError):
    """Raised when a user message is empty, too long or looks like an injection."""

    kind = ErrorKind.INPUT


class ProviderResponseError(ChatPipelineError):
    """Raised when the LLM returns nothing usable or breaks the reply contract."""

    kind = ErrorKind.PROVIDER


class SummaryMemoryError(ChatPipelineError):
    """Raised when the rolling summary cannot be rebuilt."""

    kind = ErrorKind.MEMORY


class SpeechConfigurationError(ChatPipelineError):
    """Raised when TTS credentials are missing."""

    kind = ErrorKind.SPEECH_CONFIGURATION


class SpeechSynthesisError(ChatPipelineError):
    """Raised when the TTS provider rejects or fails a synthesis request."""

    kind = ErrorKind.SPEECH_SYNTHESIS


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def pipeline_exception_handler(request: Request, exc: ChatPipelineError) -> JSONResponse:
    """Translate a tagged pipeline error into its HTTP status and message."""

    logger.warning(
        "Chat pipeline error on %s %s: kind=%s message=%s",
        request.method,
        request.url.path,
        exc.kind.value,
        exc.message,
    )
    metrics = getattr(request.app.state, "metrics", None)
    if metrics is not None:
        metrics.record_error(exc.kind.value)
    return error_response(exc.status_code, exc.message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    """Return a generic JSON error response while logging the exception."""

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return error_response(500, "Something unexpected happened. Please try again later.")
