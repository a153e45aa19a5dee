"""HTTP boundary for chat turns."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from backend.chat.models import ChatTurnInput
from backend.chat.orchestrator import ChatOrchestrator
from backend.core.config import Settings
from backend.core.errors import GENERIC_ERROR_MESSAGE, ChatPipelineError, error_response
from backend.core.metrics import MetricsCollector
from backend.session.cookies import (
    SESSION_COOKIE_MAX_AGE_SECONDS,
    SESSION_COOKIE_NAME,
    resolve_session_id,
)
from backend.voice.base import SpeechSynthesizer

logger = logging.getLogger("harry.api.chat")


def create_chat_router(
    orchestrator: ChatOrchestrator,
    synthesizer: SpeechSynthesizer,
    settings: Settings,
    metrics: MetricsCollector,
) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["chat"])

    @router.post("/chat")
    async def chat_endpoint(request: Request) -> JSONResponse:
        """Run one turn and return the reply, its sentiment and synthesized audio.

        Domain errors raised below are rendered by the ``ChatPipelineError``
        exception handler registered on the app.
        """

        try:
            payload = json.loads(await request.body())
        except ValueError:
            return error_response(400, "Request body must be valid JSON.")

        message = payload.get("message") if isinstance(payload, dict) else None
        if not isinstance(message, str):
            return error_response(400, "Message is required.")

        session = resolve_session_id(request.headers.get("cookie"))

        try:
            result = await orchestrator.execute_turn(
                ChatTurnInput(session_id=session.session_id, message=message)
            )
            audio = await synthesizer.synthesize(result.reply)
        except ChatPipelineError:
            raise
        except Exception:  # noqa: BLE001
            logger.exception("Chat turn failed for session=%s", session.session_id)
            metrics.record_error("unclassified")
            return error_response(502, GENERIC_ERROR_MESSAGE)

        metrics.record_turn(result.sentiment.value)

        response = JSONResponse(
            content={
                "reply": result.reply,
                "sentiment": result.sentiment.value,
                "audio": audio.to_payload(),
            }
        )
        if session.should_set_cookie:
            response.set_cookie(
                key=SESSION_COOKIE_NAME,
                value=session.session_id,
                max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
                path="/",
                httponly=True,
                samesite="lax",
                secure=settings.secure_cookies,
            )
        return response

    return router
