"""FastAPI application entry point for the Harry avatar chat backend."""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.chat import create_chat_router
from backend.chat.orchestrator import ChatOrchestrator
from backend.core.config import get_settings
from backend.core.errors import ChatPipelineError, pipeline_exception_handler, unhandled_exception_handler
from backend.core.logging import configure_logging, request_id_middleware
from backend.core.metrics import MetricsCollector
from backend.llm.factory import build_chat_model
from backend.memory.store import SummaryMemoryStore
from backend.voice.elevenlabs import ElevenLabsSynthesizer

settings = get_settings()
logger = logging.getLogger("harry.app")

chat_model = build_chat_model(
    settings,
    temperature=settings.chat_temperature,
    max_tokens=settings.chat_max_tokens,
)
summary_model = build_chat_model(
    settings,
    temperature=settings.summary_temperature,
    max_tokens=settings.summary_max_tokens,
)
memory_store = SummaryMemoryStore(
    summary_model,
    ttl_seconds=settings.session_ttl_seconds,
    project=settings.tracing_project,
)
orchestrator = ChatOrchestrator(
    chat_model,
    memory_store,
    summary_failure_policy=settings.summary_failure_policy,
    project=settings.tracing_project,
)
synthesizer = ElevenLabsSynthesizer(
    settings.elevenlabs_api_key,
    settings.elevenlabs_voice_id,
    model_id=settings.elevenlabs_model_id,
    base_url=settings.elevenlabs_base_url,
    timeout=settings.tts_timeout_seconds,
)
metrics = MetricsCollector()

app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")
app.state.metrics = metrics

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

app.include_router(create_chat_router(orchestrator, synthesizer, settings, metrics))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/ready", tags=["health"])
async def readiness_probe() -> dict[str, Any]:
    """Readiness endpoint that reports whether provider credentials are present.

    Checks:
    - Chat model credentials for the configured LLM provider.
    - ElevenLabs API key and voice id.
    """

    components: dict[str, dict[str, Any]] = {
        "llm": {
            "provider": chat_model.provider,
            "model": chat_model.model,
            "ok": chat_model.is_configured,
        },
        "tts": {
            "provider": synthesizer.name,
            "ok": synthesizer.is_configured,
        },
    }

    overall = (
        "ok"
        if components["llm"]["ok"] and components["tts"]["ok"]
        else ("degraded" if components["llm"]["ok"] else "fail")
    )

    return {
        "status": overall,
        "environment": settings.environment,
        "active_sessions": len(memory_store),
        "components": components,
    }


@app.on_event("startup")
async def startup_logging() -> None:
    level = configure_logging(settings.log_level)
    logger.info("Logging configured at %s level for %s environment", logging.getLevelName(level), settings.environment)


app.add_exception_handler(ChatPipelineError, pipeline_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    snapshot = metrics.snapshot()
    return {
        "total_turns": snapshot.total_turns,
        "sentiments": snapshot.sentiments,
        "errors": snapshot.errors,
    }
