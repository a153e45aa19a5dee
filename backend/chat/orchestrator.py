"""Turn pipeline: sanitize, prompt, complete, parse, then refresh memory."""

from __future__ import annotations

import logging
from typing import Literal

import httpx

from backend.chat.models import ChatReply, ChatTurnInput, ChatTurnResult, TurnStage
from backend.chat.parsing import extract_text_content, parse_chat_reply
from backend.chat.prompts import build_format_instructions, build_system_prompt, build_user_prompt
from backend.chat.sanitize import sanitize_user_message
from backend.core.errors import (
    ChatPipelineError,
    ConfigurationError,
    ProviderResponseError,
    SummaryMemoryError,
)
from backend.llm.base import ChatModel
from backend.memory.store import MemoryStore

SummaryFailurePolicy = Literal["strict", "best_effort"]

logger = logging.getLogger("harry.chat")


class ChatOrchestrator:
    """Run one conversation turn against the chat model.

    Each external call is attempted once. With the ``strict`` summary policy a
    failed memory rebuild fails the turn; with ``best_effort`` the reply is
    returned and the failure is only logged.
    """

    def __init__(
        self,
        chat_model: ChatModel,
        memory: MemoryStore,
        *,
        summary_failure_policy: SummaryFailurePolicy = "strict",
        project: str | None = None,
    ) -> None:
        self._chat_model = chat_model
        self._memory = memory
        self._summary_failure_policy = summary_failure_policy
        self._project = project
        self._format_instructions = build_format_instructions()

    async def execute_turn(self, turn: ChatTurnInput) -> ChatTurnResult:
        stage = TurnStage.START
        try:
            if not self._chat_model.is_configured:
                raise ConfigurationError(f"{self._chat_model.credential_name} must be configured.")
            if not isinstance(turn.session_id, str) or not turn.session_id.strip():
                raise ConfigurationError("A session id is required to chat.")

            stage = self._advance(turn, TurnStage.SANITIZING)
            message = sanitize_user_message(turn.message)

            stage = self._advance(turn, TurnStage.PROMPTING)
            summary = turn.summary if turn.summary is not None else self._memory.get(turn.session_id)
            user_prompt = build_user_prompt(message, summary, self._format_instructions)

            stage = self._advance(turn, TurnStage.AWAITING_COMPLETION)
            try:
                response = await self._chat_model.invoke(
                    build_system_prompt(),
                    user_prompt,
                    metadata={"project": self._project or "", "source": "execute_turn"},
                )
            except httpx.TimeoutException as exc:
                raise ProviderResponseError("Chat model timed out.") from exc

            stage = self._advance(turn, TurnStage.PARSING)
            reply = self._parse(extract_text_content(response))

            stage = self._advance(turn, TurnStage.REBUILDING_MEMORY)
            await self._rebuild_memory(turn, message, reply)

            self._advance(turn, TurnStage.DONE)
            return ChatTurnResult(reply=reply.text, sentiment=reply.sentiment)
        except ChatPipelineError as exc:
            logger.warning(
                "Turn session=%s stage=%s after=%s kind=%s",
                turn.session_id,
                TurnStage.FAILED.value,
                stage.value,
                exc.kind.value,
            )
            raise

    def _parse(self, raw: str) -> ChatReply:
        if not raw:
            raise ProviderResponseError("Chat model returned an empty response.")
        try:
            return parse_chat_reply(raw)
        except ValueError as exc:
            raise ProviderResponseError("Chat model returned an invalid response.") from exc

    async def _rebuild_memory(self, turn: ChatTurnInput, message: str, reply: ChatReply) -> None:
        try:
            await self._memory.rebuild(turn.session_id, message, reply.text, turn.summary)
        except SummaryMemoryError:
            if self._summary_failure_policy == "strict":
                raise
            logger.warning(
                "Summary rebuild failed for session=%s; returning reply without refreshed memory",
                turn.session_id,
                exc_info=True,
            )

    @staticmethod
    def _advance(turn: ChatTurnInput, stage: TurnStage) -> TurnStage:
        logger.debug("Turn session=%s stage=%s", turn.session_id, stage.value)
        return stage
