"""Types exchanged by the chat turn pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sentiment(str, Enum):
    """Sentiment labels the model may emit and the avatar knows how to animate."""

    HAPPY = "happy"
    FUNNY = "funny"
    SAD = "sad"
    SURPRISED = "surprised"
    ANGRY = "angry"
    CRAZY = "crazy"


class TurnStage(str, Enum):
    """Progress markers for a single chat turn."""

    START = "start"
    SANITIZING = "sanitizing"
    PROMPTING = "prompting"
    AWAITING_COMPLETION = "awaiting_completion"
    PARSING = "parsing"
    REBUILDING_MEMORY = "rebuilding_memory"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class ChatTurnInput:
    """A user message bound to its session.

    ``summary`` replaces the stored rolling summary for this turn only.
    """

    session_id: str
    message: object
    summary: str | None = None


@dataclass(slots=True)
class ChatTurnResult:
    reply: str
    sentiment: Sentiment


class ChatReply(BaseModel):
    """Structured output the model is instructed to return."""

    model_config = ConfigDict(extra="ignore")

    text: str = Field(description="Conversational response as Harry Potter")
    sentiment: Sentiment = Field(description="Emotional tone that best matches the reply")
