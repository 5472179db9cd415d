"""Per-session conversation state persisted in the session cache."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from .constants import INTENT_QUESTION, Role


def utcnow() -> datetime:
    return datetime.now(UTC)


class ChatMessage(BaseModel):
    """A single message in the conversation history."""

    role: Role = Field(description="Message sender role")
    content: str = Field(description="Message content")
    timestamp: datetime = Field(default_factory=utcnow)
    metadata: str | None = Field(
        default=None, description="Free-form annotation, e.g. query type/source"
    )

    def render(self) -> str:
        return f"{self.role}: {self.content}"


class ConversationContext(BaseModel):
    """Conversation state for one session.

    ``message_history`` is chronological; recency windows are always
    taken from the tail.  ``previous_response_id`` is the cache key of
    the latest assistant answer and is what feedback gets attached to.
    """

    session_id: str
    intent: str = INTENT_QUESTION
    message_history: list[ChatMessage] = Field(default_factory=list)
    previous_response_id: str | None = None
    last_activity: datetime = Field(default_factory=utcnow)

    def recent(self, n: int) -> list[ChatMessage]:
        """Return the last *n* messages, oldest first."""
        if n <= 0:
            return []
        return self.message_history[-n:]

    def trim_history(self, max_messages: int) -> None:
        """Drop the oldest messages so at most *max_messages* remain."""
        overflow = len(self.message_history) - max_messages
        if overflow > 0:
            del self.message_history[:overflow]
