"""Pydantic models for the chat API (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Maximum length for a chat message, only short questions are allowed
CHAT_MESSAGE_MAX_LENGTH = 2048


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(_CamelModel):
    """Request model for the chat endpoint."""

    message: str = Field(
        description="User message to process", max_length=CHAT_MESSAGE_MAX_LENGTH
    )
    session_id: str | None = Field(
        default=None,
        description="Existing session id; a new session is created when absent",
    )


class ChatResponse(_CamelModel):
    """One assistant reply."""

    session_id: str
    response: str
    timestamp: datetime
    query_type: str
    source_data: str


class ErrorResponse(BaseModel):
    error: str
    timestamp: datetime


class HealthResponse(BaseModel):
    status: str = "ok"
    parts: int = Field(description="Number of parts in the loaded catalog")
