"""Feedback record appended to the feedback sink."""

from datetime import datetime

from pydantic import BaseModel, Field

from bearingbot.infra.id_utils import new_feedback_id

from .context import utcnow

RATING_MIN = 1
RATING_MAX = 5
RATING_DEFAULT = 3


class FeedbackRecord(BaseModel):
    """Structured feedback about one prior answer; written once."""

    id: str = Field(default_factory=new_feedback_id)
    session_id: str
    response_id: str = Field(description="Cache key of the rated response")
    feedback_text: str
    rating: int = Field(ge=RATING_MIN, le=RATING_MAX)
    created_at: datetime = Field(default_factory=utcnow)
