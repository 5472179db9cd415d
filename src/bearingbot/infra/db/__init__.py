"""Async PostgreSQL infrastructure (engine, ORM models, feedback sinks)."""

from .engine import create_engine_and_factory
from .feedback import (
    FeedbackSink,
    InMemoryFeedbackSink,
    SqlFeedbackSink,
    build_feedback_sink,
    get_feedback_sink,
)
from .models import Base, FeedbackRow

__all__ = [
    "Base",
    "FeedbackRow",
    "FeedbackSink",
    "InMemoryFeedbackSink",
    "SqlFeedbackSink",
    "build_feedback_sink",
    "create_engine_and_factory",
    "get_feedback_sink",
]
