"""Feedback sinks: append-only destinations for ``FeedbackRecord``.

``build_feedback_sink`` is a lifespan dependency selecting the sink from
``FeedbackConfig.backend``; the Postgres sink owns its engine and
disposes it on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated, Protocol

from fastapi import Depends, FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bearingbot.configs.config import AppConfig, get_app_config
from bearingbot.core.models import FeedbackRecord
from bearingbot.infra.lifespan import get_app

from .engine import create_engine_and_factory
from .models import FeedbackRow

logger = logging.getLogger(__name__)

BACKEND_POSTGRES = "postgres"


class FeedbackSink(Protocol):
    async def append(self, record: FeedbackRecord) -> None: ...


class InMemoryFeedbackSink:
    """Process-local sink; records are lost on restart."""

    def __init__(self) -> None:
        self._records: list[FeedbackRecord] = []

    @property
    def records(self) -> list[FeedbackRecord]:
        return list(self._records)

    def for_session(self, session_id: str) -> list[FeedbackRecord]:
        return [r for r in self._records if r.session_id == session_id]

    async def append(self, record: FeedbackRecord) -> None:
        self._records.append(record)


class SqlFeedbackSink:
    """Inserts one ``feedback`` row per record."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sf = session_factory

    async def append(self, record: FeedbackRecord) -> None:
        async with self._sf() as session:
            session.add(
                FeedbackRow(
                    id=record.id,
                    session_id=record.session_id,
                    response_id=record.response_id,
                    feedback_text=record.feedback_text,
                    rating=record.rating,
                    created_at=record.created_at,
                )
            )
            await session.commit()


# ---------------------------------------------------------------------------
# Lifespan + per-request dependencies
# ---------------------------------------------------------------------------


async def build_feedback_sink(
    app: Annotated[FastAPI, Depends(get_app)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> AsyncGenerator[None, None]:
    """Attach the configured ``FeedbackSink`` to ``app.state``."""
    if config.feedback.backend != BACKEND_POSTGRES:
        app.state.feedback_sink = InMemoryFeedbackSink()
        logger.info("Feedback sink: in-memory")
        yield
        return

    engine, factory = create_engine_and_factory(config.third_party)
    app.state.feedback_sink = SqlFeedbackSink(factory)
    logger.info("Feedback sink: postgres")
    try:
        yield
    finally:
        await engine.dispose()


def get_feedback_sink(request: Request) -> FeedbackSink:
    return request.app.state.feedback_sink
