"""Per-session context lifecycle around each turn.

A turn is: load (or create) the context, route the utterance, append
exactly one user and one assistant message, cap the history, and
persist with a sliding expiry.  Concurrent turns on one session are not
serialized; the last write wins.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta

from pydantic import BaseModel

from bearingbot.core.metrics import TURN_DURATION_SECONDS, TURNS_TOTAL
from bearingbot.core.models import (
    ROLE_ASSISTANT,
    ROLE_USER,
    AgentResponse,
    ChatMessage,
    ConversationContext,
)
from bearingbot.core.models.context import utcnow
from bearingbot.infra.cache import SessionCache
from bearingbot.infra.id_utils import new_session_id
from bearingbot.infra.telemetry import ATTR_QUERY_TYPE, ATTR_SESSION_ID, SPAN_TURN, tracer

from .agents import Orchestrator

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "session:"


def session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


class TurnResult(BaseModel):
    session_id: str
    response: str
    timestamp: datetime
    query_type: str
    source_data: str


class ConversationManager:
    def __init__(
        self,
        cache: SessionCache,
        orchestrator: Orchestrator,
        session_ttl: timedelta = timedelta(hours=24),
        max_history: int = 20,
    ) -> None:
        self._cache = cache
        self._orchestrator = orchestrator
        self._session_ttl = session_ttl
        self._max_history = max_history

    async def load_or_create(self, session_id: str | None) -> ConversationContext:
        """Return the stored context, or a fresh one with empty history.

        An unknown or expired id keeps the caller's id; a missing id gets
        a newly generated one.
        """
        if session_id:
            context = await self._cache.get(session_key(session_id), ConversationContext)
            if context is not None:
                return context
            logger.debug("No stored context for %s, starting fresh", session_id)
        return ConversationContext(session_id=session_id or new_session_id())

    async def record_turn(
        self,
        context: ConversationContext,
        utterance: str,
        response: AgentResponse,
    ) -> None:
        now = utcnow()
        context.message_history.append(
            ChatMessage(role=ROLE_USER, content=utterance, timestamp=now)
        )
        context.message_history.append(
            ChatMessage(
                role=ROLE_ASSISTANT,
                content=response.response,
                timestamp=now,
                metadata=f"Type:{response.query_type}, Source:{response.source_data}",
            )
        )
        context.trim_history(self._max_history)
        context.last_activity = now
        await self._cache.set(session_key(context.session_id), context, self._session_ttl)

    async def handle_turn(self, message: str, session_id: str | None = None) -> TurnResult:
        with tracer.start_as_current_span(SPAN_TURN) as span:
            start = time.monotonic()
            context = await self.load_or_create(session_id)
            span.set_attribute(ATTR_SESSION_ID, context.session_id)

            response = await self._orchestrator.route(message, context)
            await self.record_turn(context, message, response)

            span.set_attribute(ATTR_QUERY_TYPE, response.query_type)
            TURNS_TOTAL.labels(query_type=response.query_type).inc()
            TURN_DURATION_SECONDS.observe(time.monotonic() - start)
            return TurnResult(
                session_id=context.session_id,
                response=response.response,
                timestamp=context.last_activity,
                query_type=response.query_type,
                source_data=response.source_data,
            )
