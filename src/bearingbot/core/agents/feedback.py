"""Feedback agent: records a rating against the previous answer."""

from __future__ import annotations

import logging

from bearingbot.core.extraction import FeedbackExtractor
from bearingbot.core.metrics import FEEDBACK_RECORDS_TOTAL
from bearingbot.core.models import (
    QUERY_TYPE_FEEDBACK,
    SOURCE_USER_FEEDBACK,
    AgentResponse,
    ConversationContext,
    FeedbackRecord,
)
from bearingbot.infra.db.feedback import FeedbackSink
from bearingbot.infra.telemetry import ATTR_SESSION_ID, SPAN_FEEDBACK, tracer

from .base import Agent

logger = logging.getLogger(__name__)

ACKNOWLEDGEMENT = "Thank you for your feedback! It helps us improve our service."

OUTCOME_STORED = "stored"
OUTCOME_SKIPPED = "skipped"
OUTCOME_ERROR = "error"


class FeedbackAgent(Agent):
    agent_name = "feedback"

    def __init__(self, extractor: FeedbackExtractor, sink: FeedbackSink) -> None:
        self._extractor = extractor
        self._sink = sink

    async def submit(
        self, utterance: str, context: ConversationContext
    ) -> AgentResponse:
        """Extract and store feedback; always returns the acknowledgement.

        Feedback is only stored when there is a previous answer in this
        session to attach it to.
        """
        with tracer.start_as_current_span(SPAN_FEEDBACK) as span:
            span.set_attribute(ATTR_SESSION_ID, context.session_id)
            rating, text = (await self._extractor.extract(utterance)).value

            if context.previous_response_id is None:
                logger.info(
                    "Feedback without a prior answer in %s, not recorded",
                    context.session_id,
                )
                FEEDBACK_RECORDS_TOTAL.labels(outcome=OUTCOME_SKIPPED).inc()
            else:
                record = FeedbackRecord(
                    session_id=context.session_id,
                    response_id=context.previous_response_id,
                    feedback_text=text,
                    rating=rating,
                )
                try:
                    await self._sink.append(record)
                except Exception:
                    logger.warning("Failed to store feedback %s", record.id, exc_info=True)
                    FEEDBACK_RECORDS_TOTAL.labels(outcome=OUTCOME_ERROR).inc()
                else:
                    FEEDBACK_RECORDS_TOTAL.labels(outcome=OUTCOME_STORED).inc()

            return AgentResponse(
                response=ACKNOWLEDGEMENT,
                query_type=QUERY_TYPE_FEEDBACK,
                source_data=SOURCE_USER_FEEDBACK,
            )

    async def process(
        self, utterance: str, context: ConversationContext
    ) -> AgentResponse:
        return await self.submit(utterance, context)
