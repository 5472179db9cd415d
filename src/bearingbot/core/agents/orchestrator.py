"""Intent routing between the answering and feedback agents."""

from __future__ import annotations

import logging

from langchain_core.messages import HumanMessage, SystemMessage

from bearingbot.core.llm import LanguagePort, LanguagePortError
from bearingbot.core.metrics import INTENTS_TOTAL
from bearingbot.core.models import (
    INTENT_FEEDBACK,
    INTENT_QUESTION,
    QUERY_TYPE_FEEDBACK,
    SOURCE_USER_FEEDBACK,
    AgentResponse,
    ConversationContext,
)
from bearingbot.infra.telemetry import (
    ATTR_INTENT,
    ATTR_INTENT_FALLBACK,
    SPAN_ORCHESTRATOR_CLASSIFY,
    tracer,
)

from .base import Agent
from .prompt import CLASSIFICATION_SYSTEM_PROMPT, render_classification_prompt

logger = logging.getLogger(__name__)

PURPOSE_CLASSIFICATION = "classification"


def intent_from_output(raw: str) -> str:
    """Any output mentioning ``feedback`` is feedback; the rest are questions."""
    if INTENT_FEEDBACK in raw.strip().lower():
        return INTENT_FEEDBACK
    return INTENT_QUESTION


class Orchestrator:
    """Single-shot intent classification followed by dispatch."""

    def __init__(
        self,
        port: LanguagePort,
        answering: Agent,
        feedback: Agent,
        history_window: int = 2,
    ) -> None:
        self._port = port
        self._answering = answering
        self._feedback = feedback
        self._history_window = history_window

    async def classify(self, utterance: str, context: ConversationContext) -> str:
        """Return ``"question"`` or ``"feedback"``; never raises."""
        with tracer.start_as_current_span(SPAN_ORCHESTRATOR_CLASSIFY) as span:
            messages = [
                SystemMessage(content=CLASSIFICATION_SYSTEM_PROMPT),
                HumanMessage(
                    content=render_classification_prompt(
                        utterance, context.recent(self._history_window)
                    )
                ),
            ]
            fallback = False
            try:
                completion = await self._port.complete(
                    messages, purpose=PURPOSE_CLASSIFICATION
                )
                intent = intent_from_output(completion.content)
            except LanguagePortError as exc:
                logger.warning("Intent classification failed, assuming question: %s", exc)
                intent = INTENT_QUESTION
                fallback = True

            span.set_attribute(ATTR_INTENT, intent)
            span.set_attribute(ATTR_INTENT_FALLBACK, fallback)
            INTENTS_TOTAL.labels(
                intent=intent, fallback=str(fallback).lower()
            ).inc()
            return intent

    async def route(
        self, utterance: str, context: ConversationContext
    ) -> AgentResponse:
        intent = await self.classify(utterance, context)
        context.intent = intent
        logger.info("Routing %s turn to %s", context.session_id, intent)

        if intent == INTENT_FEEDBACK:
            response = await self._feedback.process(utterance, context)
            return response.model_copy(
                update={
                    "query_type": QUERY_TYPE_FEEDBACK,
                    "source_data": SOURCE_USER_FEEDBACK,
                }
            )
        return await self._answering.process(utterance, context)
