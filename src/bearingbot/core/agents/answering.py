"""Answering agent: LangGraph StateGraph with per-turn memoization.

Pipeline nodes::

    cache_check ─┬─ (hit)  → END
                 └─ (miss) → extract_query → generate → record → END

The cache key is derived from the session id and a hash of the
utterance, so an identical question in the same session is answered
from the session cache without touching the model.  ``record`` stores
the answer for an hour, degraded text included.  Both paths point
``context.previous_response_id`` at the key so feedback can be
attached to the answer.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import timedelta
from typing import TypedDict

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph

from bearingbot.core.extraction import QueryExtractor
from bearingbot.core.llm import LanguagePort, LanguagePortError
from bearingbot.core.metrics import RESPONSE_CACHE_LOOKUPS_TOTAL
from bearingbot.core.models import (
    QUERY_TYPE_CACHED,
    QUERY_TYPE_CATALOG,
    QUERY_TYPE_COMPARISON,
    QUERY_TYPE_DEFINITION,
    QUERY_TYPE_DIMENSIONS,
    QUERY_TYPE_GENERAL,
    QUERY_TYPE_LOGISTICS,
    QUERY_TYPE_PERFORMANCE,
    ROLE_USER,
    SOURCE_GENERATED,
    SOURCE_REDIS_CACHE,
    AgentResponse,
    ChatMessage,
    ConversationContext,
    StructuredQuery,
)
from bearingbot.infra.cache import SessionCache
from bearingbot.infra.telemetry import (
    ATTR_CACHE_HIT,
    ATTR_QUERY_TYPE,
    ATTR_SESSION_ID,
    SPAN_ANSWER,
    tracer,
)

from .base import Agent
from .prompt import render_generation_prompt
from .tools import CatalogToolset

logger = logging.getLogger(__name__)

PURPOSE_GENERATION = "generation"

NO_INFORMATION = "I couldn't find specific information about that bearing."
DEGRADED_ANSWER = "I encountered an issue while searching for bearing information: {error}"

# ---------------------------------------------------------------------------
# Node / edge constants
# ---------------------------------------------------------------------------

NODE_CACHE_CHECK = "cache_check"
NODE_EXTRACT_QUERY = "extract_query"
NODE_GENERATE = "generate"
NODE_RECORD = "record"

ROUTE_HIT = "hit"
ROUTE_MISS = "miss"

CACHE_RESULT_HIT = "hit"
CACHE_RESULT_MISS = "miss"

# State field keys
KEY_UTTERANCE = "utterance"
KEY_HISTORY = "history"
KEY_CACHE_KEY = "cache_key"
KEY_CACHED = "cached"
KEY_QUERY = "query"
KEY_RESPONSE_TEXT = "response_text"


class AnswerState(TypedDict, total=False):
    """Typed state threaded through every node in the answering graph."""

    utterance: str
    history: list[ChatMessage]
    cache_key: str

    cached: str | None

    query: StructuredQuery
    response_text: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def response_cache_key(session_id: str, utterance: str) -> str:
    """Deterministic memo key for ``(session_id, utterance)``."""
    digest = hashlib.sha256(utterance.encode("utf-8")).hexdigest()[:16]
    return f"response:{session_id}:{digest}"


def classify_query_type(utterance: str, response: str) -> str:
    """Keyword-precedence classification; the first matching rule wins."""
    text = utterance.lower()
    resp = response.lower()

    if "compare" in text or "vs" in text or "comparison" in resp:
        return QUERY_TYPE_COMPARISON
    if "dimension" in text or "dimension" in resp or "mm" in resp:
        return QUERY_TYPE_DIMENSIONS
    if "load" in text or "load" in resp or "rating" in resp or "kn" in resp:
        return QUERY_TYPE_PERFORMANCE
    if "weight" in text or "weight" in resp or "kg" in resp:
        return QUERY_TYPE_LOGISTICS
    if "what" in text and "is" in text:
        return QUERY_TYPE_DEFINITION
    if "show" in text or "list" in text or "all" in text:
        return QUERY_TYPE_CATALOG
    return QUERY_TYPE_GENERAL


def _to_langchain(message: ChatMessage) -> BaseMessage:
    if message.role == ROLE_USER:
        return HumanMessage(content=message.content)
    return AIMessage(content=message.content)


# ---------------------------------------------------------------------------
# Agent
# ---------------------------------------------------------------------------


class AnsweringAgent(Agent):
    """Answers catalog questions with the tool-enabled model.

    The graph is compiled once at construction.  Node functions are bound
    methods so they share the port, cache and tool set.
    """

    agent_name = "answering"

    def __init__(
        self,
        port: LanguagePort,
        extractor: QueryExtractor,
        toolset: CatalogToolset,
        cache: SessionCache,
        response_ttl: timedelta = timedelta(hours=1),
        history_window: int = 3,
    ) -> None:
        self._port = port
        self._extractor = extractor
        self._toolset = toolset
        self._tools = toolset.as_tools()
        self._cache = cache
        self._response_ttl = response_ttl
        self._history_window = history_window

        self._graph = self._build_graph()

    # ------------------------------------------------------------------
    # Graph construction
    # ------------------------------------------------------------------

    def _build_graph(self):
        builder: StateGraph = StateGraph(AnswerState)

        builder.add_node(NODE_CACHE_CHECK, self._cache_check_node)
        builder.add_node(NODE_EXTRACT_QUERY, self._extract_query_node)
        builder.add_node(NODE_GENERATE, self._generate_node)
        builder.add_node(NODE_RECORD, self._record_node)

        builder.add_edge(START, NODE_CACHE_CHECK)
        builder.add_conditional_edges(
            NODE_CACHE_CHECK,
            self._route_after_cache,
            {ROUTE_HIT: END, ROUTE_MISS: NODE_EXTRACT_QUERY},
        )
        builder.add_edge(NODE_EXTRACT_QUERY, NODE_GENERATE)
        builder.add_edge(NODE_GENERATE, NODE_RECORD)
        builder.add_edge(NODE_RECORD, END)

        return builder.compile()

    @staticmethod
    def _route_after_cache(state: AnswerState) -> str:
        return ROUTE_HIT if state.get(KEY_CACHED) else ROUTE_MISS

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    async def _cache_check_node(self, state: AnswerState) -> dict:
        cached = await self._cache.get(state[KEY_CACHE_KEY], str)
        is_hit = bool(cached)
        RESPONSE_CACHE_LOOKUPS_TOTAL.labels(
            result=CACHE_RESULT_HIT if is_hit else CACHE_RESULT_MISS
        ).inc()
        return {KEY_CACHED: cached if is_hit else None}

    async def _extract_query_node(self, state: AnswerState) -> dict:
        extraction = await self._extractor.extract(state[KEY_UTTERANCE])
        return {KEY_QUERY: extraction.value}

    async def _generate_node(self, state: AnswerState) -> dict:
        messages: list[BaseMessage] = [
            SystemMessage(content=render_generation_prompt(state[KEY_QUERY])),
            *(_to_langchain(m) for m in state.get(KEY_HISTORY, [])),
            HumanMessage(content=state[KEY_UTTERANCE]),
        ]
        try:
            completion = await self._port.complete(
                messages, self._tools, purpose=PURPOSE_GENERATION
            )
        except LanguagePortError as exc:
            logger.warning("Answer generation failed: %s", exc)
            return {KEY_RESPONSE_TEXT: DEGRADED_ANSWER.format(error=exc)}
        return {KEY_RESPONSE_TEXT: completion.content or NO_INFORMATION}

    async def _record_node(self, state: AnswerState) -> dict:
        await self._cache.set(
            state[KEY_CACHE_KEY], state[KEY_RESPONSE_TEXT], self._response_ttl
        )
        return {}

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def answer(
        self, utterance: str, context: ConversationContext
    ) -> AgentResponse:
        with tracer.start_as_current_span(SPAN_ANSWER) as span:
            span.set_attribute(ATTR_SESSION_ID, context.session_id)
            cache_key = response_cache_key(context.session_id, utterance)

            state: AnswerState = await self._graph.ainvoke(
                {
                    KEY_UTTERANCE: utterance,
                    KEY_HISTORY: context.recent(self._history_window),
                    KEY_CACHE_KEY: cache_key,
                }
            )
            context.previous_response_id = cache_key

            cached = state.get(KEY_CACHED)
            span.set_attribute(ATTR_CACHE_HIT, bool(cached))
            if cached:
                logger.info("Answer served from cache for %s", context.session_id)
                span.set_attribute(ATTR_QUERY_TYPE, QUERY_TYPE_CACHED)
                return AgentResponse(
                    response=cached,
                    query_type=QUERY_TYPE_CACHED,
                    source_data=SOURCE_REDIS_CACHE,
                    from_cache=True,
                )

            text = state[KEY_RESPONSE_TEXT]
            query_type = classify_query_type(utterance, text)
            span.set_attribute(ATTR_QUERY_TYPE, query_type)
            return AgentResponse(
                response=text,
                query_type=query_type,
                source_data=SOURCE_GENERATED,
                from_cache=False,
            )

    async def process(
        self, utterance: str, context: ConversationContext
    ) -> AgentResponse:
        return await self.answer(utterance, context)
