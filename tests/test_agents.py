"""Tests for the orchestrator, answering agent and feedback agent."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import AIMessage, SystemMessage, ToolMessage

from bearingbot.core.agents import (
    ACKNOWLEDGEMENT,
    Agent,
    AnsweringAgent,
    CatalogToolset,
    FeedbackAgent,
    Orchestrator,
    classify_query_type,
    response_cache_key,
)
from bearingbot.core.extraction import FeedbackExtractor, QueryExtractor
from bearingbot.core.models import AgentResponse, ChatMessage, ConversationContext
from bearingbot.infra.db import InMemoryFeedbackSink

EXTRACTED_6205 = '{"productName": "6205", "requestedAttributes": ["bore"], "queryType": "specific"}'


class _StubAgent(Agent):
    agent_name = "stub"

    def __init__(self, response: AgentResponse) -> None:
        self.response = response
        self.calls: list[str] = []

    async def process(self, utterance, context):
        self.calls.append(utterance)
        return self.response


def _history(*contents: str) -> list[ChatMessage]:
    roles = ["user", "assistant"]
    return [
        ChatMessage(role=roles[i % 2], content=content)
        for i, content in enumerate(contents)
    ]


# =========================================================================
# Orchestrator
# =========================================================================


class TestOrchestrator:
    @pytest.fixture
    def answering(self):
        return _StubAgent(AgentResponse(response="answer", query_type="dimensions"))

    @pytest.fixture
    def feedback(self):
        return _StubAgent(
            AgentResponse(response="ack", query_type="general", source_data="other")
        )

    @pytest.fixture
    def orchestrator(self, port, answering, feedback):
        return Orchestrator(port, answering, feedback)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw", ["feedback", "  FEEDBACK \n", "This is Feedback.", "Feedback"]
    )
    async def test_feedback_output_routes_to_feedback(
        self, model, orchestrator, answering, feedback, context, raw
    ):
        model.replies = [raw]

        response = await orchestrator.route("that was wrong", context)

        assert feedback.calls == ["that was wrong"]
        assert answering.calls == []
        assert response.response == "ack"
        assert response.query_type == "feedback"
        assert response.source_data == "user_feedback"
        assert context.intent == "feedback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["question", " QUESTION ", "a query", ""])
    async def test_other_output_routes_to_answering(
        self, model, orchestrator, answering, feedback, context, raw
    ):
        model.replies = [raw]

        response = await orchestrator.route("bore of 6205?", context)

        assert answering.calls == ["bore of 6205?"]
        assert feedback.calls == []
        assert response == answering.response
        assert context.intent == "question"

    @pytest.mark.asyncio
    async def test_port_failure_defaults_to_question(
        self, model, orchestrator, answering, context
    ):
        model.replies = [ConnectionError("unreachable")]

        response = await orchestrator.route("feedback: great", context)

        assert answering.calls == ["feedback: great"]
        assert response.response == "answer"

    @pytest.mark.asyncio
    async def test_prompt_uses_last_two_messages(self, model, orchestrator, context):
        context.message_history = _history("oldest", "older", "recent q", "recent a")
        model.replies = ["question"]

        await orchestrator.route("current", context)

        prompt = model.calls[0][-1].content
        assert "user: recent q" in prompt
        assert "assistant: recent a" in prompt
        assert "older" not in prompt
        assert "current" in prompt


# =========================================================================
# Answering agent
# =========================================================================


class TestClassifyQueryType:
    @pytest.mark.parametrize(
        ("utterance", "response", "expected"),
        [
            ("compare 6205 and 6305", "", "comparison"),
            ("tell me", "Here is a comparison", "comparison"),
            ("6205 dimensions", "", "dimensions"),
            ("bore?", "It is 25 mm", "dimensions"),
            ("6205", "C is 14.8 kN", "performance"),
            ("how heavy", "0.125 kg", "logistics"),
            ("what is a bearing", "A machine element", "definition"),
            ("show me everything", "Here you go", "catalog"),
            ("hello", "hi there", "general"),
        ],
    )
    def test_precedence(self, utterance, response, expected):
        assert classify_query_type(utterance, response) == expected

    def test_comparison_beats_dimensions(self):
        assert classify_query_type("6205 vs 6305", "52 mm vs 62 mm") == "comparison"


class TestAnsweringAgent:
    @pytest.fixture
    def agent(self, port, catalog, cache):
        return AnsweringAgent(
            port, QueryExtractor(port), CatalogToolset(catalog, cache), cache
        )

    @pytest.mark.asyncio
    async def test_second_identical_question_is_served_from_cache(
        self, model, agent, context
    ):
        model.replies = [EXTRACTED_6205, "The 6205 has a 25 mm bore."]

        first = await agent.answer("bore of 6205?", context)
        second = await agent.answer("bore of 6205?", context)

        assert first.from_cache is False
        assert first.source_data == "llm_enhanced"
        assert first.query_type == "dimensions"
        assert second.from_cache is True
        assert second.response == first.response
        assert second.query_type == "cached"
        assert second.source_data == "redis_cache"
        assert len(model.calls) == 2
        assert context.previous_response_id == response_cache_key(
            "sess_test", "bore of 6205?"
        )

    @pytest.mark.asyncio
    async def test_cache_is_per_session(self, model, agent, context):
        model.replies = [EXTRACTED_6205, "first", EXTRACTED_6205, "second"]

        await agent.answer("bore of 6205?", context)
        other = await agent.answer(
            "bore of 6205?", ConversationContext(session_id="sess_other")
        )

        assert other.from_cache is False
        assert other.response == "second"

    def test_cache_key_is_deterministic(self):
        assert response_cache_key("s", "q") == response_cache_key("s", "q")
        assert response_cache_key("s", "q") != response_cache_key("s", "q2")
        assert response_cache_key("s", "q").startswith("response:s:")

    @pytest.mark.asyncio
    async def test_generation_prompt_and_history_window(self, model, agent, context):
        context.message_history = _history("m1", "m2", "m3", "m4", "m5")
        model.replies = [EXTRACTED_6205, "ok"]

        await agent.answer("and the width?", context)

        generation = model.calls[1]
        assert isinstance(generation[0], SystemMessage)
        assert "- Bearing: 6205" in generation[0].content
        assert "- Requested Attributes: bore" in generation[0].content
        assert [m.content for m in generation[1:]] == ["m3", "m4", "m5", "and the width?"]
        assert "search_parts" in model.bound_tools

    @pytest.mark.asyncio
    async def test_tool_round_uses_catalog(self, model, agent, context):
        model.replies = [
            "not json",
            AIMessage(
                content="",
                tool_calls=[
                    {
                        "name": "compare_parts",
                        "args": {"designation_a": "6205", "designation_b": "6305"},
                        "id": "call_1",
                    }
                ],
            ),
            "The 6305 has the higher dynamic load rating.",
        ]

        response = await agent.answer("compare 6205 vs 6305", context)

        assert response.query_type == "comparison"
        tool_message = next(m for m in model.calls[2] if isinstance(m, ToolMessage))
        assert "6205=14.8 kN, 6305=22.5 kN" in tool_message.content
        assert "6305=N/A" in tool_message.content

    @pytest.mark.asyncio
    async def test_generation_failure_degrades_and_is_memoized(
        self, model, agent, cache, context
    ):
        model.replies = [EXTRACTED_6205, TimeoutError("model timed out"), "fresh answer"]

        response = await agent.answer("bore of 6205?", context)
        repeated = await agent.answer("bore of 6205?", context)

        assert response.response == (
            "I encountered an issue while searching for bearing information: "
            "model timed out"
        )
        assert response.from_cache is False
        key = response_cache_key("sess_test", "bore of 6205?")
        assert context.previous_response_id == key
        assert await cache.get(key, str) == response.response
        assert repeated.from_cache is True
        assert repeated.response == response.response
        assert model.replies == ["fresh answer"]

    @pytest.mark.asyncio
    async def test_empty_generation_uses_not_found_text(self, model, agent, context):
        model.replies = [EXTRACTED_6205, ""]
        response = await agent.answer("bore of 6205?", context)
        assert response.response == "I couldn't find specific information about that bearing."


# =========================================================================
# Feedback agent
# =========================================================================


class TestFeedbackAgent:
    @pytest.mark.asyncio
    async def test_without_prior_answer_nothing_is_stored(self, model, port, context):
        sink = AsyncMock()
        model.replies = ["5|great"]

        response = await FeedbackAgent(FeedbackExtractor(port), sink).submit(
            "great, love it", context
        )

        assert response.response == ACKNOWLEDGEMENT
        assert response.query_type == "feedback"
        assert response.source_data == "user_feedback"
        sink.append.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_record_attached_to_previous_response(self, model, port, context):
        sink = InMemoryFeedbackSink()
        context.previous_response_id = "response:sess_test:abc"
        model.replies = ["2|too slow"]

        response = await FeedbackAgent(FeedbackExtractor(port), sink).submit(
            "the answer was too slow", context
        )

        assert response.response == ACKNOWLEDGEMENT
        [record] = sink.for_session("sess_test")
        assert record.response_id == "response:sess_test:abc"
        assert record.rating == 2
        assert record.feedback_text == "too slow"
        assert record.id.startswith("fb_")

    @pytest.mark.asyncio
    async def test_unparseable_output_uses_default(self, model, port, context):
        sink = InMemoryFeedbackSink()
        context.previous_response_id = "response:sess_test:abc"
        model.replies = ["great, love it"]

        await FeedbackAgent(FeedbackExtractor(port), sink).submit(
            "great, love it", context
        )

        [record] = sink.records
        assert (record.rating, record.feedback_text) == (3, "great, love it")

    @pytest.mark.asyncio
    async def test_sink_failure_is_absorbed(self, model, port, context):
        sink = AsyncMock()
        sink.append.side_effect = RuntimeError("db down")
        context.previous_response_id = "response:sess_test:abc"
        model.replies = ["4|fine"]

        response = await FeedbackAgent(FeedbackExtractor(port), sink).submit(
            "fine", context
        )

        assert response.response == ACKNOWLEDGEMENT
        sink.append.assert_awaited_once()
