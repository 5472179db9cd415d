"""Shared fixtures: a scripted chat model, the sample catalog, a local cache."""

from __future__ import annotations

from typing import Any

import pytest
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from pydantic import Field

from bearingbot.core.catalog import CatalogStore, sample_parts
from bearingbot.core.llm import LanguagePort
from bearingbot.core.models import ConversationContext
from bearingbot.infra.cache import LocalCacheBackend, SessionCache


class ScriptedChatModel(BaseChatModel):
    """Replays queued replies in order and records every prompt.

    A reply may be a string, an ``AIMessage`` (e.g. carrying tool calls)
    or an exception instance, which is raised instead of answering.
    Running out of replies raises as well.
    """

    replies: list[Any] = Field(default_factory=list)
    calls: list[list[BaseMessage]] = Field(default_factory=list)
    bound_tools: list[str] = Field(default_factory=list)

    @property
    def _llm_type(self) -> str:
        return "scripted"

    def bind_tools(self, tools, **kwargs):
        self.bound_tools.extend(tool.name for tool in tools)
        return self

    def _generate(self, messages, stop=None, run_manager=None, **kwargs) -> ChatResult:
        self.calls.append(list(messages))
        if not self.replies:
            raise RuntimeError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if not isinstance(reply, AIMessage):
            reply = AIMessage(content=reply)
        return ChatResult(generations=[ChatGeneration(message=reply)])


@pytest.fixture
def model() -> ScriptedChatModel:
    return ScriptedChatModel()


@pytest.fixture
def port(model: ScriptedChatModel) -> LanguagePort:
    return LanguagePort(model)


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore(sample_parts())


@pytest.fixture
def backend() -> LocalCacheBackend:
    return LocalCacheBackend()


@pytest.fixture
def cache(backend: LocalCacheBackend) -> SessionCache:
    return SessionCache(backend)


@pytest.fixture
def context() -> ConversationContext:
    return ConversationContext(session_id="sess_test")
