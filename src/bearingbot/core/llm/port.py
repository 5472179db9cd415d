"""Language-understanding port over a LangChain chat model.

``LanguagePort.complete`` is the only way the agents talk to a model.
When a tool set is supplied the port runs a single tool round itself:
the model may request any of the given tools, each requested call is
executed once, and the model is invoked one final time without tools.
There are no retries and no further rounds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, ToolCall, ToolMessage
from langchain_core.tools import BaseTool
from opentelemetry.trace import Span
from pydantic import BaseModel

from bearingbot.core.metrics import LLM_CALLS_TOTAL, LLM_LATENCY_SECONDS
from bearingbot.infra.telemetry import (
    ATTR_LLM_PURPOSE,
    ATTR_LLM_TOOL_ROUND,
    ATTR_TOOL_ERROR,
    ATTR_TOOL_NAME,
    SPAN_LLM_COMPLETE,
    SPAN_TOOL_CALL,
    tracer,
)

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_ERROR = "error"


class LanguagePortError(Exception):
    """The model call failed (transport, timeout, provider error)."""


class Completion(BaseModel):
    content: str = ""


def message_text(message: BaseMessage) -> str:
    """Plain text of a message whose content may be a list of blocks."""
    content = message.content
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


class LanguagePort:
    def __init__(self, model: BaseChatModel) -> None:
        self._model = model

    async def complete(
        self,
        messages: Sequence[BaseMessage],
        tools: Sequence[BaseTool] | None = None,
        *,
        purpose: str = "completion",
    ) -> Completion:
        """Return the model's final text for *messages*.

        Raises:
            LanguagePortError: the model could not be reached or failed.
                Empty content is returned normally, not raised.
        """
        with tracer.start_as_current_span(SPAN_LLM_COMPLETE) as span:
            span.set_attribute(ATTR_LLM_PURPOSE, purpose)
            start = time.monotonic()
            try:
                if tools:
                    content = await self._complete_with_tools(
                        list(messages), list(tools), span
                    )
                else:
                    reply = await self._model.ainvoke(list(messages))
                    content = message_text(reply)
            except Exception as exc:
                LLM_CALLS_TOTAL.labels(purpose=purpose, status=STATUS_ERROR).inc()
                raise LanguagePortError(str(exc) or type(exc).__name__) from exc
            finally:
                LLM_LATENCY_SECONDS.labels(purpose=purpose).observe(
                    time.monotonic() - start
                )

            LLM_CALLS_TOTAL.labels(purpose=purpose, status=STATUS_OK).inc()
            return Completion(content=content)

    async def _complete_with_tools(
        self,
        messages: list[BaseMessage],
        tools: list[BaseTool],
        span: Span,
    ) -> str:
        bound = self._model.bind_tools(tools)
        reply = await bound.ainvoke(messages)
        if not isinstance(reply, AIMessage) or not reply.tool_calls:
            span.set_attribute(ATTR_LLM_TOOL_ROUND, False)
            return message_text(reply)

        span.set_attribute(ATTR_LLM_TOOL_ROUND, True)
        by_name = {tool.name: tool for tool in tools}
        results = [await self._run_tool(call, by_name) for call in reply.tool_calls]

        final = await self._model.ainvoke([*messages, reply, *results])
        return message_text(final)

    async def _run_tool(
        self, call: ToolCall, by_name: dict[str, BaseTool]
    ) -> ToolMessage:
        name = call["name"]
        with tracer.start_as_current_span(SPAN_TOOL_CALL) as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            tool = by_name.get(name)
            if tool is None:
                logger.warning("Model requested unknown tool %r", name)
                span.set_attribute(ATTR_TOOL_ERROR, True)
                output = f"Error: unknown tool '{name}'."
            else:
                try:
                    output = str(await tool.ainvoke(call["args"]))
                except Exception as exc:
                    logger.warning("Tool %s failed", name, exc_info=True)
                    span.set_attribute(ATTR_TOOL_ERROR, True)
                    output = f"Error running {name}: {exc}"
        return ToolMessage(content=output, tool_call_id=call.get("id") or name, name=name)
