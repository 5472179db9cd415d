"""OpenTelemetry bootstrap: tracing initialisation and span names.

Configures a ``TracerProvider`` with an OTLP HTTP exporter when tracing is
enabled via ``TracingConfig``.  When disabled the module is a graceful no-op
and ``tracer`` hands out non-recording spans.

Usage::

    from bearingbot.infra.telemetry import SPAN_ORCHESTRATOR_CLASSIFY, tracer

    with tracer.start_as_current_span(SPAN_ORCHESTRATOR_CLASSIFY) as span:
        ...
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace

from bearingbot.configs.system import TracingConfig

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("bearingbot")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_TURN = "conversation.turn"
SPAN_ORCHESTRATOR_CLASSIFY = "orchestrator.classify"
SPAN_ANSWER = "agent.answer"
SPAN_FEEDBACK = "agent.feedback"
SPAN_LLM_COMPLETE = "llm.complete"
SPAN_TOOL_CALL = "tool.call"
SPAN_CATALOG_SEARCH = "catalog.search"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_SESSION_ID = "conversation.session_id"
ATTR_INTENT = "orchestrator.intent"
ATTR_INTENT_FALLBACK = "orchestrator.fallback"
ATTR_CACHE_HIT = "agent.cache_hit"
ATTR_QUERY_TYPE = "agent.query_type"
ATTR_LLM_PURPOSE = "llm.purpose"
ATTR_LLM_TOOL_ROUND = "llm.tool_round"
ATTR_TOOL_NAME = "tool.name"
ATTR_TOOL_ERROR = "tool.error"
ATTR_CATALOG_QUERY = "catalog.query"
ATTR_CATALOG_RESULT_COUNT = "catalog.result_count"


def init_telemetry(
    app: FastAPI | None = None,
    settings: TracingConfig | None = None,
) -> None:
    """Initialise the OTEL ``TracerProvider`` and FastAPI instrumentation.

    No-op when ``settings`` is ``None`` or tracing is disabled.
    """
    if settings is None or not settings.enabled:
        logger.info("OpenTelemetry tracing disabled.")
        return

    if not settings.endpoint:
        logger.warning(
            "Tracing enabled but no endpoint configured; "
            "skipping OpenTelemetry setup."
        )
        return

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

    resource = Resource.create({"service.name": settings.service_name})
    sampler = ParentBased(root=TraceIdRatioBased(settings.sample_rate))
    provider = TracerProvider(resource=resource, sampler=sampler)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint))
    )
    trace.set_tracer_provider(provider)

    if app is not None:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        excluded = ",".join(settings.excluded_urls) if settings.excluded_urls else ""
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded)

    logger.info(
        "OpenTelemetry tracing initialised (service=%s).", settings.service_name
    )
