"""Prometheus metrics for the assistant.

Business metrics that complement the auto-instrumented HTTP metrics
provided by ``prometheus-fastapi-instrumentator``.

All metrics use the ``bearingbot_`` prefix.
"""

import logging

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from bearingbot.configs.config import AppConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Turn metrics
# ---------------------------------------------------------------------------

TURNS_TOTAL = Counter(
    "bearingbot_turns_total",
    "Total conversation turns handled",
    ["query_type"],
)

TURN_DURATION_SECONDS = Histogram(
    "bearingbot_turn_duration_seconds",
    "End-to-end duration of one conversation turn",
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60),
)

# ---------------------------------------------------------------------------
# Routing / extraction metrics
# ---------------------------------------------------------------------------

INTENTS_TOTAL = Counter(
    "bearingbot_intents_total",
    "Intent classifications by outcome",
    ["intent", "fallback"],  # fallback: "true" | "false"
)

QUERY_EXTRACTIONS_TOTAL = Counter(
    "bearingbot_query_extractions_total",
    "Structured query extractions by path",
    ["path"],  # "parsed" | "fallback"
)

FEEDBACK_EXTRACTIONS_TOTAL = Counter(
    "bearingbot_feedback_extractions_total",
    "Feedback extractions by path",
    ["path"],  # "parsed" | "fallback"
)

FEEDBACK_RECORDS_TOTAL = Counter(
    "bearingbot_feedback_records_total",
    "Feedback submissions by outcome",
    ["outcome"],  # "stored" | "skipped" | "error"
)

# ---------------------------------------------------------------------------
# Cache / tool / LLM metrics
# ---------------------------------------------------------------------------

RESPONSE_CACHE_LOOKUPS_TOTAL = Counter(
    "bearingbot_response_cache_lookups_total",
    "Answer memoization lookups by outcome",
    ["result"],  # "hit" | "miss"
)

TOOL_CALLS_TOTAL = Counter(
    "bearingbot_tool_calls_total",
    "Catalog tool invocations by tool and outcome",
    ["tool_name", "status"],  # status: "ok" | "cached" | "error"
)

LLM_CALLS_TOTAL = Counter(
    "bearingbot_llm_calls_total",
    "Language model calls by purpose and outcome",
    ["purpose", "status"],  # status: "ok" | "error"
)

LLM_LATENCY_SECONDS = Histogram(
    "bearingbot_llm_latency_seconds",
    "Latency of a single language-model completion (including tool round)",
    ["purpose"],
    buckets=(0.25, 0.5, 1, 2, 5, 10, 30, 60),
)


# ---------------------------------------------------------------------------
# App wiring
# ---------------------------------------------------------------------------


def instrument_metrics(app: FastAPI, config: AppConfig) -> None:
    """Attach Prometheus HTTP instrumentation and the ``/metrics`` endpoint.

    Must run before the app starts serving: the instrumentator adds
    middleware.
    """
    Instrumentator(
        should_instrument_requests_inprogress=True,
        excluded_handlers=config.tracing.excluded_urls,
    ).instrument(app).expose(app, endpoint="/metrics")

    logger.info("Prometheus metrics initialised")
