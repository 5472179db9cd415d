"""Structured query extraction: model JSON first, keyword heuristic second."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage

from bearingbot.core.llm import LanguagePort, LanguagePortError
from bearingbot.core.metrics import QUERY_EXTRACTIONS_TOTAL
from bearingbot.core.models import (
    QUERY_KIND_COMPARISON,
    QUERY_KIND_GENERAL,
    QUERY_KINDS,
    StructuredQuery,
)

from .base import Extraction, ExtractionParseError, Fallback, Parsed

logger = logging.getLogger(__name__)

PURPOSE_QUERY_EXTRACTION = "query_extraction"

EXTRACTION_SYSTEM_PROMPT = (
    "You are a bearing technical specialist. "
    "Extract structured bearing queries from natural language."
)

EXTRACTION_PROMPT = """\
Analyze the user's question about bearings and extract product information.

User Question: {utterance}

Extract bearing designation, dimensions, and performance attributes.
Respond in JSON format:
{{
    "productName": "extracted bearing designation or null",
    "productCategory": "extracted category or null",
    "requestedAttributes": ["attribute1", "attribute2"],
    "queryType": "specific|comparison|list"
}}"""

DESIGNATION_PATTERN = re.compile(r"\b\d{4,5}\b")

# First match wins.
CATEGORY_KEYWORDS = ("deep groove", "ball bearing", "bearing", "angular", "spherical")

ATTRIBUTE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "bore": ("bore", "diameter", "inner diameter", "d "),
    "outside": ("outside", "outer diameter", "d "),
    "width": ("width", "b "),
    "load": ("load", "rating", "capacity", "c ", "c0"),
    "speed": ("speed", "rpm", "rmin"),
}

COMPARISON_KEYWORDS = ("compare", "vs", "difference")

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip() and value.strip().lower() != "null":
        return value.strip()
    return None


def parse_query_json(raw: str) -> StructuredQuery:
    """Permissively parse the model's JSON answer.

    Missing or null fields are allowed and non-string attribute entries
    are skipped, and an unknown query kind becomes ``general``.  Anything
    that is not a JSON object raises ``ExtractionParseError``.
    """
    text = _FENCE.sub("", raw.strip())
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise ExtractionParseError(f"not JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ExtractionParseError(f"expected object, got {type(data).__name__}")

    attributes = data.get("requestedAttributes") or []
    if not isinstance(attributes, list):
        attributes = []

    query_type = (_optional_str(data.get("queryType")) or QUERY_KIND_GENERAL).lower()
    if query_type not in QUERY_KINDS:
        query_type = QUERY_KIND_GENERAL
    return StructuredQuery(
        product_name=_optional_str(data.get("productName")),
        product_category=_optional_str(data.get("productCategory")),
        requested_attributes=[a for a in attributes if isinstance(a, str) and a],
        query_type=query_type,
    )


def extract_by_keywords(utterance: str) -> StructuredQuery:
    """Deterministic heuristic; never raises.

    Only the first designation-like numeral is kept, there is a single
    designation slot.
    """
    text = utterance.lower()
    query = StructuredQuery()

    match = DESIGNATION_PATTERN.search(text)
    if match:
        query.product_name = match.group(0)

    for category in CATEGORY_KEYWORDS:
        if category in text:
            query.product_category = category
            break

    for tag, keywords in ATTRIBUTE_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            query.add_attribute(tag)

    if any(keyword in text for keyword in COMPARISON_KEYWORDS):
        query.query_type = QUERY_KIND_COMPARISON

    return query


class QueryExtractor:
    def __init__(self, port: LanguagePort) -> None:
        self._port = port

    async def extract(self, utterance: str) -> Extraction[StructuredQuery]:
        messages = [
            SystemMessage(content=EXTRACTION_SYSTEM_PROMPT),
            HumanMessage(content=EXTRACTION_PROMPT.format(utterance=utterance)),
        ]
        try:
            completion = await self._port.complete(
                messages, purpose=PURPOSE_QUERY_EXTRACTION
            )
            result: Extraction[StructuredQuery] = Parsed(
                parse_query_json(completion.content)
            )
        except (LanguagePortError, ExtractionParseError) as exc:
            logger.warning("Query extraction fell back to keywords: %s", exc)
            result = Fallback(extract_by_keywords(utterance), reason=str(exc))

        QUERY_EXTRACTIONS_TOTAL.labels(path=result.path).inc()
        return result
