"""Catalog tool set offered to the model during answer generation.

Every tool resolves against the ``CatalogStore`` and memoizes its text
output in the session cache (keyed by operation and argument).  Tools
never raise: lookup misses become not-found sentinels and internal
failures become error sentinels, both returned as ordinary text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, Field

from bearingbot.core.catalog import (
    CatalogStore,
    format_comparison,
    format_details,
    format_dimensions,
    format_performance,
    format_summaries,
)
from bearingbot.core.metrics import TOOL_CALLS_TOTAL
from bearingbot.core.models import Part
from bearingbot.infra.cache import SessionCache

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Tool names / sentinels
# ---------------------------------------------------------------------------

TOOL_SEARCH_PARTS = "search_parts"
TOOL_GET_PART = "get_part_by_designation"
TOOL_GET_DIMENSIONS = "get_part_dimensions"
TOOL_GET_PERFORMANCE = "get_part_performance"
TOOL_COMPARE_PARTS = "compare_parts"

NO_RESULTS = "No bearing products found matching your criteria."
NOT_FOUND = "Bearing designation '{designation}' not found."
COMPARE_NOT_FOUND = "One or both bearings not found for comparison."

STATUS_OK = "ok"
STATUS_CACHED = "cached"
STATUS_ERROR = "error"


def _norm(value: str) -> str:
    return value.strip().lower()


# ---------------------------------------------------------------------------
# Argument schemas
# ---------------------------------------------------------------------------


class SearchArgs(BaseModel):
    query: str = Field(description="The search query to find bearing products")


class DesignationArgs(BaseModel):
    designation: str = Field(description="The bearing designation, e.g. 6205")


class CompareArgs(BaseModel):
    designation_a: str = Field(description="First bearing designation")
    designation_b: str = Field(description="Second bearing designation")


# ---------------------------------------------------------------------------
# Tool set
# ---------------------------------------------------------------------------


class CatalogToolset:
    def __init__(
        self,
        catalog: CatalogStore,
        cache: SessionCache,
        ttl: timedelta = timedelta(minutes=30),
        search_limit: int = 5,
    ) -> None:
        self._catalog = catalog
        self._cache = cache
        self._ttl = ttl
        self._search_limit = search_limit

    def _find(self, designation: str) -> Part | None:
        """Exact id/designation match, else the first search hit."""
        if not designation.strip():
            return None
        part = self._catalog.get_by_id(designation)
        if part is not None:
            return part
        hits = self._catalog.search(designation)
        return hits[0] if hits else None

    async def _cached(
        self,
        tool_name: str,
        cache_key: str,
        compute: Callable[[], str],
        error_prefix: str,
    ) -> str:
        cached = await self._cache.get(cache_key, str)
        if cached:
            TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status=STATUS_CACHED).inc()
            return cached
        try:
            result = compute()
        except Exception as exc:
            logger.warning("Tool %s failed", tool_name, exc_info=True)
            TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status=STATUS_ERROR).inc()
            return f"{error_prefix}: {exc}"
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status=STATUS_OK).inc()
        await self._cache.set(cache_key, result, self._ttl)
        return result

    # -- operations ---------------------------------------------------------

    async def search_parts(self, query: str) -> str:
        def compute() -> str:
            parts = self._catalog.search(query)
            if not parts:
                return NO_RESULTS
            return format_summaries(parts[: self._search_limit])

        return await self._cached(
            TOOL_SEARCH_PARTS,
            f"bearing_search:{_norm(query)}",
            compute,
            "Error searching bearing products",
        )

    async def get_part_by_designation(self, designation: str) -> str:
        return await self._cached(
            TOOL_GET_PART,
            f"bearing:{_norm(designation)}",
            self._render(designation, format_details),
            "Error getting bearing product",
        )

    async def get_part_dimensions(self, designation: str) -> str:
        return await self._cached(
            TOOL_GET_DIMENSIONS,
            f"bearing_dimensions:{_norm(designation)}",
            self._render(designation, format_dimensions),
            "Error getting bearing dimensions",
        )

    async def get_part_performance(self, designation: str) -> str:
        return await self._cached(
            TOOL_GET_PERFORMANCE,
            f"bearing_performance:{_norm(designation)}",
            self._render(designation, format_performance),
            "Error getting bearing performance",
        )

    async def compare_parts(self, designation_a: str, designation_b: str) -> str:
        def compute() -> str:
            first = self._find(designation_a)
            second = self._find(designation_b)
            if first is None or second is None:
                return COMPARE_NOT_FOUND
            return format_comparison(first, second)

        return await self._cached(
            TOOL_COMPARE_PARTS,
            f"bearing_compare:{_norm(designation_a)}:{_norm(designation_b)}",
            compute,
            "Error comparing bearings",
        )

    def _render(
        self, designation: str, formatter: Callable[[Part], str]
    ) -> Callable[[], str]:
        def compute() -> str:
            part = self._find(designation)
            if part is None:
                return NOT_FOUND.format(designation=designation)
            return formatter(part)

        return compute

    # -- LangChain adapters -------------------------------------------------

    def as_tools(self) -> list[BaseTool]:
        """Wrap the operations as LangChain tools for ``bind_tools``."""
        return [
            StructuredTool.from_function(
                coroutine=self.search_parts,
                name=TOOL_SEARCH_PARTS,
                description=(
                    "Search for bearing products by designation, category, "
                    "or specifications"
                ),
                args_schema=SearchArgs,
            ),
            StructuredTool.from_function(
                coroutine=self.get_part_by_designation,
                name=TOOL_GET_PART,
                description="Get a specific bearing product by designation (e.g., 6205, 6305)",
                args_schema=DesignationArgs,
            ),
            StructuredTool.from_function(
                coroutine=self.get_part_dimensions,
                name=TOOL_GET_DIMENSIONS,
                description="Get bearing dimensions and specifications",
                args_schema=DesignationArgs,
            ),
            StructuredTool.from_function(
                coroutine=self.get_part_performance,
                name=TOOL_GET_PERFORMANCE,
                description="Get bearing performance data (load ratings, speeds)",
                args_schema=DesignationArgs,
            ),
            StructuredTool.from_function(
                coroutine=self.compare_parts,
                name=TOOL_COMPARE_PARTS,
                description="Compare two bearing products",
                args_schema=CompareArgs,
            ),
        ]
