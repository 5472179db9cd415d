"""In-memory, read-only catalog of parts."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from bearingbot.core.models import Part
from bearingbot.infra.telemetry import (
    ATTR_CATALOG_QUERY,
    ATTR_CATALOG_RESULT_COUNT,
    SPAN_CATALOG_SEARCH,
    tracer,
)

logger = logging.getLogger(__name__)


def _matches(part: Part, terms: list[str]) -> bool:
    fields = [
        part.designation,
        part.category,
        part.taxonomy,
        part.description,
        part.benefits,
        *part.search_values(),
    ]
    haystack = [f.lower() for f in fields if f]
    return any(term in value for term in terms for value in haystack)


class CatalogStore:
    """Owns the loaded parts; nothing else holds a mutable reference.

    Parts are kept as a tuple in load order.  Search results preserve
    that order; there is no ranking.
    """

    def __init__(self, parts: Iterable[Part]) -> None:
        self._parts: tuple[Part, ...] = tuple(parts)

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[Part]:
        return iter(self._parts)

    def search(self, query: str) -> list[Part]:
        """Return parts where any whitespace-separated term is a substring
        of any searchable field (case-insensitive).

        A blank query returns the whole catalog.
        """
        with tracer.start_as_current_span(SPAN_CATALOG_SEARCH) as span:
            span.set_attribute(ATTR_CATALOG_QUERY, query or "")
            terms = (query or "").lower().split()
            if not terms:
                results = list(self._parts)
            else:
                results = [p for p in self._parts if _matches(p, terms)]
            span.set_attribute(ATTR_CATALOG_RESULT_COUNT, len(results))
            logger.debug("Search for %r returned %d parts", query, len(results))
            return results

    def get_by_id(self, id_or_designation: str) -> Part | None:
        """Exact, case-insensitive match on ``id`` or ``designation``."""
        needle = id_or_designation.strip().lower()
        if not needle:
            return None
        for part in self._parts:
            if part.id.lower() == needle or part.designation.lower() == needle:
                return part
        return None

    def get_by_category(self, category: str) -> list[Part]:
        needle = category.strip().lower()
        return [p for p in self._parts if p.category.lower() == needle]
