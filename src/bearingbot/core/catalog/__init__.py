"""Part catalog: loading, search and rendering."""

from .formatting import (
    format_comparison,
    format_details,
    format_dimensions,
    format_performance,
    format_summaries,
    format_summary,
)
from .loader import build_catalog, get_catalog, load_catalog
from .sample import sample_parts
from .store import CatalogStore

__all__ = [
    "CatalogStore",
    "build_catalog",
    "format_comparison",
    "format_details",
    "format_dimensions",
    "format_performance",
    "format_summaries",
    "format_summary",
    "get_catalog",
    "load_catalog",
    "sample_parts",
]
