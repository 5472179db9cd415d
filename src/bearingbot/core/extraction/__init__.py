"""Best-effort extractors with deterministic fallbacks."""

from .base import (  # noqa: F401
    Extraction,
    ExtractionParseError,
    Fallback,
    Parsed,
)
from .feedback import (  # noqa: F401
    FeedbackExtractor,
    default_feedback,
    feedback_from_output,
    parse_feedback,
)
from .query import (  # noqa: F401
    QueryExtractor,
    extract_by_keywords,
    parse_query_json,
)
