"""Role, intent, query-type and source constants."""

from typing import Literal

# ---------------------------------------------------------------------------
# Message roles
# ---------------------------------------------------------------------------

ROLE_USER: Literal["user"] = "user"
ROLE_ASSISTANT: Literal["assistant"] = "assistant"

Role = Literal["user", "assistant"]

# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------

INTENT_QUESTION = "question"
INTENT_FEEDBACK = "feedback"

# ---------------------------------------------------------------------------
# Structured query kinds (extraction output)
# ---------------------------------------------------------------------------

QUERY_KIND_GENERAL = "general"
QUERY_KIND_SPECIFIC = "specific"
QUERY_KIND_COMPARISON = "comparison"
QUERY_KIND_LIST = "list"

QUERY_KINDS = frozenset(
    {QUERY_KIND_GENERAL, QUERY_KIND_SPECIFIC, QUERY_KIND_COMPARISON, QUERY_KIND_LIST}
)

# ---------------------------------------------------------------------------
# Response query types (post-processing output)
# ---------------------------------------------------------------------------

QUERY_TYPE_CACHED = "cached"
QUERY_TYPE_COMPARISON = "comparison"
QUERY_TYPE_DIMENSIONS = "dimensions"
QUERY_TYPE_PERFORMANCE = "performance"
QUERY_TYPE_LOGISTICS = "logistics"
QUERY_TYPE_DEFINITION = "definition"
QUERY_TYPE_CATALOG = "catalog"
QUERY_TYPE_GENERAL = "general"
QUERY_TYPE_FEEDBACK = "feedback"

# ---------------------------------------------------------------------------
# Response sources
# ---------------------------------------------------------------------------

SOURCE_REDIS_CACHE = "redis_cache"
SOURCE_GENERATED = "llm_enhanced"
SOURCE_USER_FEEDBACK = "user_feedback"
SOURCE_PRODUCT_DATABASE = "product_database"
