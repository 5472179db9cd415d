"""Normalized agent output."""

from pydantic import BaseModel, Field

from .constants import QUERY_TYPE_GENERAL, SOURCE_PRODUCT_DATABASE


class AgentResponse(BaseModel):
    """What an agent hands back to the orchestrator for one turn."""

    response: str = ""
    query_type: str = QUERY_TYPE_GENERAL
    source_data: str = SOURCE_PRODUCT_DATABASE
    from_cache: bool = False
