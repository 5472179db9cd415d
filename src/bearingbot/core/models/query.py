"""Structured product query extracted from a user utterance."""

from pydantic import BaseModel, Field, field_validator

from .constants import QUERY_KIND_GENERAL


class StructuredQuery(BaseModel):
    """Ephemeral, per-turn extraction result.

    Only a single designation fits in ``product_name``; for comparisons
    the model re-extracts both designations itself via tool arguments.
    """

    product_name: str | None = None
    product_category: str | None = None
    requested_attributes: list[str] = Field(default_factory=list)
    query_type: str = QUERY_KIND_GENERAL

    @field_validator("requested_attributes")
    @classmethod
    def _dedupe(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def add_attribute(self, tag: str) -> None:
        if tag not in self.requested_attributes:
            self.requested_attributes.append(tag)
