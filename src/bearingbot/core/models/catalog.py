"""Catalog part model.

Part files come from different exporters, so keys are accepted in
camelCase, PascalCase or snake_case and normalized before validation.
Measured values keep their original JSON type (``52`` stays an ``int``,
``14.8`` a ``float``, ``"SKF Explorer"`` a ``str``) so that rendering
reproduces what the catalog says.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

_KEY_ALIASES = {
    "symbolic_code": "symbol",
    "numeric_or_text_value": "value",
}

MeasuredValue = int | float | str


def to_snake(key: str) -> str:
    """``shortDescription`` / ``ShortDescription`` -> ``short_description``."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def format_value(value: MeasuredValue | None) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_quantity(value: MeasuredValue | None, unit: str = "") -> str:
    """Render ``value`` followed by ``unit``, omitting an empty unit."""
    rendered = format_value(value)
    if unit:
        return f"{rendered} {unit}".strip()
    return rendered


class _CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized = {}
        for key, value in data.items():
            snake = to_snake(str(key))
            normalized[_KEY_ALIASES.get(snake, snake)] = value
        return normalized


class Measurement(_CatalogModel):
    """One ``{name, symbol, value, unit}`` entry of a measured group."""

    name: str = ""
    symbol: str = ""
    value: MeasuredValue | None = None
    unit: str = ""

    @property
    def display(self) -> str:
        return format_quantity(self.value, self.unit)


class Part(_CatalogModel):
    """A catalog part; immutable once validated."""

    id: str = ""
    designation: str = ""
    title: str = ""
    category: str = ""
    taxonomy: str = ""
    short_description: str = ""
    description: str = ""
    benefits: str = ""
    system: str = ""
    language: str = ""
    source: str = ""

    dimensions: tuple[Measurement, ...] = ()
    properties: tuple[Measurement, ...] = ()
    performance: tuple[Measurement, ...] = ()
    logistics: tuple[Measurement, ...] = ()

    _search_attributes: dict[str, str] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._search_attributes = _build_search_attributes(self)

    @property
    def search_attributes(self) -> dict[str, str]:
        """Flattened ``<group>_<name-or-symbol>`` -> rendered value map."""
        return dict(self._search_attributes)

    def search_values(self) -> list[str]:
        return list(self._search_attributes.values())

    def dimension(self, symbol: str) -> Measurement | None:
        return _by_symbol(self.dimensions, symbol)

    def rating(self, symbol: str) -> Measurement | None:
        return _by_symbol(self.performance, symbol)


def _by_symbol(
    group: tuple[Measurement, ...], symbol: str
) -> Measurement | None:
    for entry in group:
        if entry.symbol == symbol:
            return entry
    return None


def _build_search_attributes(part: Part) -> dict[str, str]:
    attributes = {
        "designation": part.designation,
        "category": part.category,
        "taxonomy": part.taxonomy,
        "description": part.description,
        "benefits": part.benefits,
    }
    groups = (
        ("dim", part.dimensions, True),
        ("prop", part.properties, False),
        ("perf", part.performance, True),
        ("log", part.logistics, False),
    )
    for prefix, entries, with_symbol in groups:
        for entry in entries:
            rendered = entry.display
            attributes[f"{prefix}_{entry.name.lower()}"] = rendered
            if with_symbol and entry.symbol:
                attributes[f"{prefix}_{entry.symbol.lower()}"] = rendered
    return attributes
