"""Tagged extraction results.

Extractors never raise: the model path yields ``Parsed`` and any model
or parse failure yields ``Fallback`` carrying the deterministic default
plus the reason the model path was abandoned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

PATH_PARSED = "parsed"
PATH_FALLBACK = "fallback"


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T
    path: str = PATH_PARSED


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    reason: str
    path: str = PATH_FALLBACK


Extraction = Parsed[T] | Fallback[T]


class ExtractionParseError(ValueError):
    """Model output did not have the expected shape."""
