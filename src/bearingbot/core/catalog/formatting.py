"""Markdown renderings of parts handed back to the model as tool output."""

from __future__ import annotations

from collections.abc import Iterable

from bearingbot.core.models import Measurement, Part

NOT_AVAILABLE = "N/A"
MAX_KEY_PROPERTIES = 5

_SUMMARY_DIMENSIONS = (("d", "Bore"), ("D", "Outside"), ("B", "Width"))


def _label(entry: Measurement) -> str:
    if entry.symbol:
        return f"{entry.name} ({entry.symbol})"
    return entry.name


def format_summary(part: Part) -> str:
    lines = [
        f"**{part.designation} - {part.title}**",
        f"Category: {part.category}",
        f"Description: {part.short_description}",
    ]
    for symbol, label in _SUMMARY_DIMENSIONS:
        dim = part.dimension(symbol)
        if dim is not None:
            lines.append(f"{label}: {dim.display}")
    dynamic = part.rating("C")
    if dynamic is not None:
        lines.append(f"Dynamic Load: {dynamic.display}")
    return "\n".join(lines)


def format_summaries(parts: Iterable[Part]) -> str:
    return "\n\n".join(format_summary(p) for p in parts)


def format_dimensions(part: Part) -> str:
    lines = ["**Dimensions:**"]
    lines.extend(f"- {_label(d)}: {d.display}" for d in part.dimensions)
    return "\n".join(lines)


def format_performance(part: Part) -> str:
    lines = ["**Performance Data:**"]
    lines.extend(f"- {_label(p)}: {p.display}" for p in part.performance)
    return "\n".join(lines)


def format_details(part: Part) -> str:
    sections = [
        "\n".join(
            [
                f"**{part.designation} - {part.title}**",
                f"Category: {part.category}",
                f"Taxonomy: {part.taxonomy}",
            ]
        ),
        f"**Description:** {part.description}",
        f"**Benefits:** {part.benefits}",
        format_dimensions(part),
        format_performance(part),
    ]
    if part.properties:
        props = ["**Key Properties:**"]
        props.extend(
            f"- {p.name}: {p.display}"
            for p in part.properties[:MAX_KEY_PROPERTIES]
        )
        sections.append("\n".join(props))
    return "\n\n".join(sections)


def _compare_group(
    left: tuple[Measurement, ...],
    right: tuple[Measurement, ...],
    a: str,
    b: str,
) -> list[str]:
    # Pair only on an equal symbolic code; entries without one never pair.
    right_by_symbol: dict[str, Measurement] = {}
    for entry in right:
        if entry.symbol:
            right_by_symbol.setdefault(entry.symbol, entry)

    lines: list[str] = []
    matched: set[str] = set()
    for entry in left:
        other = right_by_symbol.get(entry.symbol) if entry.symbol else None
        if other is not None:
            matched.add(entry.symbol)
        value_b = other.display if other is not None else NOT_AVAILABLE
        lines.append(f"- {_label(entry)}: {a}={entry.display}, {b}={value_b}")
    for entry in right:
        if entry.symbol in matched:
            continue
        lines.append(f"- {_label(entry)}: {a}={NOT_AVAILABLE}, {b}={entry.display}")
    return lines


def format_comparison(first: Part, second: Part) -> str:
    """Side-by-side comparison joined on symbolic code.

    Values present on only one side render as ``N/A`` on the other.
    """
    a, b = first.designation, second.designation
    lines = [f"**Comparison: {a} vs {b}**", "", "**Dimensions:**"]
    lines.extend(_compare_group(first.dimensions, second.dimensions, a, b))
    lines.extend(["", "**Performance:**"])
    lines.extend(_compare_group(first.performance, second.performance, a, b))
    return "\n".join(lines)
