"""Built-in sample catalog used when no part files are available."""

from bearingbot.core.models import Part

_DEEP_GROOVE = "Deep groove ball bearings"
_DEEP_GROOVE_TAXONOMY = "Bearings Ball bearings Deep groove ball bearings"

SAMPLE_PARTS: list[dict] = [
    {
        "id": "6205-pim-en-metric",
        "designation": "6205",
        "title": "6205",
        "category": _DEEP_GROOVE,
        "taxonomy": _DEEP_GROOVE_TAXONOMY,
        "shortDescription": "Deep groove ball bearing",
        "description": (
            "Single row deep groove ball bearings are particularly versatile, "
            "have low friction and are optimized for low noise and low "
            "vibration, which enables high rotational speeds. They accommodate "
            "radial and axial loads in both directions, are easy to mount, and "
            "require less maintenance than many other bearing types."
        ),
        "benefits": (
            "Simple, versatile and robust design Low friction High-speed "
            "capability Accommodate radial and axial loads in both directions "
            "Require little maintenance"
        ),
        "system": "metric",
        "language": "en",
        "source": "pim",
        "dimensions": [
            {"name": "Outside diameter", "value": 52, "unit": "mm", "symbol": "D"},
            {"name": "Bore diameter", "value": 25, "unit": "mm", "symbol": "d"},
            {"name": "Width", "value": 15, "unit": "mm", "symbol": "B"},
        ],
        "properties": [
            {"name": "Tolerance class", "value": "Class P6 (P6)"},
            {"name": "Material, bearing", "value": "Bearing steel"},
            {"name": "Relubrication feature", "value": "Without"},
            {"name": "Coating", "value": "Without"},
            {"name": "Lubricant", "value": "None"},
        ],
        "performance": [
            {"name": "Limiting speed", "value": 18000, "unit": "rmin", "symbol": "nlim"},
            {"name": "Basic static load rating", "value": 7.8, "unit": "kN", "symbol": "C0"},
            {"name": "Reference speed", "value": 28000, "unit": "rmin"},
            {"name": "SKF performance class", "value": "SKF Explorer"},
            {"name": "Basic dynamic load rating", "value": 14.8, "unit": "kN", "symbol": "C"},
        ],
        "logistics": [
            {"name": "Product net weight", "value": 0.125, "unit": "kg"},
            {"name": "Products per pack", "value": "1"},
        ],
    },
    {
        "id": "6305-pim-en-metric",
        "designation": "6305",
        "title": "6305",
        "category": _DEEP_GROOVE,
        "taxonomy": _DEEP_GROOVE_TAXONOMY,
        "shortDescription": "Deep groove ball bearing",
        "description": "Medium series deep groove ball bearing with higher load capacity",
        "benefits": "Higher load capacity Robust design Versatile application",
        "system": "metric",
        "language": "en",
        "source": "pim",
        "dimensions": [
            {"name": "Outside diameter", "value": 62, "unit": "mm", "symbol": "D"},
            {"name": "Bore diameter", "value": 25, "unit": "mm", "symbol": "d"},
            {"name": "Width", "value": 17, "unit": "mm", "symbol": "B"},
        ],
        "performance": [
            {"name": "Basic dynamic load rating", "value": 22.5, "unit": "kN", "symbol": "C"},
            {"name": "Basic static load rating", "value": 11.5, "unit": "kN", "symbol": "C0"},
        ],
    },
]


def sample_parts() -> list[Part]:
    return [Part.model_validate(raw) for raw in SAMPLE_PARTS]
