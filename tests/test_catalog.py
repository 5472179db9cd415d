"""Tests for the part model, catalog store, loader and formatting."""

from __future__ import annotations

import json
from pathlib import Path

from bearingbot.configs.system import CatalogConfig
from bearingbot.core.catalog import (
    CatalogStore,
    format_comparison,
    format_details,
    format_summary,
    load_catalog,
)
from bearingbot.core.models import Part
from bearingbot.core.models.catalog import format_quantity, to_snake


def _part(designation: str, **fields) -> Part:
    return Part.model_validate({"id": f"{designation}-id", "designation": designation, **fields})


# =========================================================================
# Part model
# =========================================================================


class TestPartModel:
    def test_camel_and_pascal_keys_are_normalized(self):
        part = Part.model_validate(
            {
                "Id": "x-1",
                "Designation": "6205",
                "shortDescription": "Deep groove ball bearing",
                "Dimensions": [{"Name": "Bore diameter", "Value": 25, "Unit": "mm", "Symbol": "d"}],
                "performance": [{"name": "Basic dynamic load rating", "symbolicCode": "C", "value": 14.8, "unit": "kN"}],
            }
        )
        assert part.id == "x-1"
        assert part.short_description == "Deep groove ball bearing"
        assert part.dimension("d").value == 25
        assert part.rating("C").value == 14.8

    def test_to_snake(self):
        assert to_snake("shortDescription") == "short_description"
        assert to_snake("ShortDescription") == "short_description"
        assert to_snake("short_description") == "short_description"

    def test_value_rendering_keeps_integers_and_decimals(self):
        assert format_quantity(52, "mm") == "52 mm"
        assert format_quantity(14.8, "kN") == "14.8 kN"
        assert format_quantity(25.0, "mm") == "25 mm"
        assert format_quantity("SKF Explorer", "") == "SKF Explorer"
        assert format_quantity(None, "mm") == "mm"

    def test_search_attributes(self, catalog):
        part = catalog.get_by_id("6205")
        attrs = part.search_attributes

        assert attrs["designation"] == "6205"
        assert attrs["dim_outside diameter"] == "52 mm"
        assert attrs["dim_b"] == "15 mm"
        assert attrs["prop_tolerance class"] == "Class P6 (P6)"
        assert attrs["perf_basic dynamic load rating"] == "14.8 kN"
        assert attrs["perf_c0"] == "7.8 kN"
        assert attrs["log_product net weight"] == "0.125 kg"

    def test_search_attributes_are_a_copy(self, catalog):
        part = catalog.get_by_id("6205")
        part.search_attributes["designation"] = "changed"
        assert part.search_attributes["designation"] == "6205"


# =========================================================================
# CatalogStore
# =========================================================================


class TestCatalogStore:
    def test_designation_only_match(self, catalog):
        results = catalog.search("6205")
        assert [p.designation for p in results] == ["6205"]

    def test_terms_are_or_combined(self):
        store = CatalogStore(
            [
                _part("1", description="A roller for conveyors"),
                _part("2", category="Ball screws"),
                _part("3", benefits="Quiet bearing design"),
            ]
        )
        results = store.search("ball bearing")
        assert [p.designation for p in results] == ["2", "3"]

    def test_case_insensitive(self, catalog):
        assert len(catalog.search("DEEP GROOVE")) == 2

    def test_matches_search_attribute_values(self, catalog):
        results = catalog.search("explorer")
        assert [p.designation for p in results] == ["6205"]

    def test_blank_query_returns_everything_in_load_order(self, catalog):
        assert [p.designation for p in catalog.search("   ")] == ["6205", "6305"]
        assert len(catalog.search("")) == 2

    def test_no_match(self, catalog):
        assert catalog.search("spherical") == []

    def test_get_by_id_or_designation(self, catalog):
        assert catalog.get_by_id("6305-PIM-EN-METRIC").designation == "6305"
        assert catalog.get_by_id("6205").id == "6205-pim-en-metric"
        assert catalog.get_by_id("62") is None
        assert catalog.get_by_id("") is None

    def test_get_by_category(self, catalog):
        assert len(catalog.get_by_category("deep groove ball bearings")) == 2
        assert catalog.get_by_category("Ball bearings") == []

    def test_store_is_detached_from_input_list(self):
        parts = [_part("1")]
        store = CatalogStore(parts)
        parts.append(_part("2"))
        assert len(store) == 1


# =========================================================================
# Loader
# =========================================================================


def _write(path: Path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


class TestLoadCatalog:
    def test_loads_json_files(self, tmp_path):
        _write(tmp_path / "a.json", {"Id": "a", "Designation": "6001", "Category": "Deep groove ball bearings"})
        _write(tmp_path / "b.json", {"id": "b", "designation": "22205"})

        store = load_catalog(CatalogConfig(data_dir=tmp_path))

        assert [p.designation for p in store] == ["6001", "22205"]

    def test_bad_files_are_skipped(self, tmp_path):
        _write(tmp_path / "good.json", {"id": "g", "designation": "6001"})
        (tmp_path / "broken.json").write_text("{oops", encoding="utf-8")
        _write(tmp_path / "wrong.json", {"id": "w", "dimensions": "not a list"})

        store = load_catalog(CatalogConfig(data_dir=tmp_path))

        assert [p.designation for p in store] == ["6001"]

    def test_missing_dir_falls_back_to_sample(self, tmp_path):
        store = load_catalog(CatalogConfig(data_dir=tmp_path / "nope"))
        assert [p.designation for p in store] == ["6205", "6305"]

    def test_sample_fallback_can_be_disabled(self, tmp_path):
        store = load_catalog(
            CatalogConfig(data_dir=tmp_path, use_sample_when_empty=False)
        )
        assert len(store) == 0


# =========================================================================
# Formatting
# =========================================================================


class TestFormatting:
    def test_summary_has_key_dimensions_and_dynamic_load(self, catalog):
        text = format_summary(catalog.get_by_id("6205"))
        assert "**6205 - 6205**" in text
        assert "Bore: 25 mm" in text
        assert "Outside: 52 mm" in text
        assert "Width: 15 mm" in text
        assert "Dynamic Load: 14.8 kN" in text

    def test_details_limit_properties(self):
        part = _part(
            "9",
            properties=[{"name": f"p{i}", "value": str(i)} for i in range(8)],
        )
        text = format_details(part)
        assert "- p4: 4" in text
        assert "- p5: 5" not in text

    def test_comparison_joins_on_symbol_with_na(self):
        first = _part(
            "A1",
            dimensions=[
                {"name": "Bore diameter", "symbol": "d", "value": 25, "unit": "mm"},
                {"name": "Chamfer", "symbol": "r1,2", "value": 1, "unit": "mm"},
            ],
            performance=[{"name": "Basic dynamic load rating", "symbol": "C", "value": 14.8, "unit": "kN"}],
        )
        second = _part(
            "B2",
            dimensions=[{"name": "Bore", "symbol": "d", "value": 30, "unit": "mm"}],
            performance=[{"name": "Dynamic load", "symbol": "C", "value": 22.5, "unit": "kN"}],
        )

        text = format_comparison(first, second)

        assert "**Comparison: A1 vs B2**" in text
        assert "- Bore diameter (d): A1=25 mm, B2=30 mm" in text
        assert "- Chamfer (r1,2): A1=1 mm, B2=N/A" in text
        assert "- Basic dynamic load rating (C): A1=14.8 kN, B2=22.5 kN" in text

    def test_comparison_reports_symbols_only_on_second_part(self, catalog):
        text = format_comparison(catalog.get_by_id("6305"), catalog.get_by_id("6205"))
        assert "- Limiting speed (nlim): 6305=N/A, 6205=18000 rmin" in text

    def test_comparison_never_pairs_entries_without_symbol(self):
        first = _part(
            "A1",
            performance=[{"name": "Reference speed", "value": 28000, "unit": "rmin"}],
        )
        second = _part(
            "B2",
            performance=[{"name": "Reference speed", "value": 24000, "unit": "rmin"}],
        )

        text = format_comparison(first, second)

        assert "- Reference speed: A1=28000 rmin, B2=N/A" in text
        assert "- Reference speed: A1=N/A, B2=24000 rmin" in text
