"""Tests for query and feedback extraction and their fallbacks."""

from __future__ import annotations

import pytest

from bearingbot.core.extraction import (
    ExtractionParseError,
    Fallback,
    FeedbackExtractor,
    Parsed,
    QueryExtractor,
    extract_by_keywords,
    feedback_from_output,
    parse_feedback,
    parse_query_json,
)


class TestKeywordFallback:
    def test_comparison_keeps_single_designation(self):
        query = extract_by_keywords("compare 6205 vs 6305 bore")

        assert query.query_type == "comparison"
        assert "bore" in query.requested_attributes
        # Only one designation slot exists; the second numeral is not kept.
        assert query.product_name == "6205"
        assert "6305" not in query.model_dump_json()

    def test_category_first_keyword_wins(self):
        query = extract_by_keywords("Show me a deep groove ball bearing")
        assert query.product_category == "deep groove"

    def test_attribute_tags(self):
        query = extract_by_keywords("Width plus rpm for 6305?")
        assert query.requested_attributes == ["width", "speed"]
        assert query.product_name == "6305"
        assert query.query_type == "general"

    def test_load_keywords(self):
        query = extract_by_keywords("rating c0 for 22205")
        assert query.requested_attributes == ["load"]
        assert query.product_name == "22205"

    def test_numerals_outside_4_5_digits_ignored(self):
        query = extract_by_keywords("part 123 or 123456")
        assert query.product_name is None

    def test_empty_utterance(self):
        query = extract_by_keywords("")
        assert query.product_name is None
        assert query.product_category is None
        assert query.requested_attributes == []
        assert query.query_type == "general"


class TestParseQueryJson:
    def test_full_object(self):
        query = parse_query_json(
            '{"productName": "6205", "productCategory": "deep groove", '
            '"requestedAttributes": ["bore", "bore", "width"], "queryType": "specific"}'
        )
        assert query.product_name == "6205"
        assert query.product_category == "deep groove"
        assert query.requested_attributes == ["bore", "width"]
        assert query.query_type == "specific"

    def test_permissive_fields(self):
        query = parse_query_json(
            '```json\n{"productName": null, "requestedAttributes": ["load", 3, null]}\n```'
        )
        assert query.product_name is None
        assert query.requested_attributes == ["load"]
        assert query.query_type == "general"

    def test_unknown_query_kind_becomes_general(self):
        assert parse_query_json('{"queryType": "Specific"}').query_type == "specific"
        assert parse_query_json('{"queryType": "ranking"}').query_type == "general"

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", ""])
    def test_non_object_raises(self, raw):
        with pytest.raises(ExtractionParseError):
            parse_query_json(raw)

    def test_oversized_number_raises_parse_error(self):
        with pytest.raises(ExtractionParseError):
            parse_query_json('{"productName": ' + "1" * 5000 + "}")


class TestQueryExtractor:
    @pytest.mark.asyncio
    async def test_model_json_is_parsed(self, model, port):
        model.replies = ['{"productName": "6305", "queryType": "specific"}']

        result = await QueryExtractor(port).extract("tell me about 6305")

        assert isinstance(result, Parsed)
        assert result.value.product_name == "6305"
        assert "tell me about 6305" in model.calls[0][-1].content

    @pytest.mark.asyncio
    async def test_unparseable_output_falls_back(self, model, port):
        model.replies = ["Sure! The bearing is 6205."]

        result = await QueryExtractor(port).extract("compare 6205 vs 6305 bore")

        assert isinstance(result, Fallback)
        assert result.value.query_type == "comparison"

    @pytest.mark.asyncio
    async def test_port_failure_falls_back(self, model, port):
        model.replies = [TimeoutError("slow")]

        result = await QueryExtractor(port).extract("width of 6205")

        assert isinstance(result, Fallback)
        assert result.value.product_name == "6205"
        assert result.value.requested_attributes == ["width"]

    @pytest.mark.asyncio
    async def test_oversized_number_falls_back(self, model, port):
        model.replies = ['{"productName": ' + "1" * 5000 + "}"]

        result = await QueryExtractor(port).extract("width of 6205")

        assert isinstance(result, Fallback)
        assert result.value.product_name == "6205"


class TestFeedbackParsing:
    def test_rating_and_text(self):
        assert parse_feedback("3|too slow", "it was too slow") == (3, "too slow")

    def test_splits_on_first_separator_only(self):
        assert parse_feedback(" 5 | fast | accurate ", "u") == (5, "fast | accurate")

    def test_bare_rating_keeps_utterance(self):
        result = feedback_from_output("5", "loved it")
        assert isinstance(result, Parsed)
        assert result.value == (5, "loved it")

    @pytest.mark.parametrize("raw", ["great, love it", "x|nice", "9|too good", "0|bad", "7"])
    def test_invalid_output_raises(self, raw):
        with pytest.raises(ExtractionParseError):
            parse_feedback(raw, "utterance")

    def test_default_when_no_separator(self):
        result = feedback_from_output("great, love it", "great, love it")
        assert isinstance(result, Fallback)
        assert result.value == (3, "great, love it")

    def test_default_uses_raw_utterance(self):
        result = feedback_from_output("seven|meh", "the answer was meh")
        assert result.value == (3, "the answer was meh")


class TestFeedbackExtractor:
    @pytest.mark.asyncio
    async def test_model_output_parsed(self, model, port):
        model.replies = ["2|missing the weight"]
        result = await FeedbackExtractor(port).extract("you forgot the weight")
        assert isinstance(result, Parsed)
        assert result.value == (2, "missing the weight")

    @pytest.mark.asyncio
    async def test_port_failure_defaults(self, model, port):
        model.replies = [ConnectionError("down")]
        result = await FeedbackExtractor(port).extract("not helpful")
        assert isinstance(result, Fallback)
        assert result.value == (3, "not helpful")
