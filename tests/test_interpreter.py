"""Tests for response interpretation.

**Feature: tone-drift**
"""

import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tonedrift.errors import ParseError
from tonedrift.interpreter import (
    PARSE_FAILED,
    extract_json_span,
    interpret,
    parse_analysis,
)
from tonedrift.models import AnalysisResult


class TestGreedyExtraction:
    """
    **Feature: tone-drift, Property 4: JSON Span Extraction**

    The greedy strategy spans the first "{" to the last "}".
    """

    def test_extracts_object_from_prose(self):
        assert extract_json_span('Here you go: {"a":1} thanks') == '{"a":1}'

    def test_no_braces_fails(self):
        with pytest.raises(ParseError, match="Could not parse analysis"):
            extract_json_span("I am unable to analyze these entries.")

    def test_empty_text_fails(self):
        with pytest.raises(ParseError):
            extract_json_span("")

    def test_spans_nested_objects(self):
        text = 'Result:\n{"a": {"b": 1}, "c": [1, 2]}\nDone.'
        assert extract_json_span(text) == '{"a": {"b": 1}, "c": [1, 2]}'

    def test_code_fence_is_stripped(self):
        text = '```json\n{"drift_type": "Stable"}\n```'
        assert parse_analysis(text) == {"drift_type": "Stable"}

    def test_spans_from_first_to_last_brace(self):
        text = 'A {"a":1} and {"b":2}'
        assert extract_json_span(text) == '{"a":1} and {"b":2}'
        with pytest.raises(ParseError):
            parse_analysis(text)

    @given(
        payload=st.dictionaries(
            st.text(alphabet="abcdefghij_", min_size=1, max_size=10),
            st.one_of(st.integers(), st.booleans(), st.text(max_size=20)),
            max_size=8,
        ),
        before=st.text(max_size=40).filter(lambda s: "{" not in s and "}" not in s),
        after=st.text(max_size=40).filter(lambda s: "{" not in s and "}" not in s),
    )
    @settings(max_examples=100)
    def test_object_survives_surrounding_prose(self, payload: dict, before: str, after: str):
        """
        *For any* JSON object surrounded by brace-free prose, parsing
        recovers the original object.
        """
        text = before + json.dumps(payload) + after
        assert parse_analysis(text) == payload


class TestBalancedExtraction:
    """The balanced strategy stops at the first structurally closed object."""

    def test_first_of_two_objects(self):
        assert extract_json_span('A {"a":1} and {"b":2}', strategy="balanced") == '{"a":1}'

    def test_braces_inside_strings_ignored(self):
        text = 'x {"a": "}{", "b": "\\"}"} tail }'
        assert extract_json_span(text, strategy="balanced") == '{"a": "}{", "b": "\\"}"}'

    def test_restarts_after_unclosed_brace(self):
        text = 'oops { not closed {"a":1}'
        assert extract_json_span(text, strategy="balanced") == '{"a":1}'

    def test_no_object_fails(self):
        with pytest.raises(ParseError):
            extract_json_span("only { an opening brace", strategy="balanced")

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            extract_json_span("{}", strategy="regex")


class TestParsing:
    """Malformed JSON is a user-facing ParseError."""

    def test_malformed_json_fails(self):
        with pytest.raises(ParseError) as exc_info:
            parse_analysis('{"a":}')
        assert str(exc_info.value) == PARSE_FAILED

    def test_no_schema_validation(self):
        assert parse_analysis('{"unexpected": true}') == {"unexpected": True}

    def test_interpret_tolerates_missing_fields(self):
        result = interpret('Sure! {"overall_trajectory": "Recovery Arc"}')

        assert isinstance(result, AnalysisResult)
        assert result.overall_trajectory == "Recovery Arc"
        assert result.entries == []
        assert result.pattern_shifts == []
        assert result.key_themes == []
        assert result.drift_type == ""
