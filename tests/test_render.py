"""Tests for terminal rendering.

**Feature: tone-drift**
"""

import io

from hypothesis import given, settings
from hypothesis import strategies as st
from rich.console import Console

from tonedrift.chart import project
from tonedrift.models import AnalysisResult, ScoredEntry
from tonedrift.render import CHART_ROWS, render_chart, render_report


FULL = {
    "overall_trajectory": "Recovery Arc",
    "drift_type": "V-Shape Recovery",
    "entries": [
        {"entry_number": 1, "score": 5, "dominant_emotion": "hopeful",
         "emotion_tags": ["optimistic"], "summary": "Upbeat."},
        {"entry_number": 2, "score": -3, "dominant_emotion": "drained"},
        {"entry_number": 3, "score": 8, "dominant_emotion": "joyful"},
    ],
    "pattern_shifts": [
        {"between_entries": "2 → 3", "direction": "positive", "magnitude": 9,
         "description": "Strong rebound."},
    ],
    "key_themes": ["work stress", "hope"],
    "drift_summary": "Things improved.",
    "wellbeing_indicator": "Improving",
}


def render_text(result: AnalysisResult) -> str:
    buffer = io.StringIO()
    render_report(result, Console(file=buffer, width=120, color_system=None))
    return buffer.getvalue()


class TestReport:
    """
    **Feature: tone-drift, Property 10: Lenient Rendering**

    Reports render whatever fields are present without raising.
    """

    def test_full_report(self):
        output = render_text(AnalysisResult.from_payload(FULL))

        for text in ("Overall Trajectory", "Recovery Arc", "V-Shape Recovery", "Improving",
                     "Emotional Score Over Time", "Entry-by-Entry Breakdown", "+8",
                     "Pattern Shifts Detected", "Entries 2 → 3", "Magnitude: 9/10",
                     "work stress", "Things improved."):
            assert text in output

    def test_missing_pattern_shifts_omits_section(self):
        payload = {k: v for k, v in FULL.items() if k != "pattern_shifts"}
        output = render_text(AnalysisResult.from_payload(payload))

        assert "Pattern Shifts Detected" not in output
        assert "Key Themes" in output

    def test_empty_result_renders(self):
        output = render_text(AnalysisResult())

        assert "Overall Trajectory" in output
        assert "?" in output
        assert "Emotional Score Over Time" not in output

    def test_unknown_enums_render(self):
        payload = dict(FULL, drift_type="Unknown-Value", wellbeing_indicator="Ecstatic")
        output = render_text(AnalysisResult.from_payload(payload))
        assert "Unknown-Value" in output

    def test_markup_in_model_text_is_literal(self):
        payload = dict(FULL, entries=[
            {"entry_number": 1, "score": 1, "summary": "[bold]not markup[/bold]"},
            {"entry_number": 2, "score": 2},
        ])
        output = render_text(AnalysisResult.from_payload(payload))
        assert "[bold]not markup[/bold]" in output


class TestTerminalChart:
    """The terminal chart is rasterized from the projection."""

    def test_one_marker_per_entry(self):
        entries = [ScoredEntry(entry_number=i, score=s) for i, s in enumerate([5, -3, 8], 1)]
        chart = render_chart(project(entries)).plain
        rows = chart.split("\n")

        assert chart.count("●") == 3
        assert len(rows) == CHART_ROWS + 1
        assert rows[-1].split() == ["1", "2", "3"]

    def test_zero_line_row(self):
        entries = [ScoredEntry(score=10), ScoredEntry(score=10)]
        rows = render_chart(project(entries)).plain.split("\n")
        zero_row = rows[CHART_ROWS // 2]

        assert zero_row.strip().startswith("0")
        assert "─" in zero_row

    @given(scores=st.lists(st.integers(min_value=-10, max_value=10), min_size=2, max_size=40))
    @settings(max_examples=50)
    def test_any_scores_rasterize(self, scores: list[int]):
        entries = [ScoredEntry(score=s) for s in scores]
        chart = render_chart(project(entries)).plain
        assert 1 <= chart.count("●") <= len(scores)
