"""End-to-end tests for analysis sessions.

**Feature: tone-drift**
"""

import asyncio
import json
import re
from unittest.mock import MagicMock, patch

import pytest

from tonedrift.agents import CompletionClient, DriftAnalysisAgent
from tonedrift.chart import project
from tonedrift.composer import NOT_ENOUGH_ENTRIES
from tonedrift.interpreter import PARSE_FAILED
from tonedrift.models import EntryBook, JournalEntry
from tonedrift.session import AnalysisSession


RESPONSE = {
    "overall_trajectory": "Dip and Rebound",
    "drift_type": "V-Shape Recovery",
    "entries": [
        {"entry_number": 1, "score": 5},
        {"entry_number": 2, "score": -3},
        {"entry_number": 3, "score": 8},
    ],
    "pattern_shifts": [
        {"between_entries": "1 → 2", "direction": "negative", "magnitude": 8, "description": "Drop."},
    ],
    "key_themes": ["work", "rest"],
    "drift_summary": "A dip followed by recovery.",
    "wellbeing_indicator": "Improving",
}


def model_output(payload: dict) -> str:
    return f"Here is the analysis:\n```json\n{json.dumps(payload)}\n```"


def make_session(texts: list[str], api_key: str = "test-key") -> AnalysisSession:
    book = EntryBook([JournalEntry(text=t) for t in texts])
    return AnalysisSession(DriftAnalysisAgent(CompletionClient(api_key=api_key)), book)


@pytest.fixture
def mock_runner():
    with patch("tonedrift.agents.base.Runner") as runner:
        runner.run_sync.return_value = MagicMock(final_output=model_output(RESPONSE))
        yield runner


class TestEndToEnd:
    """
    **Feature: tone-drift, Property 8: Single Request Analysis**

    Three entries produce one request with three numbered blocks, and the
    scored response projects onto the chart by position.
    """

    def test_three_entries(self, mock_runner):
        session = make_session(["Good start.", "Rough day.", "Feeling great!"])
        result = session.analyze()

        assert mock_runner.run_sync.call_count == 1
        message = mock_runner.run_sync.call_args[0][1]
        headers = re.findall(r"^Entry (\d+):", message, flags=re.MULTILINE)
        assert headers == ["1", "2", "3"]
        assert message.index("Good start.") < message.index("Rough day.") < message.index("Feeling great!")

        assert result is session.analysis
        assert session.error is None
        assert session.loading is False

        projection = project(result.entries)
        assert len(projection.markers) == 3
        first, middle, last = projection.markers
        assert middle.y > projection.zero_y
        assert first.y < projection.zero_y
        assert last.y < projection.zero_y

    def test_validation_error_makes_no_call(self, mock_runner):
        session = make_session(["Only this one.", "   "])

        assert session.analyze() is None
        assert session.error == NOT_ENOUGH_ENTRIES
        assert session.analysis is None
        mock_runner.run_sync.assert_not_called()

    def test_transport_error_is_reported(self, mock_runner):
        mock_runner.run_sync.side_effect = ConnectionError("Connection refused")
        session = make_session(["a", "b"])

        assert session.analyze() is None
        assert session.error == "Connection refused"
        assert session.analysis is None
        assert session.loading is False
        assert mock_runner.run_sync.call_count == 1

    def test_missing_credential_is_a_transport_error(self, mock_runner):
        session = make_session(["a", "b"], api_key=None)

        assert session.analyze() is None
        assert "API key" in session.error
        mock_runner.run_sync.assert_not_called()

    def test_parse_error_is_reported(self, mock_runner):
        mock_runner.run_sync.return_value = MagicMock(final_output="Sorry, I can't help.")
        session = make_session(["a", "b"])

        assert session.analyze() is None
        assert session.error == PARSE_FAILED
        assert session.analysis is None

    def test_malformed_json_sets_no_result(self, mock_runner):
        mock_runner.run_sync.return_value = MagicMock(final_output='{"a":}')
        session = make_session(["a", "b"])

        assert session.analyze() is None
        assert session.analysis is None
        assert session.error == PARSE_FAILED

    def test_balanced_strategy(self, mock_runner):
        mock_runner.run_sync.return_value = MagicMock(
            final_output=json.dumps(RESPONSE) + "\nNote: scores use {-10..10}."
        )
        session = make_session(["a", "b"])
        session.strategy = "balanced"

        assert session.analyze().drift_type == "V-Shape Recovery"


class TestResultReplacement:
    """Each analysis replaces the previous result wholesale."""

    def test_second_result_replaces_first(self, mock_runner):
        session = make_session(["a", "b"])
        session.analyze()
        assert len(session.analysis.pattern_shifts) == 1

        partial = {k: v for k, v in RESPONSE.items() if k != "pattern_shifts"}
        partial["drift_type"] = "Stable"
        mock_runner.run_sync.return_value = MagicMock(final_output=json.dumps(partial))
        session.analyze()

        assert session.analysis.drift_type == "Stable"
        assert session.analysis.pattern_shifts == []

    def test_failure_clears_previous_result(self, mock_runner):
        session = make_session(["a", "b"])
        session.analyze()
        mock_runner.run_sync.side_effect = RuntimeError("boom")

        session.analyze()
        assert session.analysis is None
        assert session.error == "boom"

    def test_validation_failure_keeps_previous_result(self, mock_runner):
        session = make_session(["a", "b"])
        previous = session.analyze()
        session.book.update(session.book[1].id, "text", "")

        session.analyze()
        assert session.analysis is previous
        assert session.error == NOT_ENOUGH_ENTRIES


class TestConcurrentTrigger:
    """
    **Feature: tone-drift, Property 9: Single In-Flight Request**

    While a request is pending, edits are allowed but a second trigger
    is refused without a request.
    """

    def test_second_trigger_refused_while_pending(self):
        calls = []

        async def scenario():
            release = asyncio.Event()

            async def fake_run(agent, message):
                calls.append(message)
                await release.wait()
                return MagicMock(final_output=model_output(RESPONSE))

            with patch("tonedrift.agents.base.Runner") as runner:
                runner.run = fake_run
                session = make_session(["first", "second"])

                pending = asyncio.create_task(session.analyze_async())
                await asyncio.sleep(0)
                assert session.loading is True

                refused = await session.analyze_async()
                session.book.update(session.book[0].id, "text", "edited while pending")
                session.book.add(text="added while pending")

                release.set()
                result = await pending
                return session, refused, result

        session, refused, result = asyncio.run(scenario())

        assert refused is None
        assert len(calls) == 1
        assert "edited while pending" not in calls[0]
        assert result is session.analysis
        assert session.loading is False
        assert len(session.book) == 3
