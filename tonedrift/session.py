"""Analysis session state.

Holds the editable entries and the current analysis. Triggering an analysis
is the only suspend point: while a request is pending, entries can still be
edited but a second request is refused.
"""

import logging
from typing import Optional

from tonedrift.agents.drift import DriftAnalysisAgent
from tonedrift.composer import build_user_message, compose_payload
from tonedrift.errors import DriftError
from tonedrift.interpreter import interpret
from tonedrift.models.analysis import AnalysisResult
from tonedrift.models.entry import EntryBook

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Entries plus the result of the most recent analysis.

    Attributes:
        book: The editable entries.
        analysis: Latest successful result, or None.
        error: Message from the latest failed trigger, or None.
        loading: True while a request is in flight.
    """

    def __init__(
        self,
        agent: DriftAnalysisAgent,
        book: Optional[EntryBook] = None,
        strategy: str = "greedy",
    ):
        self.agent = agent
        self.book = book if book is not None else EntryBook()
        self.strategy = strategy
        self.analysis: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.loading = False

    def _start(self) -> Optional[str]:
        """Validate entries and enter the loading state.

        Returns:
            The user message to send, or None if the trigger is refused.
        """
        if self.loading:
            logger.info("Analysis already in progress, ignoring trigger")
            return None

        try:
            user_message = build_user_message(compose_payload(self.book))
        except DriftError as e:
            self.error = str(e)
            return None

        self.loading = True
        self.error = None
        self.analysis = None
        return user_message

    def _finish(self, raw: str) -> AnalysisResult:
        result = interpret(raw, strategy=self.strategy)
        self.analysis = result
        logger.debug("Analysis received with %d scored entries", len(result.entries))
        return result

    def analyze(self) -> Optional[AnalysisResult]:
        """Run one analysis synchronously.

        Returns:
            The new result, or None on refusal or error (see ``error``).
        """
        user_message = self._start()
        if user_message is None:
            return None

        try:
            return self._finish(self.agent.complete(user_message))
        except DriftError as e:
            self.error = str(e)
            return None
        finally:
            self.loading = False

    async def analyze_async(self) -> Optional[AnalysisResult]:
        """Run one analysis without blocking the event loop."""
        user_message = self._start()
        if user_message is None:
            return None

        try:
            return self._finish(await self.agent.complete_async(user_message))
        except DriftError as e:
            self.error = str(e)
            return None
        finally:
            self.loading = False
