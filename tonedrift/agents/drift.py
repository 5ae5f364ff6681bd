"""Drift Analysis Agent.

Sends the composed journal payload to the completion endpoint with the
fixed scoring rubric. One request per call, no retries.
"""

import logging

from tonedrift.agents.base import CompletionClient, create_agent, run_agent_async, run_agent_sync
from tonedrift.composer import SYSTEM_PROMPT
from tonedrift.errors import TransportError

logger = logging.getLogger(__name__)


AGENT_NAME = "Drift Analysis Agent"


class DriftAnalysisAgent:
    """Agent that returns the raw model text for a drift analysis request."""

    def __init__(self, client: CompletionClient):
        """Initialize the agent.

        Args:
            client: Completion client with credentials already supplied.
        """
        self.client = client

    def complete(self, user_message: str) -> str:
        """Issue exactly one completion request.

        Args:
            user_message: The composed user message.

        Returns:
            Raw text of the first completion.

        Raises:
            TransportError: On any failure, with the original message.
        """
        try:
            agent = create_agent(AGENT_NAME, SYSTEM_PROMPT, self.client)
            return run_agent_sync(agent, user_message, self.client)
        except TransportError:
            raise
        except Exception as e:
            logger.warning("Completion request failed: %s", e)
            raise TransportError(str(e)) from e

    async def complete_async(self, user_message: str) -> str:
        """Async variant of :meth:`complete`."""
        try:
            agent = create_agent(AGENT_NAME, SYSTEM_PROMPT, self.client)
            return await run_agent_async(agent, user_message, self.client)
        except TransportError:
            raise
        except Exception as e:
            logger.warning("Completion request failed: %s", e)
            raise TransportError(str(e)) from e
