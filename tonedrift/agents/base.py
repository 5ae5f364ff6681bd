"""Base utilities for the completion agent.

This module wraps the OpenAI Agents SDK so the rest of tonedrift only deals
with an explicitly constructed ``CompletionClient`` and plain strings.
"""

import logging
import os
from typing import Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, OpenAIChatCompletionsModel, Runner
from openai import AsyncOpenAI

from tonedrift.errors import TransportError

logger = logging.getLogger(__name__)


# xAI exposes an OpenAI-compatible chat completions API
DEFAULT_BASE_URL = "https://api.x.ai/v1"
DEFAULT_MODEL = "grok-2-latest"


class CompletionClient:
    """Handle to a chat-completion endpoint.

    Credentials are fixed at construction. Nothing is validated here: a
    missing or wrong key only shows up when a request is made.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model

    def __repr__(self) -> str:
        return f"CompletionClient(base_url={self.base_url!r}, model={self.model!r})"

    def chat_model(self) -> OpenAIChatCompletionsModel:
        """Build an SDK model bound to a fresh async OpenAI client.

        Raises:
            TransportError: If no API key was supplied.
        """
        if not self.api_key:
            raise TransportError(
                "No API key configured. Set XAI_API_KEY or add llm.api_key to your config."
            )
        openai_client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            max_retries=0,
        )
        return OpenAIChatCompletionsModel(model=self.model, openai_client=openai_client)


def create_agent(
    name: str,
    instructions: str,
    client: CompletionClient,
) -> Agent:
    """Create a tool-less agent that talks to the client's endpoint.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        client: Completion client supplying credentials and model.

    Returns:
        Configured Agent instance.
    """
    return Agent(
        name=name,
        instructions=instructions,
        tools=[],
        model=client.chat_model(),
    )


def _log_agent_call(agent: Agent, client: CompletionClient) -> None:
    """Log agent call info to terminal."""
    from rich.console import Console

    console = Console(stderr=True)
    console.print(f"[dim]🤖 Agent: {agent.name} | Model: {client.model}[/dim]")
    logger.debug("Calling %s at %s", client.model, client.base_url)


def run_agent_sync(agent: Agent, message: str, client: CompletionClient) -> str:
    """Run an agent synchronously and return its text output.

    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        client: Client the agent was created from, for logging.

    Returns:
        Agent's final output as a string.
    """
    _log_agent_call(agent, client)
    result = Runner.run_sync(agent, message)
    return str(result.final_output or "")


async def run_agent_async(agent: Agent, message: str, client: CompletionClient) -> str:
    """Run an agent asynchronously and return its text output."""
    _log_agent_call(agent, client)
    result = await Runner.run(agent, message)
    return str(result.final_output or "")
