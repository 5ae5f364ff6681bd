"""Completion agents for tonedrift.

- CompletionClient: explicit handle to the chat-completion endpoint
- DriftAnalysisAgent: sends the analysis request and returns raw text
"""

from tonedrift.agents.base import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    CompletionClient,
    create_agent,
    run_agent_async,
    run_agent_sync,
)
from tonedrift.agents.drift import DriftAnalysisAgent

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "CompletionClient",
    "create_agent",
    "run_agent_sync",
    "run_agent_async",
    "DriftAnalysisAgent",
]
