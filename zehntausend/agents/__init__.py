"""
Zehntausend Agents.

Greedy, hosted-model and remote-HTTP players behind one ``decide`` coroutine.
"""

from zehntausend.agents.base import (
    Agent,
    AgentConfigurationError,
    AgentError,
    AgentIllegalMoveError,
    AgentResponseError,
    AgentTransportError,
    ProgressCallback,
    RetryPolicy,
)
from zehntausend.agents.custom import CustomAgent
from zehntausend.agents.factory import AGENT_NAMES, create_agent
from zehntausend.agents.gemini import GeminiAgent
from zehntausend.agents.greedy import GreedyAgent
from zehntausend.agents.wire import AgentMoveResponse, GameStatePayload

__all__ = [
    # Contract
    "Agent",
    "ProgressCallback",
    "RetryPolicy",
    # Errors
    "AgentError",
    "AgentConfigurationError",
    "AgentIllegalMoveError",
    "AgentResponseError",
    "AgentTransportError",
    # Implementations
    "CustomAgent",
    "GeminiAgent",
    "GreedyAgent",
    "AGENT_NAMES",
    "create_agent",
    # Wire
    "AgentMoveResponse",
    "GameStatePayload",
]
