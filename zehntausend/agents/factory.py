"""
Zehntausend - Agent Factory

Turns a seat's controller kind into an agent instance. This is the only
place that knows which implementation backs which kind.
"""

from __future__ import annotations

import httpx

from zehntausend.agents.base import Agent, RetryPolicy
from zehntausend.agents.custom import CustomAgent
from zehntausend.agents.gemini import GeminiAgent
from zehntausend.agents.greedy import GreedyAgent
from zehntausend.config.settings import Settings, get_settings
from zehntausend.engine.base import ControllerKind

AGENT_NAMES: dict[ControllerKind, str] = {
    ControllerKind.HUMAN: "Player",
    ControllerKind.GREEDY: "Greedy Bot",
    ControllerKind.GEMINI: "Gemini AI",
    ControllerKind.CUSTOM: "Custom API",
}


def create_agent(
    kind: ControllerKind | str,
    settings: Settings | None = None,
    *,
    endpoint: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> Agent | None:
    """
    Build the agent for a controller kind.

    Args:
        kind: Controller kind (enum member or its value)
        settings: Settings to read credentials and retry budgets from
        endpoint: Remote URI for CUSTOM seats (falls back to settings)
        client: Optional shared HTTP client for network agents

    Returns:
        The agent, or None for human seats
    """
    kind = ControllerKind(kind)
    settings = settings or get_settings()

    if kind is ControllerKind.HUMAN:
        return None

    if kind is ControllerKind.GREEDY:
        return GreedyAgent(think_delay=settings.greedy_think_delay)

    if kind is ControllerKind.GEMINI:
        return GeminiAgent(
            settings.gemini_api_key,
            model=settings.gemini_model,
            endpoint=settings.gemini_endpoint,
            timeout=settings.gemini_timeout,
            policy=RetryPolicy(
                max_retries=settings.gemini_max_retries,
                base_delay=settings.gemini_base_delay,
                max_delay=settings.gemini_max_delay,
            ),
            client=client,
        )

    return CustomAgent(
        endpoint or settings.custom_agent_uri,
        timeout=settings.custom_agent_timeout,
        network_policy=RetryPolicy(
            max_retries=settings.custom_max_network_retries,
            base_delay=settings.custom_base_delay,
            max_delay=settings.custom_max_delay,
        ),
        max_legal_retries=settings.custom_max_legal_retries,
        client=client,
    )
