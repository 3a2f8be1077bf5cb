"""
Zehntausend - Hosted Model Agent

Asks a Gemini model for a move through the ``generateContent`` REST API,
constraining the output to the move schema. Rate limits, server errors and
transport failures are retried with capped exponential backoff; anything
else surfaces immediately.
"""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
from pydantic import ValidationError

from zehntausend.agents.base import (
    AgentConfigurationError,
    AgentResponseError,
    AgentTransportError,
    ProgressCallback,
    RetryPolicy,
    Sleeper,
    check_endpoint,
    http_session,
    is_transient_status,
    notify,
)
from zehntausend.agents.wire import MOVE_RESPONSE_SCHEMA, AgentMoveResponse, GameStatePayload
from zehntausend.engine.base import Move, ScoringVariant, Snapshot
from zehntausend.engine.rules import FIXED_TABLE_NOTE, RULES_MARKDOWN

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"


def build_prompt(snapshot: Snapshot) -> str:
    """Role, rules, the current state as JSON, and what to answer."""
    rules = RULES_MARKDOWN
    if snapshot.scoring_variant is ScoringVariant.FIXED_TABLE:
        rules = f"{rules}\n{FIXED_TABLE_NOTE}"
    state = json.dumps(GameStatePayload.from_snapshot(snapshot).to_wire(), indent=2)

    return (
        "You are an expert Farkle player.\n"
        f"Your goal is to win the game by reaching {snapshot.winning_score:,} points.\n\n"
        f"RULES CONTEXT:\n{rules}\n"
        f"CURRENT GAME STATE:\n{state}\n\n"
        "INSTRUCTIONS:\n"
        "1. Analyze the dice and scores.\n"
        "2. Select which dice to KEEP (must be scoring dice in state \"rolled\").\n"
        "3. Decide whether to BANK the points or ROLL again.\n\n"
        "Output a valid JSON object."
    )


class GeminiAgent:
    """
    Hosted language-model player.

    Args:
        api_key: Gemini API key; checked on every decision
        model: Model name
        endpoint: REST base URL
        timeout: Per-request timeout in seconds
        policy: Backoff for transient failures
        client: Optional shared ``httpx.AsyncClient``
        sleep: Coroutine used for backoff waits
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 60.0,
        policy: RetryPolicy | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.policy = policy or RetryPolicy(max_retries=50, base_delay=1.0, max_delay=16.0)
        self._client = client
        self._sleep = sleep

    @property
    def url(self) -> str:
        return f"{self.endpoint}/models/{self.model}:generateContent"

    async def decide(
        self,
        snapshot: Snapshot,
        on_progress: ProgressCallback | None = None,
    ) -> Move:
        if not self.api_key:
            raise AgentConfigurationError("GEMINI_API_KEY is missing.")
        check_endpoint(self.url)

        body = {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(snapshot)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": MOVE_RESPONSE_SCHEMA,
            },
        }
        headers = {"x-goog-api-key": self.api_key}

        delays = self.policy.delays()
        attempt = 0
        async with http_session(self._client, self.timeout) as client:
            while True:
                attempt += 1
                try:
                    response = await client.post(
                        self.url, json=body, headers=headers, timeout=self.timeout
                    )
                except httpx.TransportError as exc:
                    failure: Exception = exc
                    status = None
                else:
                    if response.is_success:
                        move = self._parse(response)
                        logger.info("Gemini chose %s keeping %s", move.action.value, move.keep_dice_ids)
                        return move
                    if not is_transient_status(response.status_code):
                        raise AgentTransportError(
                            f"Gemini API Error ({response.status_code}): "
                            f"{response.text or response.reason_phrase}",
                            status=response.status_code,
                        )
                    failure = AgentTransportError(
                        f"Gemini API Error ({response.status_code})",
                        status=response.status_code,
                    )
                    status = response.status_code

                delay = next(delays, None)
                if delay is None:
                    raise AgentTransportError(
                        f"Gemini request failed after {attempt} attempts: {failure}",
                        status=status,
                    ) from failure

                message = (
                    f"Connection issue ({status or 'network'}). "
                    f"Retrying in {delay:g}s... (Attempt {attempt})"
                )
                logger.warning("Gemini Agent: %s", message)
                notify(on_progress, message)
                await self._sleep(delay)

    @staticmethod
    def _parse(response: httpx.Response) -> Move:
        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AgentResponseError("Empty or malformed response from Gemini.") from exc

        if not isinstance(text, str) or not text.strip():
            raise AgentResponseError("Empty response from Gemini.")

        try:
            return AgentMoveResponse.model_validate_json(text).to_move()
        except ValidationError as exc:
            raise AgentResponseError(f"Gemini returned an invalid move: {exc}") from exc
