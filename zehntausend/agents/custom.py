"""
Zehntausend - Remote HTTP Agent

POSTs the game state to a user-supplied endpoint and expects a move back.

Two independent budgets apply:
    - network retries: timeouts, connection failures and 429/5xx answers,
      retried with capped exponential backoff
    - legality retries: a well-formed but illegal move is sent back to the
      endpoint with the validator's reason in ``lastError``; each legality
      attempt starts with a fresh network budget

Malformed JSON and other non-transient answers fail immediately.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from zehntausend.agents.base import (
    AgentConfigurationError,
    AgentIllegalMoveError,
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
from zehntausend.agents.wire import AgentMoveResponse, GameStatePayload
from zehntausend.engine.base import Move, Snapshot
from zehntausend.engine.move_validator import validate_move

logger = logging.getLogger(__name__)


class CustomAgent:
    """
    Player backed by a remote HTTP endpoint.

    Args:
        uri: Endpoint receiving the POST; checked on every decision
        timeout: Per-request timeout in seconds
        network_policy: Backoff for transport failures, fresh per legality attempt
        max_legal_retries: Re-queries allowed after an illegal move
        client: Optional shared ``httpx.AsyncClient``
        sleep: Coroutine used for backoff waits
    """

    def __init__(
        self,
        uri: str | None,
        *,
        timeout: float = 15.0,
        network_policy: RetryPolicy | None = None,
        max_legal_retries: int = 3,
        client: httpx.AsyncClient | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if max_legal_retries < 0:
            raise ValueError(f"max_legal_retries cannot be negative, got {max_legal_retries}.")
        self.uri = uri
        self.timeout = timeout
        self.network_policy = network_policy or RetryPolicy(
            max_retries=5, base_delay=1.0, max_delay=30.0
        )
        self.max_legal_retries = max_legal_retries
        self._client = client
        self._sleep = sleep

    async def decide(
        self,
        snapshot: Snapshot,
        on_progress: ProgressCallback | None = None,
    ) -> Move:
        if not self.uri:
            raise AgentConfigurationError("No API URI configured for this player.")
        check_endpoint(self.uri)

        last_error: str | None = None
        async with http_session(self._client, self.timeout) as client:
            for legal_attempt in range(1, self.max_legal_retries + 2):
                if last_error is None:
                    notify(on_progress, f"Calling Custom API: {self.uri}...")
                else:
                    notify(
                        on_progress,
                        f"Move invalid: {last_error}. Retrying (Legal Attempt {legal_attempt})...",
                    )

                move = await self._request_move(client, snapshot, last_error, on_progress)
                verdict = validate_move(snapshot, move.keep_dice_ids, move.action)
                if verdict.valid:
                    logger.info(
                        "Custom agent %s chose %s keeping %s",
                        self.uri, move.action.value, move.keep_dice_ids,
                    )
                    return move

                last_error = verdict.reason
                logger.warning("Custom Agent: Legal validation failed: %s", last_error)

        raise AgentIllegalMoveError(
            f"API returned invalid move after retries: {last_error}",
            reason=last_error,
        )

    async def _request_move(
        self,
        client: httpx.AsyncClient,
        snapshot: Snapshot,
        last_error: str | None,
        on_progress: ProgressCallback | None,
    ) -> Move:
        """One legality attempt: POST until a 2xx arrives or the network budget is spent."""
        payload = GameStatePayload.from_snapshot(snapshot, last_error).to_wire()
        delays = self.network_policy.delays()
        attempt = 0

        while True:
            attempt += 1
            try:
                response = await client.post(self.uri, json=payload, timeout=self.timeout)
            except httpx.TimeoutException as exc:
                failure: Exception = exc
                exhausted = "API Request timed out after retries."
            except httpx.TransportError as exc:
                failure = exc
                exhausted = f"API Request failed after retries: {exc}"
            else:
                if response.is_success:
                    return self._parse(response)

                error = AgentTransportError(
                    f"API Error ({response.status_code}): "
                    f"{response.text or response.reason_phrase}",
                    status=response.status_code,
                )
                if not is_transient_status(response.status_code):
                    raise error
                failure = error
                exhausted = f"{error} (after retries)"

            delay = next(delays, None)
            if delay is None:
                status = failure.status if isinstance(failure, AgentTransportError) else None
                raise AgentTransportError(exhausted, status=status) from failure

            message = f"Network issue. Retrying in {delay:g}s... (Attempt {attempt + 1})"
            logger.warning("Custom Agent: %s (%s)", message, failure)
            notify(on_progress, message)
            await self._sleep(delay)

    @staticmethod
    def _parse(response: httpx.Response) -> Move:
        try:
            return AgentMoveResponse.model_validate_json(response.content).to_move()
        except ValidationError as exc:
            raise AgentResponseError(
                f"Invalid response format from API. Expected AgentMove: {exc}"
            ) from exc
