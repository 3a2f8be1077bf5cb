"""
Zehntausend - Agent Contract

Every computer player implements one coroutine, ``decide(snapshot,
on_progress)``, and returns a Move. Agents only ever see Snapshots, so they
cannot reach into a live engine.

This module also holds the error taxonomy and the retry policy shared by
the network-backed agents.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Iterator, Protocol, runtime_checkable

import httpx

from zehntausend.engine.base import Move, Snapshot

ProgressCallback = Callable[[str], None]
Sleeper = Callable[[float], Awaitable[None]]


@runtime_checkable
class Agent(Protocol):
    """Anything that can pick a move for the active player."""

    async def decide(
        self,
        snapshot: Snapshot,
        on_progress: ProgressCallback | None = None,
    ) -> Move:
        ...


# =============================================================================
# ERRORS
# =============================================================================

class AgentError(Exception):
    """Base class for every failure an agent reports to its caller."""


class AgentConfigurationError(AgentError):
    """Missing endpoint or credential. Raised before any network attempt."""


class AgentTransportError(AgentError):
    """The endpoint could not be reached, or kept failing, or refused the call."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AgentResponseError(AgentError):
    """The endpoint answered with something that is not a valid move. Never retried."""


class AgentIllegalMoveError(AgentError):
    """A well-formed move was still illegal after the legality budget ran out."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason


# =============================================================================
# RETRY POLICY
# =============================================================================

@dataclass(frozen=True)
class RetryPolicy:
    """
    Capped exponential backoff.

    Attributes:
        max_retries: Retries after the first attempt (0 = no retry)
        base_delay: Seconds to wait before the first retry
        max_delay: Upper bound for any single wait
        factor: Growth factor between consecutive waits
    """
    max_retries: int = 5
    base_delay: float = 1.0
    max_delay: float = 30.0
    factor: float = 2.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries cannot be negative, got {self.max_retries}.")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("Delays cannot be negative.")

    def delay_for(self, retry: int) -> float:
        """Wait before retry number ``retry`` (0-based)."""
        return min(self.base_delay * self.factor ** retry, self.max_delay)

    def delays(self) -> Iterator[float]:
        """One wait per allowed retry, in order."""
        for retry in range(self.max_retries):
            yield self.delay_for(retry)


def is_transient_status(status: int) -> bool:
    """Rate limiting and server-side errors are worth retrying."""
    return status == 429 or 500 <= status < 600


def check_endpoint(uri: str) -> httpx.URL:
    """
    Parse an endpoint URI, refusing anything that is not an absolute http(s) URL.

    Raises:
        AgentConfigurationError: If the URI cannot be used for a request
    """
    try:
        url = httpx.URL(uri)
    except httpx.InvalidURL as exc:
        raise AgentConfigurationError(f"Invalid API URI {uri!r}: {exc}") from exc

    if url.scheme not in ("http", "https") or not url.host:
        raise AgentConfigurationError(
            f"API URI must be an absolute http:// or https:// URL, got {uri!r}."
        )
    return url


def notify(on_progress: ProgressCallback | None, message: str) -> None:
    """Send a status line to the optional progress sink."""
    if on_progress is not None:
        on_progress(message)


@asynccontextmanager
async def http_session(
    client: httpx.AsyncClient | None,
    timeout: float,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the injected client, or a short-lived one owned by this call."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned
