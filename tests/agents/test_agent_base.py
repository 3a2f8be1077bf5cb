"""Tests for the agent contract helpers: retry policy, status triage, sessions."""

import asyncio

import httpx
import pytest

from zehntausend.agents.base import (
    AgentConfigurationError,
    AgentError,
    AgentIllegalMoveError,
    AgentTransportError,
    RetryPolicy,
    check_endpoint,
    http_session,
    is_transient_status,
    notify,
)


class TestRetryPolicy:
    def test_delays_double_until_capped(self):
        policy = RetryPolicy(max_retries=6, base_delay=1.0, max_delay=10.0)
        assert list(policy.delays()) == [1.0, 2.0, 4.0, 8.0, 10.0, 10.0]

    def test_delays_strictly_increase_below_cap(self):
        delays = list(RetryPolicy(max_retries=4, base_delay=0.5, max_delay=30.0).delays())
        assert all(a < b for a, b in zip(delays, delays[1:]))

    def test_zero_retries(self):
        assert list(RetryPolicy(max_retries=0).delays()) == []

    def test_custom_factor(self):
        assert RetryPolicy(base_delay=1.0, factor=3.0, max_delay=100.0).delay_for(2) == 9.0

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=-1)
        with pytest.raises(ValueError):
            RetryPolicy(base_delay=-1.0)


class TestTransientStatus:
    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_transient(self, status: int):
        assert is_transient_status(status)

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    def test_terminal(self, status: int):
        assert not is_transient_status(status)


class TestErrors:
    def test_all_errors_share_a_base(self):
        assert issubclass(AgentTransportError, AgentError)
        assert issubclass(AgentIllegalMoveError, AgentError)

    def test_extra_attributes(self):
        assert AgentTransportError("down", status=503).status == 503
        assert AgentIllegalMoveError("bad", reason="locked").reason == "locked"


class TestHelpers:
    def test_notify_without_sink(self):
        notify(None, "ignored")

    def test_notify_with_sink(self):
        seen: list[str] = []
        notify(seen.append, "hello")
        assert seen == ["hello"]

    def test_http_session_reuses_injected_client(self):
        async def run():
            async with httpx.AsyncClient() as client:
                async with http_session(client, 5.0) as session:
                    assert session is client
                assert not client.is_closed

        asyncio.run(run())

    def test_http_session_owns_its_client(self):
        async def run():
            async with http_session(None, 5.0) as session:
                owned = session
                assert not owned.is_closed
            return owned

        assert asyncio.run(run()).is_closed


class TestCheckEndpoint:
    @pytest.mark.parametrize("uri", ["http://agent.test/move", "https://localhost:8000/move"])
    def test_absolute_http_urls(self, uri: str):
        assert check_endpoint(uri).host in ("agent.test", "localhost")

    @pytest.mark.parametrize(
        "uri", ["not-a-url", "/relative/move", "ftp://agent.test/move", "localhost:8000/move"]
    )
    def test_unusable_uris(self, uri: str):
        with pytest.raises(AgentConfigurationError, match="API URI"):
            check_endpoint(uri)
