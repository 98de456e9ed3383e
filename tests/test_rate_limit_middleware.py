"""Behavior-focused tests for rate limiting middleware."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.responses import Response

from hunt_tracker.adapters.web.rate_limit_middleware import (
    DEFAULT_RETRY_AFTER,
    RateLimitMiddleware,
    client_key,
    retry_after_seconds,
)


def _request(headers: dict, host: str | None = None) -> MagicMock:
    request = MagicMock()
    request.headers = headers
    if host is None:
        request.client = None
    else:
        request.client = MagicMock()
        request.client.host = host
    return request


class TestClientKey:
    """Tests for caller identification."""

    def test_when_forwarded_chain_then_first_hop(self) -> None:
        """Given an X-Forwarded-For chain, when identifying, then the original client is used."""
        request = _request({"X-Forwarded-For": " 203.0.113.50 , 70.41.3.18"}, host="10.0.0.1")

        assert client_key(request) == "203.0.113.50"

    def test_when_forwarded_empty_then_direct_address(self) -> None:
        assert client_key(_request({"X-Forwarded-For": ""}, host="10.0.0.1")) == "10.0.0.1"

    def test_when_no_address_then_unknown(self) -> None:
        assert client_key(_request({})) == "unknown"


class TestRetryAfter:
    def test_reads_state_retry_after(self) -> None:
        result = SimpleNamespace(state=SimpleNamespace(retry_after=12.5))

        assert retry_after_seconds(result) == 12.5

    def test_when_missing_then_default(self) -> None:
        assert retry_after_seconds(SimpleNamespace()) == DEFAULT_RETRY_AFTER


@pytest.mark.asyncio
async def test_when_quota_exhausted_then_429_with_retry_after() -> None:
    """Given a quota of two requests per minute, when a third arrives, then it is rejected."""
    middleware = RateLimitMiddleware(MagicMock(), requests_per_minute=2)
    call_next = AsyncMock(return_value=Response("ok"))
    request = _request({}, host="10.0.0.1")

    responses = [await middleware.dispatch(request, call_next) for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 429]
    assert "Retry-After" in responses[2].headers
    assert call_next.await_count == 2


@pytest.mark.asyncio
async def test_when_different_clients_then_separate_quotas() -> None:
    middleware = RateLimitMiddleware(MagicMock(), requests_per_minute=1)
    call_next = AsyncMock(return_value=Response("ok"))

    first = await middleware.dispatch(_request({"X-Forwarded-For": "198.51.100.1"}), call_next)
    second = await middleware.dispatch(_request({"X-Forwarded-For": "198.51.100.2"}), call_next)

    assert (first.status_code, second.status_code) == (200, 200)
