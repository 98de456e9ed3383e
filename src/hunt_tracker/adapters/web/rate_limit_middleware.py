"""Per-client rate limiting for the HTTP surface, backed by throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60.0


def client_key(request: Request) -> str:
    """Identify the caller, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    logger.warning("Request without client address, rate limiting as 'unknown'")
    return "unknown"


def retry_after_seconds(result: Any) -> float:
    """Read the retry-after hint from a throttled-py result."""
    state = getattr(result, "state", None)
    value = getattr(state, "retry_after", None) if state is not None else None
    if value is None:
        value = getattr(result, "retry_after", None)
    try:
        return float(value) if value is not None else DEFAULT_RETRY_AFTER
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token-bucket limit of HTTP requests per client address.

    WebSocket traffic is not routed through BaseHTTPMiddleware, so an open
    viewer channel is never cut off by this limit.
    """

    def __init__(self, app: Callable, requests_per_minute: int = 100) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        self.store = store.MemoryStore()
        logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per client")

    def _throttle_for(self, key: str) -> Throttled:
        return Throttled(
            key=key,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.store,
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        key = client_key(request)
        result = self._throttle_for(key).limit()
        if result.limited:
            retry_after = retry_after_seconds(result)
            logger.warning(f"Rate limit exceeded for {key}, retry after {retry_after:.0f}s")
            return JSONResponse(
                {"error": "Rate limit exceeded"},
                status_code=429,
                headers={"Retry-After": str(int(retry_after))},
            )

        response: Response = await call_next(request)
        return response
