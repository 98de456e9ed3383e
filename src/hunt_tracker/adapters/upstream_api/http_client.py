"""HTTP client for the upstream game provider."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from hunt_tracker.adapters.api_request_logger import log_api_request
from hunt_tracker.domain.errors import UpstreamAuthError, UpstreamError, UpstreamFetchError
from hunt_tracker.domain.models.error_details import ErrorDetails

from .constants import AUTH_PATH

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

logger = logging.getLogger(__name__)


def describe_status(status_code: int | None) -> ErrorDetails:
    """Map an HTTP status code to error details."""
    if status_code == 401:
        reason = "Unauthorized"
    elif status_code == 403:
        reason = "Forbidden"
    elif status_code == 429:
        reason = "Rate limit exceeded"
    elif status_code == 502:
        reason = "Bad gateway (server error)"
    elif status_code == 503:
        reason = "Service unavailable"
    elif status_code == 504:
        reason = "Gateway timeout"
    elif status_code is not None:
        reason = f"HTTP {status_code}"
    else:
        reason = "Unknown error"
    return ErrorDetails(status_code=status_code, reason=reason)


class UpstreamHttpClient:
    """Performs authenticated JSON requests against the upstream provider."""

    def __init__(
        self,
        session: ClientSession,
        base_url: str,
        api_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            base_url: Base URL of the auth and RPC endpoints.
            api_url: Base URL of the game API.
            api_key: API key sent with every request.
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self.base_url = base_url.rstrip("/")
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"Apikey": self.api_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def authenticate(self, email: str, password: str) -> str:
        """Exchange email and password for a bearer access token."""
        url = f"{self.base_url}{AUTH_PATH}"
        params = {"grant_type": "password"}
        payload = {"email": email, "password": password, "goture_meta_security": {}}
        try:
            data = await self._request("POST", url, params=params, payload=payload)
        except UpstreamError as e:
            raise UpstreamAuthError(f"Authentication failed: {e}", e.details) from e

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            raise UpstreamAuthError("Authentication response did not contain an access token")
        return str(access_token)

    async def get_api(
        self, path: str, access_token: str, params: dict[str, Any] | None = None
    ) -> Any:
        """GET a game API resource."""
        return await self._request(
            "GET", f"{self.api_url}{path}", access_token=access_token, params=params
        )

    async def post_rpc(self, path: str, access_token: str, payload: dict[str, Any]) -> Any:
        """POST to an RPC endpoint."""
        return await self._request(
            "POST", f"{self.base_url}{path}", access_token=access_token, payload=payload
        )

    async def _request(
        self,
        method: str,
        url: str,
        access_token: str | None = None,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        headers = self._headers(access_token)
        log_api_request(method, url, params=params, headers=headers, payload=payload)
        try:
            async with self._session.request(
                method, url, params=params, json=payload, headers=headers, timeout=self._timeout
            ) as response:
                return await self._handle_response(response, method, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamFetchError(
                f"{method} {url} failed: {e or type(e).__name__}",
                ErrorDetails(reason=type(e).__name__),
            ) from e

    async def _handle_response(self, response: ClientResponse, method: str, url: str) -> Any:
        if response.status >= 400:
            body = await response.text()
            details = describe_status(response.status)
            logger.error(
                f"Upstream returned status {response.status} for {method} {url}: {body[:200]}"
            )
            raise UpstreamFetchError(f"{method} {url}: {details.reason}", details)

        if response.status == 204:
            return None
        try:
            return await response.json(content_type=None)
        except ValueError as e:
            raise UpstreamFetchError(
                f"{method} {url} returned invalid JSON",
                ErrorDetails(status_code=response.status, reason="Invalid JSON"),
            ) from e
