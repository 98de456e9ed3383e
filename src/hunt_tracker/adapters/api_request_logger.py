"""Outgoing upstream request logging, enabled with HT_LOG_REQUESTS=true."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"
SENSITIVE_HEADERS = frozenset({"authorization", "apikey", "cookie", "x-api-key"})
SENSITIVE_FIELDS = frozenset({"password", "access_token", "refresh_token"})


def should_log_requests() -> bool:
    """Check if request logging is enabled via the HT_LOG_REQUESTS environment variable."""
    return os.getenv("HT_LOG_REQUESTS", "").lower() == "true"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Mask credentials carried in headers."""
    return {k: REDACTED if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def redact_payload(payload: Any) -> Any:
    """Mask credentials carried in a JSON body, recursing into nested objects."""
    if isinstance(payload, dict):
        return {
            k: REDACTED if k.lower() in SENSITIVE_FIELDS else redact_payload(v)
            for k, v in payload.items()
        }
    if isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    return payload


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log one outgoing request if request logging is enabled.

    Args:
        method: HTTP method.
        url: Request URL without query string.
        params: Query parameters.
        headers: Request headers; credentials are masked.
        payload: JSON body; password and token fields are masked.
    """
    if not should_log_requests():
        return

    lines = [f"{method} {url}"]
    if params:
        lines.append("Params: " + ", ".join(f"{k}={v}" for k, v in sorted(params.items())))
    if headers:
        lines.append(f"Headers: {json.dumps(redact_headers(headers), sort_keys=True)}")
    if payload is not None:
        try:
            lines.append(f"Payload: {json.dumps(redact_payload(payload), sort_keys=True)}")
        except (TypeError, ValueError):
            lines.append(f"Payload: {payload!r}")

    logger.info("Upstream request: " + " | ".join(lines))
