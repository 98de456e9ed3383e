"""Push notification adapters."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import aiohttp

from hunt_tracker.domain.ports.push_notifier import PushNotifier

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


class HttpPushNotifier(PushNotifier):
    """Posts notifications as JSON to a push delivery service."""

    def __init__(
        self,
        session: ClientSession,
        url: str,
        token: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._session = session
        self.url = url
        self.token = token
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def send(self, recipient: str, title: str, body: str) -> None:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        payload = {"recipient": recipient, "title": title, "body": body}
        try:
            async with self._session.post(
                self.url, json=payload, headers=headers, timeout=self._timeout
            ) as response:
                if response.status >= 400:
                    text = await response.text()
                    logger.warning(
                        f"Push service returned status {response.status} for {recipient}: "
                        f"{text[:200]}"
                    )
                    return
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Push delivery to {recipient} failed: {e or type(e).__name__}")
            return
        logger.debug(f"Pushed '{title}' to {recipient}")


class LoggingPushNotifier(PushNotifier):
    """Records notifications in the log when no push service is configured."""

    async def send(self, recipient: str, title: str, body: str) -> None:
        logger.info(f"Notification for {recipient}: {title} - {body}")
