"""Push notification port."""

from typing import Protocol


class PushNotifier(Protocol):
    """Port for the push notification delivery service."""

    async def send(self, recipient: str, title: str, body: str) -> None:
        """Deliver one notification."""
        ...
