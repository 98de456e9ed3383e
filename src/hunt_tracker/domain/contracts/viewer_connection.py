"""Protocol for a viewer's outbound channel."""

from typing import Any, Protocol


class ViewerConnectionProtocol(Protocol):
    """An ordered, persistent channel to one viewer."""

    connection_id: str

    async def send_message(self, message: dict[str, Any]) -> None:
        """Send one JSON message to the viewer."""
        ...

    async def close(self, reason: str = "") -> None:
        """Close the channel."""
        ...
