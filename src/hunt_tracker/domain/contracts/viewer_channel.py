"""Protocol for viewer channel handling."""

from typing import Any, Protocol

from hunt_tracker.domain.contracts.viewer_connection import ViewerConnectionProtocol
from hunt_tracker.domain.models.viewer_session import ViewerSession


class ViewerChannelProtocol(Protocol):
    """Protocol for the lifecycle and inbound messages of viewer connections."""

    def connect(self, connection: ViewerConnectionProtocol) -> ViewerSession:
        """Register a new connection."""
        ...

    def disconnect(self, connection_id: str) -> None:
        """Forget a connection."""
        ...

    async def handle_message(self, connection_id: str, raw: Any) -> None:
        """Handle one inbound JSON message."""
        ...
