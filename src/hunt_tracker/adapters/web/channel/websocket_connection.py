"""WebSocket implementation of a viewer connection."""

import logging
import uuid
from typing import Any

from starlette.websockets import WebSocket, WebSocketState

logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008


class WebSocketViewerConnection:
    """Wraps a Starlette WebSocket as an outbound viewer channel."""

    def __init__(self, websocket: WebSocket, connection_id: str | None = None) -> None:
        self.websocket = websocket
        self.connection_id = connection_id or uuid.uuid4().hex

    async def send_message(self, message: dict[str, Any]) -> None:
        await self.websocket.send_json(message)

    async def close(self, reason: str = "") -> None:
        if self.websocket.application_state == WebSocketState.DISCONNECTED:
            return
        await self.websocket.close(code=POLICY_VIOLATION, reason=reason[:120])

    @property
    def is_open(self) -> bool:
        """False once either side has closed the socket."""
        return WebSocketState.DISCONNECTED not in (
            self.websocket.application_state,
            self.websocket.client_state,
        )
