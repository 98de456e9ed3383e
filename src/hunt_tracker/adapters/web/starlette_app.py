"""Starlette web adapter serving the viewer channel."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.responses import JSONResponse, Response
from starlette.routing import Route, WebSocketRoute
from starlette.websockets import WebSocket, WebSocketDisconnect

from hunt_tracker.adapters.web.channel import WebSocketViewerConnection
from hunt_tracker.adapters.web.rate_limit_middleware import RateLimitMiddleware
from hunt_tracker.domain.ports.tracker_adapter import TrackerAdapter

if TYPE_CHECKING:
    from starlette.requests import Request

    from hunt_tracker.adapters.config.app_config import AppConfig
    from hunt_tracker.domain.contracts.poll_scheduler import PollSchedulerProtocol
    from hunt_tracker.domain.contracts.viewer_channel import ViewerChannelProtocol

logger = logging.getLogger(__name__)


class StarletteWebAdapter(TrackerAdapter):
    """Serves the viewer WebSocket and status endpoints, and drives the scheduler."""

    def __init__(
        self,
        channel: ViewerChannelProtocol,
        scheduler: PollSchedulerProtocol,
        config: AppConfig,
        status_provider: Callable[[], dict[str, Any]],
    ) -> None:
        """Initialize the web adapter.

        Args:
            channel: Handles viewer connections and their messages.
            scheduler: Poll scheduler started alongside the server.
            config: Application configuration.
            status_provider: Returns the current tracker status for /api/status.
        """
        self.channel = channel
        self.scheduler = scheduler
        self.config = config
        self.status_provider = status_provider
        self._server: Any | None = None

    def build_app(self) -> Any:
        """Create the ASGI application wrapped in rate limiting."""
        app = Starlette(
            routes=[
                WebSocketRoute("/ws", self._viewer_socket),
                Route("/healthz", self._healthz, methods=["GET"]),
                Route("/api/status", self._status, methods=["GET"]),
            ]
        )
        return RateLimitMiddleware(app, requests_per_minute=self.config.rate_limit_per_minute)

    async def _healthz(self, _request: Request) -> Response:
        return Response(content="Ok", media_type="text/plain")

    async def _status(self, _request: Request) -> Response:
        return JSONResponse(self.status_provider())

    async def _viewer_socket(self, websocket: WebSocket) -> None:
        await websocket.accept()
        connection = WebSocketViewerConnection(websocket)
        self.channel.connect(connection)
        logger.info(f"Viewer connection {connection.connection_id} opened")
        try:
            while connection.is_open:
                text = await websocket.receive_text()
                try:
                    raw = json.loads(text)
                except ValueError:
                    await connection.send_message({"type": "error", "reason": "Invalid JSON"})
                    continue
                await self.channel.handle_message(connection.connection_id, raw)
            logger.info(f"Viewer connection {connection.connection_id} closed by server")
        except WebSocketDisconnect:
            logger.info(f"Viewer connection {connection.connection_id} closed")
        finally:
            self.channel.disconnect(connection.connection_id)

    async def start(self) -> None:
        """Start the scheduler and serve until shutdown."""
        import uvicorn

        await self.scheduler.start()

        config = uvicorn.Config(
            self.build_app(),
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(config)
        try:
            await self._server.serve()
        finally:
            await self.scheduler.stop()

    async def stop(self) -> None:
        """Stop the scheduler and the web server."""
        await self.scheduler.stop()
        if self._server:
            self._server.should_exit = True
