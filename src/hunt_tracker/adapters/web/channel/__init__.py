"""Viewer channel transports."""

from hunt_tracker.adapters.web.channel.websocket_connection import WebSocketViewerConnection

__all__ = ["WebSocketViewerConnection"]
