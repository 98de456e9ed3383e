"""Registry of connected viewers and their sessions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING

from hunt_tracker.domain.models.viewer_session import ViewerSession

if TYPE_CHECKING:
    from hunt_tracker.domain.contracts.viewer_connection import ViewerConnectionProtocol

logger = logging.getLogger(__name__)


class ViewerRegistry:
    """Maps connection ids to their channel and their current immutable session."""

    def __init__(self) -> None:
        self._connections: dict[str, ViewerConnectionProtocol] = {}
        self._sessions: dict[str, ViewerSession] = {}

    def register(self, connection: ViewerConnectionProtocol) -> ViewerSession:
        session = ViewerSession(connection_id=connection.connection_id)
        self._connections[connection.connection_id] = connection
        self._sessions[connection.connection_id] = session
        logger.info(
            f"Viewer connected: {connection.connection_id}. Total connections: {len(self)}"
        )
        return session

    def unregister(self, connection_id: str) -> None:
        self._connections.pop(connection_id, None)
        if self._sessions.pop(connection_id, None) is not None:
            logger.info(f"Viewer disconnected: {connection_id}. Total connections: {len(self)}")

    def get(self, connection_id: str) -> ViewerSession | None:
        return self._sessions.get(connection_id)

    def connection(self, connection_id: str) -> ViewerConnectionProtocol | None:
        return self._connections.get(connection_id)

    def update(self, session: ViewerSession) -> None:
        """Replace the session of a still-registered connection."""
        if session.connection_id in self._sessions:
            self._sessions[session.connection_id] = session

    def sessions(self) -> list[ViewerSession]:
        return list(self._sessions.values())

    def authenticated(self) -> list[tuple[ViewerConnectionProtocol, ViewerSession]]:
        return [
            (self._connections[cid], session)
            for cid, session in self._sessions.items()
            if session.is_authenticated and cid in self._connections
        ]

    def authenticated_count(self) -> int:
        return sum(1 for session in self._sessions.values() if session.is_authenticated)

    def apply_in_range(self, in_range: Mapping[str, frozenset[str]]) -> None:
        """Store the in-range sets computed by the alert engine."""
        for connection_id, participant_ids in in_range.items():
            session = self._sessions.get(connection_id)
            if session is None:
                continue
            subscription = replace(session.subscription, in_range=participant_ids)
            self._sessions[connection_id] = replace(session, subscription=subscription)

    def __len__(self) -> int:
        return len(self._sessions)
