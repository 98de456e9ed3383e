"""Per-viewer broadcast fan-out."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from hunt_tracker.application.services.visibility_filter import filter_snapshot, view_participant
from hunt_tracker.domain.contracts.snapshot_broadcaster import SnapshotBroadcasterProtocol

if TYPE_CHECKING:
    from hunt_tracker.application.services.background import BackgroundTasks
    from hunt_tracker.application.services.viewer_registry import ViewerRegistry
    from hunt_tracker.domain.contracts.viewer_connection import ViewerConnectionProtocol
    from hunt_tracker.domain.models.alerts import PendingAlert
    from hunt_tracker.domain.models.snapshot import Snapshot
    from hunt_tracker.domain.models.viewer_session import ViewerSession
    from hunt_tracker.domain.ports import PushNotifier

logger = logging.getLogger(__name__)


def state_update_message(snapshot: Snapshot, session: ViewerSession) -> dict[str, Any]:
    """Build the ``stateUpdate`` message a viewer is allowed to receive."""
    if session.profile is None:
        raise ValueError("cannot build a state update for an unauthenticated session")
    return {"type": "stateUpdate", **filter_snapshot(snapshot, session.profile).to_payload()}


class SnapshotFanOut(SnapshotBroadcasterProtocol):
    """Sends every authenticated viewer its filtered snapshot and its alerts."""

    def __init__(
        self,
        registry: ViewerRegistry,
        push_notifier: PushNotifier,
        background: BackgroundTasks,
    ) -> None:
        self.registry = registry
        self.push_notifier = push_notifier
        self.background = background

    def has_viewers(self) -> bool:
        return self.registry.authenticated_count() > 0

    async def _send(self, connection: ViewerConnectionProtocol, message: dict[str, Any]) -> None:
        try:
            await connection.send_message(message)
        except Exception as e:
            logger.warning(f"Dropping viewer {connection.connection_id} after failed send: {e}")
            self.registry.unregister(connection.connection_id)

    async def broadcast_snapshot(self, snapshot: Snapshot) -> None:
        viewers = self.registry.authenticated()
        for connection, session in viewers:
            await self._send(connection, state_update_message(snapshot, session))
        logger.info(f"Broadcast snapshot to {len(viewers)} viewer(s)")

    async def dispatch_alerts(self, alerts: list[PendingAlert]) -> None:
        for pending in alerts:
            connection = self.registry.connection(pending.connection_id)
            session = self.registry.get(pending.connection_id)
            if connection is None or session is None or session.profile is None:
                continue
            participant = view_participant(pending.alert.participant, session.profile)
            alert = replace(pending.alert, participant=participant)
            await self._send(connection, alert.to_message())
            if session.push_recipient:
                self.background.spawn(self._push(session.push_recipient, alert.title, alert.body))

    async def _push(self, recipient: str, title: str, body: str) -> None:
        try:
            await self.push_notifier.send(recipient, title, body)
        except Exception as e:
            logger.warning(f"Push notification to {recipient} failed: {e}")
