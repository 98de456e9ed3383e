"""Viewer channel message handling."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from hunt_tracker.application.services.fan_out import state_update_message
from hunt_tracker.domain.errors import ResolutionError
from hunt_tracker.domain.models.messages import (
    INBOUND_MESSAGE_ADAPTER,
    AuthenticateMessage,
    ClearLiveLocationMessage,
    ReportLiveLocationMessage,
    UpdateNotificationSettingsMessage,
)
from hunt_tracker.domain.models.viewer_session import NotificationSubscription, ViewerSession

if TYPE_CHECKING:
    from hunt_tracker.application.services.session_tokens import SessionTokenService
    from hunt_tracker.application.services.tracker_state import TrackerState
    from hunt_tracker.application.services.viewer_registry import ViewerRegistry
    from hunt_tracker.application.services.viewer_resolver import ViewerResolver
    from hunt_tracker.domain.contracts.viewer_connection import ViewerConnectionProtocol
    from hunt_tracker.domain.models.viewer_profile import ViewerProfile

logger = logging.getLogger(__name__)


class ViewerChannelService:
    """Handles the lifecycle and inbound messages of viewer connections.

    Every session change is a whole-value replacement in the registry, so an
    authentication and a settings update can never leave a half-applied
    session behind.
    """

    def __init__(
        self,
        registry: ViewerRegistry,
        resolver: ViewerResolver,
        tokens: SessionTokenService,
        state: TrackerState,
        on_first_viewer: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the channel service.

        Args:
            registry: Registry of connected viewers.
            resolver: Resolves viewer ids to permission profiles.
            tokens: Session token store.
            state: Tracker state holding the last successful snapshot.
            on_first_viewer: Called when the first viewer authenticates.
        """
        self.registry = registry
        self.resolver = resolver
        self.tokens = tokens
        self.state = state
        self.on_first_viewer = on_first_viewer

    def connect(self, connection: ViewerConnectionProtocol) -> ViewerSession:
        return self.registry.register(connection)

    def disconnect(self, connection_id: str) -> None:
        self.registry.unregister(connection_id)

    async def handle_message(self, connection_id: str, raw: Any) -> None:
        """Validate and dispatch one inbound message."""
        connection = self.registry.connection(connection_id)
        session = self.registry.get(connection_id)
        if connection is None or session is None:
            return

        try:
            message = INBOUND_MESSAGE_ADAPTER.validate_python(raw)
        except ValidationError as e:
            logger.debug(f"Invalid message from {connection_id}: {e}")
            await connection.send_message({"type": "error", "reason": "Invalid message"})
            return

        if isinstance(message, AuthenticateMessage):
            await self._authenticate(connection, session, message)
            return

        if not session.is_authenticated:
            await connection.send_message({"type": "error", "reason": "Not authenticated"})
            return

        if isinstance(message, UpdateNotificationSettingsMessage):
            subscription = NotificationSubscription(
                enabled=message.enabled,
                own_participant_id=message.own_participant_id,
                proximity_radius_miles=message.proximity_radius,
                ghost_radius_miles=message.normalized_ghost_radius,
            )
            self.registry.update(replace(session, subscription=subscription))
            logger.info(
                f"Notification settings for {connection_id}: enabled={message.enabled}, "
                f"proximity={message.proximity_radius}mi, ghost={message.ghost_radius}mi"
            )
        elif isinstance(message, ReportLiveLocationMessage):
            self.registry.update(replace(session, live_location=(message.lat, message.lng)))
        elif isinstance(message, ClearLiveLocationMessage):
            self.registry.update(replace(session, live_location=None))

    async def _authenticate(
        self,
        connection: ViewerConnectionProtocol,
        session: ViewerSession,
        message: AuthenticateMessage,
    ) -> None:
        viewer_id = message.viewer_id
        if message.session_token is not None:
            viewer_id = self.tokens.viewer_for(message.session_token)

        try:
            if viewer_id is None:
                raise ResolutionError("Unknown or expired session token")
            configuration = self.resolver.configuration(viewer_id)
            profile = await self.resolver.resolve(viewer_id)
        except ResolutionError as e:
            logger.warning(f"Authentication failed for {connection.connection_id}: {e}")
            await connection.send_message({"type": "authError", "reason": str(e)})
            self.registry.unregister(connection.connection_id)
            await connection.close(str(e))
            return

        # The connection may have gone away while resolution was in flight.
        if self.registry.get(connection.connection_id) is None:
            return

        was_idle = self.registry.authenticated_count() == 0
        token = message.session_token or self.tokens.issue(profile.viewer_id)
        session = replace(
            self.registry.get(connection.connection_id) or session,
            profile=profile,
            session_token=token,
            push_recipient=configuration.push_recipient,
        )
        self.registry.update(session)
        logger.info(f"Viewer {profile.viewer_id} authenticated on {connection.connection_id}")

        await connection.send_message(
            {
                "type": "authResult",
                "viewerId": profile.viewer_id,
                "sessionToken": token,
                "teammates": self._teammates(profile),
            }
        )
        if self.state.snapshot is not None:
            await connection.send_message(state_update_message(self.state.snapshot, session))
            logger.info(f"Sent cached snapshot to {connection.connection_id}")

        if was_idle and self.on_first_viewer is not None:
            await self.on_first_viewer()

    def _teammates(self, profile: ViewerProfile) -> list[dict[str, Any]]:
        roster = self.state.roster
        if roster is None or profile.team_id is None:
            return []
        return [
            {
                "id": entry.participant_id,
                "firstName": entry.first_name,
                "lastName": entry.last_name,
            }
            for entry in roster.entries.values()
            if entry.team_id == profile.team_id
        ]
