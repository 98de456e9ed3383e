"""Per-connection viewer session domain models.

Sessions are immutable; every update produces a new value via
``dataclasses.replace``.
"""

from dataclasses import dataclass

from hunt_tracker.domain.models.viewer_profile import ViewerProfile

UNLIMITED_RADIUS = -1.0


@dataclass(frozen=True)
class NotificationSubscription:
    """Alert settings of one connection."""

    enabled: bool = False
    own_participant_id: str | None = None
    proximity_radius_miles: float = 0.5
    ghost_radius_miles: float = UNLIMITED_RADIUS
    in_range: frozenset[str] = frozenset()

    @property
    def ghost_radius_unlimited(self) -> bool:
        return self.ghost_radius_miles < 0


@dataclass(frozen=True)
class ViewerSession:
    """State owned by a single viewer connection."""

    connection_id: str
    profile: ViewerProfile | None = None
    subscription: NotificationSubscription = NotificationSubscription()
    live_location: tuple[float, float] | None = None
    session_token: str | None = None
    push_recipient: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.profile is not None
