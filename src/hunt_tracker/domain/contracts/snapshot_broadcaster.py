"""Protocol for broadcasting snapshots to viewers."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hunt_tracker.domain.models.alerts import PendingAlert
    from hunt_tracker.domain.models.snapshot import Snapshot


class SnapshotBroadcasterProtocol(Protocol):
    """Protocol for per-viewer fan-out of snapshots and alerts."""

    def has_viewers(self) -> bool:
        """Whether any authenticated viewer is connected."""
        ...

    async def broadcast_snapshot(self, snapshot: "Snapshot") -> None:
        """Send each authenticated viewer its filtered view of the snapshot."""
        ...

    async def dispatch_alerts(self, alerts: "list[PendingAlert]") -> None:
        """Deliver alerts in-session and via push."""
        ...
