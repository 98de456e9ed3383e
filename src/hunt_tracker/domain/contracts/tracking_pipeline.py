"""Protocol for the per-cycle tracking pipeline."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hunt_tracker.domain.models.snapshot import Snapshot


class TrackingPipelineProtocol(Protocol):
    """Protocol for running one poll cycle."""

    def has_viewers(self) -> bool:
        """Whether any authenticated viewer is connected."""
        ...

    def mark_failed(self) -> None:
        """Record that the current cycle failed."""
        ...

    async def run_cycle(self) -> "Snapshot":
        """Fetch, classify, publish and alert."""
        ...
