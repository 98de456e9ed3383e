"""Owned state of the tracker outliving a single task."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from hunt_tracker.domain.models.last_known_location import LastKnownLocation

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hunt_tracker.domain.models.roster import Roster
    from hunt_tracker.domain.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedExpiry:
    """An expiry timestamp and the monotonic time it was fetched at."""

    expires_at: datetime | None
    fetched_at: float


class TrackerState:
    """Holds the last successful snapshot and the caches the pipeline maintains.

    Only the poll pipeline mutates this object, and only at cycle
    boundaries.
    """

    def __init__(self) -> None:
        self.snapshot: Snapshot | None = None
        self.roster: Roster | None = None
        self.last_known: dict[str, LastKnownLocation] = {}
        self.expiry_cache: dict[str, CachedExpiry] = {}
        self.last_cycle_at: datetime | None = None
        self.last_cycle_status: str = "unknown"

    def load_last_known(self, data: Mapping[str, Any]) -> None:
        """Seed the last-known-location cache from persisted data."""
        for participant_id, raw in data.items():
            try:
                self.last_known[participant_id] = LastKnownLocation.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable cached location for {participant_id}: {e}")
        logger.info(f"Loaded {len(self.last_known)} last known location(s)")

    def merge_locations(self, updates: Mapping[str, LastKnownLocation]) -> bool:
        """Merge fresh locations into the cache.

        Returns:
            True if any cached entry changed.
        """
        changed = False
        for participant_id, location in updates.items():
            if self.last_known.get(participant_id) != location:
                self.last_known[participant_id] = location
                changed = True
        return changed

    def last_known_payload(self) -> dict[str, Any]:
        return {pid: location.to_dict() for pid, location in self.last_known.items()}

    def publish(self, snapshot: Snapshot, roster: Roster, at: datetime) -> None:
        """Replace the last successful snapshot."""
        self.snapshot = snapshot
        self.roster = roster
        self.last_cycle_at = at
        self.last_cycle_status = "success"

    def mark_failed(self, at: datetime) -> None:
        self.last_cycle_at = at
        self.last_cycle_status = "error"

    def status(self) -> dict[str, Any]:
        return {
            "lastCycleAt": self.last_cycle_at.isoformat() if self.last_cycle_at else None,
            "lastCycleStatus": self.last_cycle_status,
            "hasSnapshot": self.snapshot is not None,
            "lastKnownLocations": len(self.last_known),
        }
