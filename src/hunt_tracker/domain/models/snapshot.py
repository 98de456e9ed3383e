"""Canonical snapshot produced by one poll cycle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hunt_tracker.domain.models.last_known_location import LastKnownLocation
from hunt_tracker.domain.models.participant import Participant
from hunt_tracker.domain.models.participant_state import ParticipantState


@dataclass(frozen=True)
class Snapshot:
    """Four participant buckets computed from a single location poll.

    Immune participants are carried in the stealthed bucket with
    ``state == ParticipantState.IMMUNE``.
    """

    located: tuple[Participant, ...] = ()
    stealthed: tuple[Participant, ...] = ()
    safe_zone: tuple[Participant, ...] = ()
    not_located: tuple[Participant, ...] = ()

    def all_entries(self) -> tuple[Participant, ...]:
        return self.located + self.stealthed + self.safe_zone + self.not_located

    def to_payload(self) -> dict[str, Any]:
        """Serialize as the body of a ``stateUpdate`` message."""
        return {
            "located": [p.to_payload() for p in self.located],
            "notLocated": [p.to_payload() for p in self.not_located],
            "stealthed": [p.to_payload() for p in self.stealthed],
            "safeZone": [p.to_payload() for p in self.safe_zone],
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Output of the state classifier for one cycle."""

    snapshot: Snapshot
    states: dict[str, ParticipantState] = field(default_factory=dict)
    location_updates: dict[str, LastKnownLocation] = field(default_factory=dict)
