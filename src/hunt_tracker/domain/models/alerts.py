"""Alert domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hunt_tracker.domain.models.participant import Participant


@dataclass(frozen=True)
class ProximityAlert:
    """A located participant entered a viewer's proximity radius."""

    participant: Participant
    distance_miles: float

    @property
    def title(self) -> str:
        return "Player nearby"

    @property
    def body(self) -> str:
        return f"{self.participant.display_name} is {self.distance_miles:.2f} mi away"

    def to_message(self) -> dict[str, Any]:
        return {
            "type": "proximityAlert",
            "participant": self.participant.to_payload(),
            "distance": round(self.distance_miles, 3),
        }


@dataclass(frozen=True)
class GhostAlert:
    """A previously located participant can no longer be located."""

    participant: Participant
    distance_miles: float | None = None

    @property
    def title(self) -> str:
        return "Player went ghost"

    @property
    def body(self) -> str:
        if self.distance_miles is None:
            return f"{self.participant.display_name} disappeared from the map"
        return (
            f"{self.participant.display_name} disappeared "
            f"{self.distance_miles:.2f} mi from you"
        )

    def to_message(self) -> dict[str, Any]:
        return {"type": "ghostAlert", "participant": self.participant.to_payload()}


@dataclass(frozen=True)
class PendingAlert:
    """An alert addressed to one viewer connection."""

    connection_id: str
    alert: ProximityAlert | GhostAlert
