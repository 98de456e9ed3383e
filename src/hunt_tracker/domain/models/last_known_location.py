"""Last known location domain model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LastKnownLocation:
    """Most recent valid coordinates seen for a participant."""

    latitude: float
    longitude: float
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for persistence."""
        return {"lat": self.latitude, "lng": self.longitude, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LastKnownLocation:
        """Deserialize a persisted entry."""
        return cls(
            latitude=float(data["lat"]),
            longitude=float(data["lng"]),
            timestamp=data.get("timestamp"),
        )
