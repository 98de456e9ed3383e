"""Participant entry as published in a snapshot bucket."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from hunt_tracker.domain.models.participant_state import DisplayRole, ParticipantState


@dataclass(frozen=True)
class Participant:
    """Merged roster and telemetry data for one participant in one bucket."""

    participant_id: str
    state: ParticipantState
    first_name: str = "Player"
    last_name: str = ""
    team_id: str | None = None
    team_name: str = "N/A"
    team_color: str = "#3388ff"
    avatar_url: str | None = None
    role: DisplayRole = DisplayRole.NEUTRAL
    latitude: float | None = None
    longitude: float | None = None
    status: str | None = None
    speed: float = 0.0
    battery_level: float = 0.0
    is_charging: bool = False
    accuracy: float = 0.0
    heading: float = 0.0
    updated_at: str | None = None
    in_safe_zone: bool = False
    expires_at: datetime | None = None
    reason: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the viewer channel (camelCase keys)."""
        payload: dict[str, Any] = {
            "id": self.participant_id,
            "state": self.state.value,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "teamId": self.team_id,
            "teamName": self.team_name,
            "teamColor": self.team_color,
            "avatarUrl": self.avatar_url,
            "role": self.role.value,
            "status": self.status,
            "speed": self.speed,
            "batteryLevel": self.battery_level,
            "isCharging": self.is_charging,
            "accuracy": self.accuracy,
            "heading": self.heading,
            "updatedAt": self.updated_at,
            "isSafeZone": self.in_safe_zone,
        }
        if self.has_coordinates:
            payload["lat"] = self.latitude
            payload["lng"] = self.longitude
        if self.expires_at is not None:
            payload["expiresAt"] = self.expires_at.isoformat()
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload
