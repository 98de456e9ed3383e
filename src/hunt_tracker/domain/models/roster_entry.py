"""Roster entry domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RosterEntry:
    """A participant as listed on the game roster."""

    participant_id: str
    first_name: str = "Player"
    last_name: str = ""
    team_id: str | None = None
    team_name: str = "N/A"
    team_color: str = "#3388ff"
    avatar_url: str | None = None
    in_safe_zone: bool = False
    immunity_expires_at: datetime | None = None

    def is_immune(self, now: datetime) -> bool:
        """Return True while the immunity expiry lies strictly in the future."""
        return self.immunity_expires_at is not None and self.immunity_expires_at > now
