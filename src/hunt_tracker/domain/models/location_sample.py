"""Raw location sample domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LocationSample:
    """One telemetry sample for a participant in the current cycle.

    Latitude/longitude are None when the provider has no live fix.
    """

    participant_id: str
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

    @property
    def has_coordinates(self) -> bool:
        """Whether the sample carries a usable live fix."""
        return self.latitude is not None and self.longitude is not None
