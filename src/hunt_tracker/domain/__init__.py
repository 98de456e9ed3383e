"""Domain layer - core models, ports and errors."""

from hunt_tracker.domain.errors import (
    HuntTrackerError,
    PersistenceError,
    ResolutionError,
    UpstreamAuthError,
    UpstreamFetchError,
)
from hunt_tracker.domain.models import (
    LocationSample,
    Participant,
    ParticipantState,
    RosterEntry,
    Snapshot,
    ViewerProfile,
)
from hunt_tracker.domain.ports import KeyValueRepository, LocationProvider, PushNotifier

__all__ = [
    "HuntTrackerError",
    "KeyValueRepository",
    "LocationProvider",
    "LocationSample",
    "Participant",
    "ParticipantState",
    "PersistenceError",
    "PushNotifier",
    "ResolutionError",
    "RosterEntry",
    "Snapshot",
    "UpstreamAuthError",
    "UpstreamFetchError",
    "ViewerProfile",
]
