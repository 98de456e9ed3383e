"""Domain models for the hunt tracker."""

from hunt_tracker.domain.models.alerts import GhostAlert, PendingAlert, ProximityAlert
from hunt_tracker.domain.models.error_details import ErrorDetails
from hunt_tracker.domain.models.last_known_location import LastKnownLocation
from hunt_tracker.domain.models.location_sample import LocationSample
from hunt_tracker.domain.models.participant import Participant
from hunt_tracker.domain.models.participant_state import DisplayRole, ParticipantState
from hunt_tracker.domain.models.roster import DashboardSummary, FetchResult, Roster, RosterPage
from hunt_tracker.domain.models.roster_entry import RosterEntry
from hunt_tracker.domain.models.snapshot import ClassificationResult, Snapshot
from hunt_tracker.domain.models.viewer_profile import ViewerConfiguration, ViewerProfile
from hunt_tracker.domain.models.viewer_session import (
    UNLIMITED_RADIUS,
    NotificationSubscription,
    ViewerSession,
)

__all__ = [
    "UNLIMITED_RADIUS",
    "ClassificationResult",
    "DashboardSummary",
    "DisplayRole",
    "ErrorDetails",
    "FetchResult",
    "GhostAlert",
    "LastKnownLocation",
    "LocationSample",
    "NotificationSubscription",
    "Participant",
    "ParticipantState",
    "PendingAlert",
    "ProximityAlert",
    "Roster",
    "RosterEntry",
    "RosterPage",
    "Snapshot",
    "ViewerConfiguration",
    "ViewerProfile",
    "ViewerSession",
]
