"""Application services."""

from hunt_tracker.application.services.alert_engine import AlertEngine, AlertEvaluation
from hunt_tracker.application.services.background import BackgroundTasks
from hunt_tracker.application.services.classifier import classify
from hunt_tracker.application.services.expiry_refresher import ExpiryRefresher
from hunt_tracker.application.services.fan_out import SnapshotFanOut, state_update_message
from hunt_tracker.application.services.roster_service import RosterService
from hunt_tracker.application.services.session_tokens import SessionTokenService
from hunt_tracker.application.services.tracker_state import CachedExpiry, TrackerState
from hunt_tracker.application.services.tracking_pipeline import TrackingPipeline
from hunt_tracker.application.services.viewer_channel import ViewerChannelService
from hunt_tracker.application.services.viewer_registry import ViewerRegistry
from hunt_tracker.application.services.viewer_resolver import ViewerResolver
from hunt_tracker.application.services.visibility_filter import (
    display_role,
    filter_snapshot,
    is_visible,
    view_participant,
)

__all__ = [
    "AlertEngine",
    "AlertEvaluation",
    "BackgroundTasks",
    "CachedExpiry",
    "ExpiryRefresher",
    "RosterService",
    "SessionTokenService",
    "SnapshotFanOut",
    "TrackerState",
    "TrackingPipeline",
    "ViewerChannelService",
    "ViewerRegistry",
    "ViewerResolver",
    "classify",
    "display_role",
    "filter_snapshot",
    "is_visible",
    "state_update_message",
    "view_participant",
]
