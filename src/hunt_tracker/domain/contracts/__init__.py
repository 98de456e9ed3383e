"""Contracts (protocols) between the application and adapter layers."""

from hunt_tracker.domain.contracts.poll_scheduler import PollSchedulerProtocol
from hunt_tracker.domain.contracts.snapshot_broadcaster import SnapshotBroadcasterProtocol
from hunt_tracker.domain.contracts.tracking_pipeline import TrackingPipelineProtocol
from hunt_tracker.domain.contracts.viewer_channel import ViewerChannelProtocol
from hunt_tracker.domain.contracts.viewer_connection import ViewerConnectionProtocol

__all__ = [
    "PollSchedulerProtocol",
    "SnapshotBroadcasterProtocol",
    "TrackingPipelineProtocol",
    "ViewerChannelProtocol",
    "ViewerConnectionProtocol",
]
