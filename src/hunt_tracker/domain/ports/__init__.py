"""Ports (interfaces) for the ports-and-adapters architecture."""

from hunt_tracker.domain.ports.key_value_repository import KeyValueRepository
from hunt_tracker.domain.ports.location_provider import LocationProvider
from hunt_tracker.domain.ports.push_notifier import PushNotifier
from hunt_tracker.domain.ports.tracker_adapter import TrackerAdapter

__all__ = [
    "KeyValueRepository",
    "LocationProvider",
    "PushNotifier",
    "TrackerAdapter",
]
