"""Adapters layer - external system integrations."""

from hunt_tracker.adapters.config import AppConfig
from hunt_tracker.adapters.persistence import InMemoryRepository, JsonFileRepository
from hunt_tracker.adapters.push import HttpPushNotifier, LoggingPushNotifier
from hunt_tracker.adapters.upstream_api import UpstreamHttpClient, UpstreamLocationProvider

__all__ = [
    "AppConfig",
    "HttpPushNotifier",
    "InMemoryRepository",
    "JsonFileRepository",
    "LoggingPushNotifier",
    "UpstreamHttpClient",
    "UpstreamLocationProvider",
]
