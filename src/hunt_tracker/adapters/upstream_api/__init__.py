"""Upstream game provider adapters."""

from hunt_tracker.adapters.upstream_api.http_client import UpstreamHttpClient
from hunt_tracker.adapters.upstream_api.upstream_location_provider import (
    UpstreamLocationProvider,
)

__all__ = ["UpstreamHttpClient", "UpstreamLocationProvider"]
