"""Web adapters."""

from hunt_tracker.adapters.web.pollers import PollScheduler
from hunt_tracker.adapters.web.starlette_app import StarletteWebAdapter

__all__ = ["PollScheduler", "StarletteWebAdapter"]
