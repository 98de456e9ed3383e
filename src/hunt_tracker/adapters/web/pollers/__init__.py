"""Pollers for the web adapter."""

from hunt_tracker.adapters.web.pollers.poll_scheduler import PollScheduler

__all__ = ["PollScheduler"]
