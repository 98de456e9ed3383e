"""Push notification adapters."""

from hunt_tracker.adapters.push.http_push_notifier import HttpPushNotifier, LoggingPushNotifier

__all__ = ["HttpPushNotifier", "LoggingPushNotifier"]
