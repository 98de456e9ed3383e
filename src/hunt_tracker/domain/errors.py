"""Error taxonomy for the hunt tracker."""

from hunt_tracker.domain.models.error_details import ErrorDetails


class HuntTrackerError(Exception):
    """Base class for all hunt tracker errors."""


class UpstreamError(HuntTrackerError):
    """An upstream provider call failed."""

    def __init__(self, message: str, details: ErrorDetails | None = None) -> None:
        super().__init__(message)
        self.details = details or ErrorDetails(reason=message)


class UpstreamAuthError(UpstreamError):
    """Credential exchange with the upstream provider failed."""


class UpstreamFetchError(UpstreamError):
    """A roster, location or detail request failed."""


class ResolutionError(HuntTrackerError):
    """A viewer's team or targets could not be resolved."""


class PersistenceError(HuntTrackerError):
    """Loading or saving a persisted map failed."""
