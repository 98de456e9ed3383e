"""Upstream failure details."""

from pydantic import BaseModel, ConfigDict

TRANSIENT_STATUS_CODES = frozenset({429, 502, 503, 504})


class ErrorDetails(BaseModel):
    """Why an upstream call failed: the HTTP status when one was received, and a reason."""

    model_config = ConfigDict(frozen=True)

    status_code: int | None = None
    reason: str

    @property
    def is_transient(self) -> bool:
        """Network failures, rate limiting and gateway errors usually clear by the next tick."""
        return self.status_code is None or self.status_code in TRANSIENT_STATUS_CODES
