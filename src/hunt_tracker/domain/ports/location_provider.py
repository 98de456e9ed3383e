"""Upstream roster and location provider port."""

from datetime import datetime
from typing import Protocol

from hunt_tracker.domain.models.location_sample import LocationSample
from hunt_tracker.domain.models.roster import DashboardSummary, RosterPage


class LocationProvider(Protocol):
    """Port for the upstream game provider.

    Implementations raise ``UpstreamAuthError`` when the credential exchange
    fails and ``UpstreamFetchError`` for any other failed call.
    """

    async def authenticate(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer access token."""
        ...

    async def fetch_dashboard(self, access_token: str) -> DashboardSummary:
        """Get the account's own player, teammates and targets."""
        ...

    async def fetch_roster_page(self, access_token: str, cursor: int) -> RosterPage:
        """Get one page of the full roster."""
        ...

    async def request_location_refresh(self, access_token: str, participant_id: str) -> None:
        """Ask the provider to refresh one participant's location."""
        ...

    async def fetch_locations(self, access_token: str) -> list[LocationSample]:
        """Get the current location snapshot for the game."""
        ...

    async def fetch_expiry(self, access_token: str, participant_id: str) -> datetime | None:
        """Get the stealth or immunity expiry for one participant."""
        ...
