"""Roster and location fetcher."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from hunt_tracker.domain.models.roster import FetchResult, Roster

if TYPE_CHECKING:
    from hunt_tracker.domain.models.roster_entry import RosterEntry
    from hunt_tracker.domain.ports import LocationProvider

logger = logging.getLogger(__name__)


class RosterService:
    """Builds the per-cycle roster and retrieves the location snapshot."""

    def __init__(
        self,
        provider: LocationProvider,
        email: str,
        password: str,
        request_location_refresh: bool = True,
    ) -> None:
        """Initialize the roster service.

        Args:
            provider: Upstream provider port.
            email: Login of the polling account.
            password: Password of the polling account.
            request_location_refresh: Ask upstream to refresh every
                participant's location before reading the snapshot.
        """
        self.provider = provider
        self.email = email
        self.password = password
        self.request_location_refresh = request_location_refresh

    async def authenticate(self) -> str:
        """Exchange the polling account's credentials for an access token."""
        access_token = await self.provider.authenticate(self.email, self.password)
        logger.info("Authentication successful")
        return access_token

    async def fetch(self, access_token: str) -> FetchResult:
        """Fetch the deduplicated roster and the raw location samples."""
        roster = await self.fetch_roster(access_token)
        if not roster.entries:
            logger.info("No players found in the game roster")
            return FetchResult(roster=roster)

        if self.request_location_refresh:
            await self._request_location_refresh(access_token, list(roster.entries))

        samples = await self.provider.fetch_locations(access_token)
        logger.info(f"Received {len(samples)} raw location updates")
        return FetchResult(roster=roster, samples=samples)

    async def fetch_roster(self, access_token: str) -> Roster:
        """Merge the dashboard summary with every roster page.

        The first entry seen for an id wins, and dashboard entries are seen
        before paginated ones.
        """
        dashboard = await self.provider.fetch_dashboard(access_token)
        entries: dict[str, RosterEntry] = {}

        dashboard_entries = [*dashboard.targets, *dashboard.teammates]
        if dashboard.current_player is not None:
            dashboard_entries.insert(0, dashboard.current_player)
        for entry in dashboard_entries:
            entries.setdefault(entry.participant_id, entry)

        cursor = 0
        while True:
            page = await self.provider.fetch_roster_page(access_token, cursor)
            if page.is_last:
                break
            for entry in page.entries:
                entries.setdefault(entry.participant_id, entry)
            cursor += 1

        logger.info(f"Total unique players in roster: {len(entries)} ({cursor} page(s))")
        return Roster(
            entries=entries,
            own_team_id=dashboard.own_team_id,
            target_team_ids=dashboard.target_team_ids,
            own_participant_id=(
                dashboard.current_player.participant_id if dashboard.current_player else None
            ),
        )

    async def _request_location_refresh(
        self, access_token: str, participant_ids: list[str]
    ) -> None:
        results = await asyncio.gather(
            *(
                self.provider.request_location_refresh(access_token, participant_id)
                for participant_id in participant_ids
            ),
            return_exceptions=True,
        )
        failed = [r for r in results if isinstance(r, Exception)]
        if failed:
            logger.warning(
                f"{len(failed)} of {len(participant_ids)} location requests failed, continuing"
            )
        else:
            logger.debug(f"Sent {len(participant_ids)} location requests")
