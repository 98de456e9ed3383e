"""Upstream location provider adapter."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from hunt_tracker.adapters.upstream_api import payload_parser
from hunt_tracker.adapters.upstream_api.constants import (
    DASHBOARD_PATH,
    LOCATION_REQUEST_PATH,
    LOCATION_REQUEST_QUEUE,
    LOCATIONS_PATH,
    PLAYER_DETAIL_PATH,
    PLAYERS_PAGE_PARAMS,
    PLAYERS_PATH,
)
from hunt_tracker.domain.errors import UpstreamFetchError
from hunt_tracker.domain.ports.location_provider import LocationProvider

if TYPE_CHECKING:
    from hunt_tracker.adapters.upstream_api.http_client import UpstreamHttpClient
    from hunt_tracker.domain.models.location_sample import LocationSample
    from hunt_tracker.domain.models.roster import DashboardSummary, RosterPage

logger = logging.getLogger(__name__)


class UpstreamLocationProvider(LocationProvider):
    """Adapter turning upstream HTTP payloads into typed roster and location records."""

    def __init__(self, client: UpstreamHttpClient, game_id: str, avatar_base_url: str = "") -> None:
        self.client = client
        self.game_id = game_id
        self.avatar_base_url = avatar_base_url

    async def authenticate(self, email: str, password: str) -> str:
        return await self.client.authenticate(email, password)

    async def fetch_dashboard(self, access_token: str) -> DashboardSummary:
        data = await self.client.get_api(DASHBOARD_PATH.format(game_id=self.game_id), access_token)
        try:
            return payload_parser.parse_dashboard(data, self.avatar_base_url)
        except ValueError as e:
            raise UpstreamFetchError(f"Unexpected dashboard payload: {e}") from e

    async def fetch_roster_page(self, access_token: str, cursor: int) -> RosterPage:
        params = {"cursor": cursor, **PLAYERS_PAGE_PARAMS}
        data = await self.client.get_api(
            PLAYERS_PATH.format(game_id=self.game_id), access_token, params=params
        )
        try:
            page = payload_parser.parse_roster_page(data, self.avatar_base_url)
        except ValueError as e:
            raise UpstreamFetchError(f"Unexpected roster payload: {e}") from e
        logger.debug(
            f"Roster page {cursor}: {page.team_group_count} team(s), {len(page.entries)} player(s)"
        )
        return page

    async def request_location_refresh(self, access_token: str, participant_id: str) -> None:
        await self.client.post_rpc(
            LOCATION_REQUEST_PATH,
            access_token,
            {"uid": participant_id, "queue_name": LOCATION_REQUEST_QUEUE},
        )

    async def fetch_locations(self, access_token: str) -> list[LocationSample]:
        data = await self.client.post_rpc(LOCATIONS_PATH, access_token, {"gid": self.game_id})
        try:
            return payload_parser.parse_location_samples(data)
        except ValueError as e:
            raise UpstreamFetchError(f"Unexpected location payload: {e}") from e

    async def fetch_expiry(self, access_token: str, participant_id: str) -> datetime | None:
        data = await self.client.get_api(
            PLAYER_DETAIL_PATH.format(game_id=self.game_id, participant_id=participant_id),
            access_token,
        )
        try:
            return payload_parser.parse_expiry(data)
        except ValueError as e:
            raise UpstreamFetchError(f"Unexpected detail payload for {participant_id}: {e}") from e
