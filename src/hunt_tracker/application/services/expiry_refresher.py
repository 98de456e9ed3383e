"""Stealth and immunity expiry refresh."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from hunt_tracker.application.services.tracker_state import CachedExpiry, TrackerState
from hunt_tracker.domain.errors import UpstreamError
from hunt_tracker.domain.models.snapshot import Snapshot

if TYPE_CHECKING:
    from hunt_tracker.domain.ports import LocationProvider

logger = logging.getLogger(__name__)


class ExpiryRefresher:
    """Fetches expiry timestamps for hidden participants, one request at a time.

    Consecutive requests are separated by ``delay_seconds``; no request is
    issued while another is pending.
    """

    def __init__(
        self,
        provider: LocationProvider,
        state: TrackerState,
        refresh_window_seconds: float = 120.0,
        delay_seconds: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the refresher.

        Args:
            provider: Upstream provider port.
            state: Tracker state owning the expiry cache.
            refresh_window_seconds: Minimum age of a cached expiry before it is re-fetched.
            delay_seconds: Pause between two consecutive detail requests.
            clock: Monotonic clock, replaceable in tests.
        """
        self.provider = provider
        self.state = state
        self.refresh_window_seconds = refresh_window_seconds
        self.delay_seconds = delay_seconds
        self.clock = clock

    def _is_due(self, participant_id: str, now: float) -> bool:
        cached = self.state.expiry_cache.get(participant_id)
        return cached is None or now - cached.fetched_at >= self.refresh_window_seconds

    async def refresh(self, access_token: str, participant_ids: list[str]) -> None:
        """Refresh due expiries and evict entries for participants no longer hidden."""
        cache = self.state.expiry_cache
        now = self.clock()
        due = [pid for pid in participant_ids if self._is_due(pid, now)]
        if due:
            logger.info(f"Refreshing expiry for {len(due)} hidden participant(s)")

        for i, participant_id in enumerate(due):
            try:
                expires_at = await self.provider.fetch_expiry(access_token, participant_id)
                cache[participant_id] = CachedExpiry(expires_at=expires_at, fetched_at=self.clock())
                logger.debug(f"Expiry for {participant_id}: {expires_at}")
            except UpstreamError as e:
                logger.warning(f"Failed to fetch expiry for {participant_id}: {e}")

            if self.delay_seconds > 0 and i < len(due) - 1:
                await asyncio.sleep(self.delay_seconds)

        keep = set(participant_ids)
        for participant_id in [pid for pid in cache if pid not in keep]:
            del cache[participant_id]

    def annotate(self, snapshot: Snapshot) -> Snapshot:
        """Attach cached expiries to the stealthed bucket."""
        cache = self.state.expiry_cache
        stealthed = []
        for participant in snapshot.stealthed:
            cached = cache.get(participant.participant_id)
            if cached is not None and cached.expires_at is not None:
                participant = replace(participant, expires_at=cached.expires_at)
            stealthed.append(participant)
        return replace(snapshot, stealthed=tuple(stealthed))
