"""The fetch, classify, publish and alert pipeline run once per poll cycle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from hunt_tracker.application.services.classifier import classify
from hunt_tracker.domain.errors import PersistenceError

if TYPE_CHECKING:
    from hunt_tracker.application.services.alert_engine import AlertEngine
    from hunt_tracker.application.services.background import BackgroundTasks
    from hunt_tracker.application.services.expiry_refresher import ExpiryRefresher
    from hunt_tracker.application.services.roster_service import RosterService
    from hunt_tracker.application.services.tracker_state import TrackerState
    from hunt_tracker.application.services.viewer_registry import ViewerRegistry
    from hunt_tracker.domain.contracts.snapshot_broadcaster import SnapshotBroadcasterProtocol
    from hunt_tracker.domain.models.snapshot import Snapshot
    from hunt_tracker.domain.ports import KeyValueRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TrackingPipeline:
    """Runs one complete cycle.

    The snapshot is computed to completion and stored before any viewer is
    sent anything, so every broadcast reflects exactly one location poll.
    Upstream errors propagate to the caller and leave the stored snapshot
    untouched.
    """

    def __init__(
        self,
        roster_service: RosterService,
        expiry_refresher: ExpiryRefresher,
        state: TrackerState,
        alert_engine: AlertEngine,
        registry: ViewerRegistry,
        broadcaster: SnapshotBroadcasterProtocol,
        location_repository: KeyValueRepository,
        background: BackgroundTasks,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.roster_service = roster_service
        self.expiry_refresher = expiry_refresher
        self.state = state
        self.alert_engine = alert_engine
        self.registry = registry
        self.broadcaster = broadcaster
        self.location_repository = location_repository
        self.background = background
        self.clock = clock

    def has_viewers(self) -> bool:
        return self.broadcaster.has_viewers()

    def mark_failed(self) -> None:
        self.state.mark_failed(self.clock())

    async def run_cycle(self) -> Snapshot:
        access_token = await self.roster_service.authenticate()
        fetched = await self.roster_service.fetch(access_token)

        now = self.clock()
        result = classify(fetched.roster, fetched.samples, self.state.last_known, now)
        await self.expiry_refresher.refresh(
            access_token, [p.participant_id for p in result.snapshot.stealthed]
        )
        snapshot = self.expiry_refresher.annotate(result.snapshot)

        if self.state.merge_locations(result.location_updates):
            self.background.spawn(self._persist_locations(self.state.last_known_payload()))
        self.state.publish(snapshot, fetched.roster, now)

        await self.broadcaster.broadcast_snapshot(snapshot)

        evaluation = self.alert_engine.evaluate(
            snapshot, result.states, self.registry.sessions(), self.state.last_known
        )
        self.registry.apply_in_range(evaluation.in_range)
        await self.broadcaster.dispatch_alerts(evaluation.alerts)

        logger.info(
            f"Processed {len(snapshot.located)} located, {len(snapshot.stealthed)} stealthed, "
            f"{len(snapshot.safe_zone)} in safe zone, {len(snapshot.not_located)} not located"
        )
        return snapshot

    async def _persist_locations(self, payload: dict) -> None:
        try:
            await self.location_repository.save(payload)
            logger.debug(f"Persisted {len(payload)} last known location(s)")
        except PersistenceError as e:
            logger.error(f"Failed to persist last known locations: {e}")
