"""Fixed-interval scheduler driving the tracking pipeline."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from hunt_tracker.domain.contracts.poll_scheduler import PollSchedulerProtocol
from hunt_tracker.domain.errors import HuntTrackerError, UpstreamError

if TYPE_CHECKING:
    from hunt_tracker.domain.contracts.tracking_pipeline import TrackingPipelineProtocol

logger = logging.getLogger(__name__)


class PollScheduler(PollSchedulerProtocol):
    """Starts a poll cycle every interval, with at most one cycle in flight.

    A tick that fires while the previous cycle is still running is dropped,
    not queued. The in-flight flag is checked and set without awaiting in
    between, so two ticks can never both pass the check.
    """

    def __init__(
        self,
        pipeline: TrackingPipelineProtocol,
        interval_seconds: float,
        pause_when_idle: bool = True,
    ) -> None:
        """Initialize the scheduler.

        Args:
            pipeline: Pipeline that runs one cycle.
            interval_seconds: Time between tick starts.
            pause_when_idle: Skip ticks while no viewer is authenticated.
        """
        self.pipeline = pipeline
        self.interval_seconds = interval_seconds
        self.pause_when_idle = pause_when_idle
        self._running = False
        self._task: asyncio.Task | None = None
        self._ticks: set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the scheduler."""
        if self._task is not None and not self._task.done():
            logger.warning("Poll scheduler already running")
            return

        self._task = asyncio.create_task(self._tick_loop())
        logger.info(f"Started poll scheduler (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the scheduler and cancel any cycle in flight."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Poll scheduler cancelled")
        for task in list(self._ticks):
            task.cancel()
        if self._ticks:
            await asyncio.gather(*self._ticks, return_exceptions=True)
        logger.info("Stopped poll scheduler")

    def trigger(self) -> None:
        """Start a tick now without waiting for the next interval."""
        self._spawn_tick()

    async def on_first_viewer(self) -> None:
        logger.info("First viewer connected, polling immediately")
        self.trigger()

    def _spawn_tick(self) -> None:
        task = asyncio.create_task(self.tick())
        self._ticks.add(task)
        task.add_done_callback(self._ticks.discard)

    async def _tick_loop(self) -> None:
        # First tick fires immediately
        try:
            while True:
                self._spawn_tick()
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.info("Poll loop cancelled")
            raise

    async def tick(self) -> bool:
        """Run one cycle unless one is already in flight or nobody is watching."""
        if self._running:
            logger.debug("Previous cycle still running, skipping tick")
            return False
        if self.pause_when_idle and not self.pipeline.has_viewers():
            logger.debug("No viewers connected, skipping tick")
            return False

        self._running = True
        try:
            await self.pipeline.run_cycle()
            return True
        except UpstreamError as e:
            if e.details.is_transient:
                logger.warning(f"Poll cycle failed, retrying next tick: {e}")
            else:
                logger.error(f"Poll cycle failed: {e}")
            self.pipeline.mark_failed()
            return True
        except HuntTrackerError as e:
            logger.error(f"Poll cycle failed: {e}")
            self.pipeline.mark_failed()
            return True
        except Exception as e:
            logger.error(f"Unexpected error in poll cycle: {e}", exc_info=True)
            self.pipeline.mark_failed()
            return True
        finally:
            self._running = False
