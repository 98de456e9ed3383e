"""Tests for PollScheduler single-flight and failure behavior."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from hunt_tracker.adapters.web.pollers import PollScheduler
from hunt_tracker.domain.errors import UpstreamAuthError, UpstreamFetchError
from hunt_tracker.domain.models import ErrorDetails


def _pipeline(has_viewers: bool = True) -> MagicMock:
    pipeline = MagicMock()
    pipeline.has_viewers.return_value = has_viewers
    pipeline.run_cycle = AsyncMock()
    return pipeline


@pytest.mark.asyncio
async def test_when_cycle_in_flight_then_tick_skipped() -> None:
    """Given a slow cycle in flight, when another tick fires, then it is skipped and not queued."""
    release = asyncio.Event()
    pipeline = _pipeline()

    async def slow_cycle() -> None:
        await release.wait()

    pipeline.run_cycle.side_effect = slow_cycle
    scheduler = PollScheduler(pipeline, interval_seconds=10)

    first = asyncio.create_task(scheduler.tick())
    await asyncio.sleep(0)
    assert scheduler.is_running

    assert await scheduler.tick() is False
    release.set()
    assert await first is True

    assert pipeline.run_cycle.await_count == 1
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_when_cycle_fails_then_marked_failed_and_flag_reset() -> None:
    """Given an upstream failure, when ticking, then the failure is recorded and the next tick runs."""
    pipeline = _pipeline()
    pipeline.run_cycle.side_effect = [UpstreamFetchError("HTTP 503"), None]
    scheduler = PollScheduler(pipeline, interval_seconds=10)

    assert await scheduler.tick() is True
    pipeline.mark_failed.assert_called_once()
    assert not scheduler.is_running

    assert await scheduler.tick() is True
    assert pipeline.run_cycle.await_count == 2


@pytest.mark.asyncio
async def test_when_unexpected_error_then_scheduler_survives() -> None:
    """Given an unexpected exception, when ticking, then it is logged and the flag is reset."""
    pipeline = _pipeline()
    pipeline.run_cycle.side_effect = RuntimeError("boom")
    scheduler = PollScheduler(pipeline, interval_seconds=10)

    assert await scheduler.tick() is True

    pipeline.mark_failed.assert_called_once()
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_when_idle_and_pausing_then_tick_skipped() -> None:
    """Given no viewers and pause_when_idle, when ticking, then no cycle runs."""
    pipeline = _pipeline(has_viewers=False)
    scheduler = PollScheduler(pipeline, interval_seconds=10, pause_when_idle=True)

    assert await scheduler.tick() is False
    pipeline.run_cycle.assert_not_awaited()


@pytest.mark.asyncio
async def test_when_idle_and_not_pausing_then_cycle_runs() -> None:
    pipeline = _pipeline(has_viewers=False)
    scheduler = PollScheduler(pipeline, interval_seconds=10, pause_when_idle=False)

    assert await scheduler.tick() is True
    pipeline.run_cycle.assert_awaited_once()


@pytest.mark.asyncio
async def test_when_started_then_first_tick_is_immediate() -> None:
    """Given a long interval, when starting, then a cycle runs without waiting for the interval."""
    pipeline = _pipeline()
    scheduler = PollScheduler(pipeline, interval_seconds=3600)

    await scheduler.start()
    for _ in range(5):
        await asyncio.sleep(0)
    await scheduler.stop()

    pipeline.run_cycle.assert_awaited_once()


@pytest.mark.asyncio
async def test_when_first_viewer_connects_then_tick_triggered() -> None:
    pipeline = _pipeline()
    scheduler = PollScheduler(pipeline, interval_seconds=3600)

    await scheduler.on_first_viewer()
    for _ in range(3):
        await asyncio.sleep(0)

    pipeline.run_cycle.assert_awaited_once()
    await scheduler.stop()


@pytest.mark.asyncio
async def test_when_upstream_unavailable_then_logged_as_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Given a gateway error, when ticking, then the failure is a warning and the cycle is marked failed."""
    pipeline = _pipeline()
    details = ErrorDetails(status_code=503, reason="Service unavailable")
    pipeline.run_cycle.side_effect = UpstreamFetchError("GET /players failed", details)
    scheduler = PollScheduler(pipeline, interval_seconds=10)

    with caplog.at_level(logging.WARNING):
        await scheduler.tick()

    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    pipeline.mark_failed.assert_called_once()


@pytest.mark.asyncio
async def test_when_credentials_rejected_then_logged_as_error(
    caplog: pytest.LogCaptureFixture,
) -> None:
    pipeline = _pipeline()
    pipeline.run_cycle.side_effect = UpstreamAuthError(
        "Authentication failed", ErrorDetails(status_code=401, reason="Unauthorized")
    )
    scheduler = PollScheduler(pipeline, interval_seconds=10)

    with caplog.at_level(logging.WARNING):
        await scheduler.tick()

    assert [r.levelno for r in caplog.records] == [logging.ERROR]
