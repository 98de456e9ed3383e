"""Main entry point for the hunt tracker."""

import asyncio
import logging
import sys
from typing import Any

import aiohttp

from hunt_tracker.adapters.config import AppConfig, ViewerConfigurationLoader
from hunt_tracker.adapters.persistence import InMemoryRepository, JsonFileRepository
from hunt_tracker.adapters.push import HttpPushNotifier, LoggingPushNotifier
from hunt_tracker.adapters.upstream_api import UpstreamHttpClient, UpstreamLocationProvider
from hunt_tracker.adapters.web import PollScheduler, StarletteWebAdapter
from hunt_tracker.application.services import (
    AlertEngine,
    BackgroundTasks,
    ExpiryRefresher,
    RosterService,
    SessionTokenService,
    SnapshotFanOut,
    TrackerState,
    TrackingPipeline,
    ViewerChannelService,
    ViewerRegistry,
    ViewerResolver,
)
from hunt_tracker.domain.errors import PersistenceError
from hunt_tracker.domain.ports import KeyValueRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def _repository(path: str | None) -> KeyValueRepository:
    if path:
        return JsonFileRepository(path)
    return InMemoryRepository()


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    try:
        viewers = ViewerConfigurationLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid viewer configuration: {e}")
        sys.exit(1)

    if not viewers:
        logger.error("No viewers configured.")
        logger.error("Add [[viewers]] tables to your config file (see config.example.toml).")
        sys.exit(1)
    logger.info(f"Loaded {len(viewers)} viewer(s): {', '.join(v.viewer_id for v in viewers)}")

    missing = config.missing_upstream_settings()
    if missing:
        logger.error(f"Missing upstream settings: {', '.join(missing)}")
        sys.exit(1)

    async with aiohttp.ClientSession() as session:
        client = UpstreamHttpClient(
            session,
            base_url=config.upstream_base_url,
            api_url=config.upstream_api_url,
            api_key=config.upstream_api_key,
            timeout_seconds=config.api_timeout_seconds,
        )
        provider = UpstreamLocationProvider(client, config.game_id, config.avatar_base_url)

        if config.push_url:
            push_notifier = HttpPushNotifier(session, config.push_url, config.push_token)
        else:
            logger.info("No push service configured, notifications are only logged")
            push_notifier = LoggingPushNotifier()

        background = BackgroundTasks()
        state = TrackerState()
        registry = ViewerRegistry()
        location_repository = _repository(config.location_cache_file)
        try:
            state.load_last_known(await location_repository.load())
        except PersistenceError as e:
            logger.warning(f"Could not load last known locations, starting empty: {e}")

        tokens = SessionTokenService(_repository(config.session_token_file), background)
        await tokens.load()

        pipeline = TrackingPipeline(
            roster_service=RosterService(
                provider,
                config.api_email,
                config.api_password,
                request_location_refresh=config.request_location_refresh,
            ),
            expiry_refresher=ExpiryRefresher(
                provider,
                state,
                refresh_window_seconds=config.stealth_refresh_window_seconds,
                delay_seconds=config.stealth_refresh_delay_ms / 1000,
            ),
            state=state,
            alert_engine=AlertEngine(),
            registry=registry,
            broadcaster=SnapshotFanOut(registry, push_notifier, background),
            location_repository=location_repository,
            background=background,
        )
        scheduler = PollScheduler(
            pipeline,
            interval_seconds=config.refresh_interval_seconds,
            pause_when_idle=config.pause_when_idle,
        )
        channel = ViewerChannelService(
            registry,
            ViewerResolver(provider, viewers),
            tokens,
            state,
            on_first_viewer=scheduler.on_first_viewer if config.pause_when_idle else None,
        )

        def status() -> dict[str, Any]:
            return {
                **state.status(),
                "connectedViewers": len(registry),
                "authenticatedViewers": registry.authenticated_count(),
            }

        web_adapter = StarletteWebAdapter(channel, scheduler, config, status)
        try:
            await web_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await web_adapter.stop()
        finally:
            await background.drain()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
