"""Tests for configuration adapter."""

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest

from hunt_tracker.adapters.config import AppConfig, ViewerConfigurationLoader


def _write_toml(content: str) -> str:
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(content)
        return f.name


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig.for_testing()

    assert config.host == "0.0.0.0"
    assert config.port == 3000
    assert config.refresh_interval_seconds == 10
    assert config.stealth_refresh_window_seconds == 120
    assert config.stealth_refresh_delay_ms == 250
    assert config.location_cache_file == "last_known_locations.json"


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("GAME_ID", "game-42")
    monkeypatch.setenv("REFRESH_INTERVAL_SECONDS", "15")
    monkeypatch.setenv("PAUSE_WHEN_IDLE", "false")

    config = AppConfig.for_testing()

    assert config.port == 9000
    assert config.game_id == "game-42"
    assert config.refresh_interval_seconds == 15
    assert config.pause_when_idle is False


def test_config_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError, match="must be positive"):
        AppConfig.for_testing(refresh_interval_seconds=0)


def test_config_rejects_negative_delay() -> None:
    with pytest.raises(ValueError, match="must not be negative"):
        AppConfig.for_testing(stealth_refresh_delay_ms=-1)


def test_missing_upstream_settings_are_reported() -> None:
    """Given only a game id, when checking, then the other upstream settings are listed as missing."""
    config = AppConfig.for_testing(game_id="g")

    assert config.missing_upstream_settings() == ["UPSTREAM_API_KEY", "API_EMAIL", "API_PASSWORD"]


def test_config_raises_error_when_file_not_found() -> None:
    config = AppConfig.for_testing(config_file="nonexistent.toml")

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        config.get_viewers_config()


def test_config_raises_error_when_config_file_not_set() -> None:
    config = AppConfig.for_testing(config_file=None)

    with pytest.raises(ValueError, match="config_file must be set"):
        config.get_viewers_config()


def test_polling_table_overrides_settings() -> None:
    """Given a [polling] table, when loading viewers, then the polling settings are taken from it."""
    temp_path = _write_toml(
        """
[polling]
refresh_interval_seconds = 30
stealth_refresh_delay_ms = 0
pause_when_idle = false
"""
    )
    try:
        config = AppConfig.for_testing(config_file=temp_path)
        assert config.get_viewers_config() == []
        assert config.refresh_interval_seconds == 30
        assert config.stealth_refresh_delay_ms == 0
        assert config.pause_when_idle is False
    finally:
        Path(temp_path).unlink()


def test_duplicate_viewer_ids_rejected() -> None:
    temp_path = _write_toml(
        """
[[viewers]]
id = "admin"

[[viewers]]
id = "admin"
"""
    )
    try:
        config = AppConfig.for_testing(config_file=temp_path)
        with pytest.raises(ValueError, match="Duplicate ids"):
            config.get_viewers_config()
    finally:
        Path(temp_path).unlink()


def test_loader_builds_viewer_configurations() -> None:
    """Given the example config, when loading viewers, then permissions and logins are parsed."""
    example = Path(__file__).parent.parent / "config.example.toml"
    config = AppConfig.for_testing(config_file=str(example))

    viewers = {v.viewer_id: v for v in ViewerConfigurationLoader.load(config)}

    assert set(viewers) == {"admin", "red-scout", "blue-captain"}
    assert viewers["admin"].is_master
    assert viewers["admin"].can_see_last_known_location
    assert viewers["red-scout"].team_id == "team-red"
    assert viewers["red-scout"].target_team_ids == frozenset({"team-blue"})
    assert viewers["red-scout"].push_recipient == "red-scout"
    assert viewers["blue-captain"].has_reference_login
    assert viewers["blue-captain"].can_see_all_players


def test_loader_skips_viewer_without_id() -> None:
    temp_path = _write_toml(
        """
[[viewers]]
name = "nameless"

[[viewers]]
id = "ok"
target_team_ids = "not-a-list"
"""
    )
    try:
        viewers = ViewerConfigurationLoader.load(AppConfig.for_testing(config_file=temp_path))
        assert [v.viewer_id for v in viewers] == ["ok"]
        assert viewers[0].target_team_ids == frozenset()
    finally:
        Path(temp_path).unlink()
