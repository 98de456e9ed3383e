"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=3000, description="Port to bind the server to")
    reload: bool = Field(default=False, description="Enable auto-reload for development")

    # Upstream provider configuration
    upstream_base_url: str = Field(
        default="https://erspvsdfwaqjtuhymubj.supabase.co",
        description="Base URL of the upstream auth and RPC endpoints",
    )
    upstream_api_url: str = Field(
        default="https://splashin.app/api/v3",
        description="Base URL of the upstream game API",
    )
    upstream_api_key: str = Field(default="", description="API key sent with every request")
    game_id: str = Field(default="", description="Identifier of the tracked game")
    api_email: str = Field(default="", description="Login of the polling account")
    api_password: str = Field(default="", description="Password of the polling account")
    avatar_base_url: str = Field(
        default="https://erspvsdfwaqjtuhymubj.supabase.co/storage/v1/object/public/avatars/",
        description="Prefix for participant avatar paths",
    )
    api_timeout_seconds: int = Field(
        default=10, description="Timeout for upstream requests in seconds"
    )

    # Poll pipeline configuration
    refresh_interval_seconds: int = Field(
        default=10, description="Interval between poll cycles in seconds"
    )
    stealth_refresh_window_seconds: int = Field(
        default=120,
        description="Minimum age of a cached stealth/immunity expiry before it is re-fetched",
    )
    stealth_refresh_delay_ms: int = Field(
        default=250,
        description="Sleep time in milliseconds between expiry detail requests",
    )
    request_location_refresh: bool = Field(
        default=True,
        description="Ask upstream to refresh every participant's location before each poll",
    )
    pause_when_idle: bool = Field(
        default=True,
        description="Skip poll cycles while no viewer is connected",
    )

    # Persistence configuration
    location_cache_file: str | None = Field(
        default="last_known_locations.json",
        description="File holding the last known location cache (unset for in-memory only)",
    )
    session_token_file: str | None = Field(
        default="session_tokens.json",
        description="File holding issued session tokens (unset for in-memory only)",
    )

    # Push notification configuration
    push_url: str | None = Field(
        default=None, description="Endpoint of the push notification service"
    )
    push_token: str | None = Field(
        default=None, description="Bearer token for the push notification service"
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of HTTP requests allowed per IP address per minute",
    )

    # TOML config file path holding the [[viewers]] tables
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file for viewer profiles",
    )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a configuration that ignores any .env file."""
        return cls(_env_file=None, **overrides)  # type: ignore[call-arg]

    @field_validator("refresh_interval_seconds", "api_timeout_seconds")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate intervals and timeouts are positive."""
        if v <= 0:
            raise ValueError("interval and timeout values must be positive")
        return v

    @field_validator("stealth_refresh_window_seconds", "stealth_refresh_delay_ms")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate windows and delays are not negative."""
        if v < 0:
            raise ValueError("refresh window and delay must not be negative")
        return v

    def missing_upstream_settings(self) -> list[str]:
        """Names of upstream settings that must be set before polling can work."""
        required = {
            "UPSTREAM_API_KEY": self.upstream_api_key,
            "GAME_ID": self.game_id,
            "API_EMAIL": self.api_email,
            "API_PASSWORD": self.api_password,
        }
        return [name for name, value in required.items() if not value]

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file, updating pipeline settings."""
        if not self.config_file:
            raise ValueError("config_file must be set to load viewer configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        # Update pipeline settings from TOML if present
        polling = toml_data.get("polling", {})
        if isinstance(polling, dict):
            if "refresh_interval_seconds" in polling:
                self.refresh_interval_seconds = polling["refresh_interval_seconds"]
            if "stealth_refresh_window_seconds" in polling:
                self.stealth_refresh_window_seconds = polling["stealth_refresh_window_seconds"]
            if "stealth_refresh_delay_ms" in polling:
                self.stealth_refresh_delay_ms = polling["stealth_refresh_delay_ms"]
            if "request_location_refresh" in polling:
                self.request_location_refresh = polling["request_location_refresh"]
            if "pause_when_idle" in polling:
                self.pause_when_idle = polling["pause_when_idle"]

        return toml_data

    def get_viewers_config(self) -> list[dict[str, Any]]:
        """Parse and return the [[viewers]] tables from the TOML file.

        Raises ValueError if viewers is not a list or viewer ids are not unique.
        """
        toml_data = self._load_toml_data()

        viewers = toml_data.get("viewers", [])
        if not isinstance(viewers, list):
            raise ValueError("TOML config 'viewers' must be a list")

        ids = [v.get("id") for v in viewers if isinstance(v, dict)]
        if len(ids) != len(set(ids)):
            duplicates = {i for i in ids if ids.count(i) > 1}
            raise ValueError(f"Viewer ids must be unique. Duplicate ids found: {duplicates}")

        return [v for v in viewers if isinstance(v, dict)]
