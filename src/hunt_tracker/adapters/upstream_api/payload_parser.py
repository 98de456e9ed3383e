"""Parsing of upstream JSON payloads into typed domain records.

Missing or malformed numeric fields default to zero and missing names to
placeholders, so the classifier never sees raw upstream data.
"""

import logging
import math
from datetime import UTC, datetime
from typing import Any

from hunt_tracker.domain.models.location_sample import LocationSample
from hunt_tracker.domain.models.roster import DashboardSummary, RosterPage
from hunt_tracker.domain.models.roster_entry import RosterEntry

logger = logging.getLogger(__name__)

DEFAULT_FIRST_NAME = "Player"
DEFAULT_TEAM_NAME = "N/A"
DEFAULT_TEAM_COLOR = "#3388ff"


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(result) or math.isinf(result) else result


def _to_coordinate(value: Any, limit: float) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or abs(result) > limit:
        return None
    return result


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or epoch seconds into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (ValueError, OverflowError, OSError):
            logger.debug(f"Ignoring out-of-range timestamp: {value!r}")
            return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Ignoring unparseable timestamp: {value!r}")
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_roster_entry(raw: Any, avatar_base_url: str = "") -> RosterEntry | None:
    """Build a roster entry, or None when the payload has no participant id."""
    if not isinstance(raw, dict):
        return None
    participant_id = _to_text(raw.get("id"))
    if participant_id is None:
        return None

    avatar_path = _to_text(raw.get("avatar_path_small"))
    return RosterEntry(
        participant_id=participant_id,
        first_name=_to_text(raw.get("first_name")) or DEFAULT_FIRST_NAME,
        last_name=_to_text(raw.get("last_name")) or "",
        team_id=_to_text(raw.get("team_id")),
        team_name=_to_text(raw.get("team_name")) or DEFAULT_TEAM_NAME,
        team_color=_to_text(raw.get("team_color")) or DEFAULT_TEAM_COLOR,
        avatar_url=f"{avatar_base_url}{avatar_path}" if avatar_path else None,
        in_safe_zone=_to_bool(raw.get("is_in_safe_zone")),
        immunity_expires_at=parse_timestamp(raw.get("immunity_expires_at")),
    )


def _parse_entries(raw_list: Any, avatar_base_url: str) -> list[RosterEntry]:
    if not isinstance(raw_list, list):
        return []
    entries = [parse_roster_entry(raw, avatar_base_url) for raw in raw_list]
    return [entry for entry in entries if entry is not None]


def parse_dashboard(data: Any, avatar_base_url: str = "") -> DashboardSummary:
    """Parse the dashboard summary of the authenticated account."""
    if not isinstance(data, dict):
        raise ValueError("dashboard payload must be an object")
    return DashboardSummary(
        current_player=parse_roster_entry(data.get("currentPlayer"), avatar_base_url),
        teammates=_parse_entries(data.get("myTeam"), avatar_base_url),
        targets=_parse_entries(data.get("targets"), avatar_base_url),
    )


def parse_roster_page(data: Any, avatar_base_url: str = "") -> RosterPage:
    """Parse one page of the team-grouped roster."""
    if not isinstance(data, dict):
        return RosterPage()
    teams = data.get("teams")
    if not isinstance(teams, list) or not teams:
        return RosterPage()

    entries: list[RosterEntry] = []
    for team in teams:
        if isinstance(team, dict):
            entries.extend(_parse_entries(team.get("players"), avatar_base_url))
    return RosterPage(team_group_count=len(teams), entries=entries)


def parse_location_sample(raw: Any) -> LocationSample | None:
    """Parse one compact location record, or None when it has no participant id."""
    if not isinstance(raw, dict):
        return None
    participant_id = _to_text(raw.get("u"))
    if participant_id is None:
        return None

    latitude = _to_coordinate(raw.get("l"), 90.0)
    longitude = _to_coordinate(raw.get("lo"), 180.0)
    if latitude is None or longitude is None:
        latitude = longitude = None

    return LocationSample(
        participant_id=participant_id,
        latitude=latitude,
        longitude=longitude,
        status=_to_text(raw.get("a")),
        speed=_to_float(raw.get("s")),
        battery_level=_to_float(raw.get("bl")),
        is_charging=_to_bool(raw.get("ic")),
        accuracy=_to_float(raw.get("ac")),
        heading=_to_float(raw.get("h")),
        updated_at=_to_text(raw.get("up")),
        in_safe_zone=_to_bool(raw.get("sz")),
    )


def parse_location_samples(data: Any) -> list[LocationSample]:
    """Parse the location snapshot, keeping one sample per participant."""
    if not isinstance(data, list):
        raise ValueError("location payload must be a list")
    samples: dict[str, LocationSample] = {}
    for raw in data:
        sample = parse_location_sample(raw)
        if sample is not None:
            samples.setdefault(sample.participant_id, sample)
    return list(samples.values())


def parse_expiry(data: Any) -> datetime | None:
    """Extract the stealth or immunity expiry from a participant detail payload."""
    if not isinstance(data, dict):
        return None
    player = data.get("player") if isinstance(data.get("player"), dict) else data
    for key in ("stealth_expires_at", "immunity_expires_at"):
        expires_at = parse_timestamp(player.get(key))
        if expires_at is not None:
            return expires_at
    return None
