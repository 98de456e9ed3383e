"""Tests for upstream payload parsing."""

from datetime import UTC, datetime

import pytest

from hunt_tracker.adapters.upstream_api import payload_parser


class TestRosterEntry:
    """Tests for roster entry defaults."""

    def test_when_fields_missing_then_defaults_applied(self) -> None:
        entry = payload_parser.parse_roster_entry({"id": 7})

        assert entry is not None
        assert entry.participant_id == "7"
        assert entry.first_name == "Player"
        assert entry.last_name == ""
        assert entry.team_name == "N/A"
        assert entry.team_color == "#3388ff"
        assert entry.team_id is None
        assert entry.avatar_url is None

    def test_when_fully_populated_then_parsed(self) -> None:
        raw = {
            "id": "p1",
            "first_name": "Ada",
            "last_name": "King",
            "team_id": "T1",
            "team_name": "Red",
            "team_color": "#ff0000",
            "avatar_path_small": "p1.png",
            "is_in_safe_zone": True,
            "immunity_expires_at": "2026-05-01T12:30:00Z",
        }

        entry = payload_parser.parse_roster_entry(raw, "https://cdn.example/")

        assert entry is not None
        assert entry.avatar_url == "https://cdn.example/p1.png"
        assert entry.in_safe_zone is True
        assert entry.immunity_expires_at == datetime(2026, 5, 1, 12, 30, tzinfo=UTC)

    def test_when_id_missing_then_none(self) -> None:
        assert payload_parser.parse_roster_entry({"first_name": "Ada"}) is None
        assert payload_parser.parse_roster_entry("garbage") is None


class TestLocationSample:
    """Tests for compact location records."""

    def test_numeric_fields_default_to_zero(self) -> None:
        sample = payload_parser.parse_location_sample(
            {"u": "p1", "l": "48.1", "lo": 11.5, "s": None, "bl": "n/a", "ac": True}
        )

        assert sample is not None
        assert (sample.latitude, sample.longitude) == (48.1, 11.5)
        assert sample.speed == 0.0
        assert sample.battery_level == 0.0
        assert sample.accuracy == 0.0
        assert sample.status is None

    def test_when_one_coordinate_invalid_then_both_dropped(self) -> None:
        sample = payload_parser.parse_location_sample({"u": "p1", "l": 95.0, "lo": 11.5, "a": "x"})

        assert sample is not None
        assert not sample.has_coordinates
        assert sample.status == "x"

    def test_when_list_contains_duplicates_then_first_wins(self) -> None:
        samples = payload_parser.parse_location_samples(
            [{"u": "p1", "a": "first"}, {"u": "p1", "a": "second"}, {"no": "id"}]
        )

        assert [(s.participant_id, s.status) for s in samples] == [("p1", "first")]

    def test_when_payload_not_list_then_value_error(self) -> None:
        with pytest.raises(ValueError):
            payload_parser.parse_location_samples({"error": "nope"})


def test_dashboard_parsed() -> None:
    data = {
        "currentPlayer": {"id": "me", "team_id": "T1"},
        "myTeam": [{"id": "mate", "team_id": "T1"}],
        "targets": [{"id": "t", "team_id": "T2"}, {"id": "u", "team_id": "T3"}],
    }

    dashboard = payload_parser.parse_dashboard(data)

    assert dashboard.own_team_id == "T1"
    assert dashboard.target_team_ids == frozenset({"T2", "T3"})


def test_roster_page_flattens_team_groups() -> None:
    data = {"teams": [{"players": [{"id": "a"}, {"id": "b"}]}, {"players": [{"id": "c"}]}]}

    page = payload_parser.parse_roster_page(data)

    assert page.team_group_count == 2
    assert [e.participant_id for e in page.entries] == ["a", "b", "c"]
    assert not page.is_last


def test_empty_roster_page_is_last() -> None:
    assert payload_parser.parse_roster_page({"teams": []}).is_last


def test_expiry_prefers_stealth() -> None:
    data = {
        "player": {
            "stealth_expires_at": "2026-05-01T12:00:00+00:00",
            "immunity_expires_at": "2026-05-01T13:00:00+00:00",
        }
    }

    assert payload_parser.parse_expiry(data) == datetime(2026, 5, 1, 12, 0, tzinfo=UTC)
    assert payload_parser.parse_expiry({"player": {}}) is None


def test_timestamp_accepts_epoch_seconds() -> None:
    assert payload_parser.parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=UTC)
    assert payload_parser.parse_timestamp("not a date") is None


def test_when_timestamp_in_milliseconds_then_ignored() -> None:
    """Given an epoch-milliseconds value, when parsing, then it is dropped instead of raising."""
    assert payload_parser.parse_timestamp(1760000000000) is None
    assert payload_parser.parse_timestamp(float("inf")) is None


def test_when_roster_immunity_out_of_range_then_entry_kept_without_expiry() -> None:
    data = {"teams": [{"players": [{"id": "A", "immunity_expires_at": 1760000000000}]}]}

    page = payload_parser.parse_roster_page(data)

    assert [e.participant_id for e in page.entries] == ["A"]
    assert page.entries[0].immunity_expires_at is None


def test_when_detail_expiry_out_of_range_then_none() -> None:
    assert payload_parser.parse_expiry({"player": {"stealth_expires_at": 1760000000000}}) is None
