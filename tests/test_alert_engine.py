"""Tests for proximity and ghost alerts."""

from dataclasses import replace

import pytest

from hunt_tracker.application.services import AlertEngine
from hunt_tracker.application.services.geo import distance_miles
from hunt_tracker.domain.models import (
    GhostAlert,
    LastKnownLocation,
    NotificationSubscription,
    Participant,
    ParticipantState,
    ProximityAlert,
    Snapshot,
    ViewerProfile,
    ViewerSession,
)

LOCATED = ParticipantState.LOCATED
STEALTHED = ParticipantState.STEALTHED


def _session(live_location=(0.0, 0.0), **subscription) -> ViewerSession:
    subscription.setdefault("enabled", True)
    return ViewerSession(
        connection_id="c1",
        profile=ViewerProfile("admin", is_master=True),
        subscription=NotificationSubscription(**subscription),
        live_location=live_location,
    )


def _located_at(lng: float, pid: str = "P") -> Snapshot:
    return Snapshot(
        located=(Participant(pid, LOCATED, first_name="Pat", latitude=0.0, longitude=lng),)
    )


def _stealthed(pid: str = "P") -> Snapshot:
    return Snapshot(stealthed=(Participant(pid, STEALTHED, first_name="Pat"),))


def _with_in_range(session: ViewerSession, in_range: dict) -> ViewerSession:
    ids = in_range.get(session.connection_id, session.subscription.in_range)
    return replace(session, subscription=replace(session.subscription, in_range=ids))


class TestGeo:
    def test_small_longitude_offset_at_equator(self) -> None:
        assert distance_miles(0.0, 0.0, 0.0, 0.005) == pytest.approx(0.345, abs=0.001)

    def test_same_point_is_zero(self) -> None:
        assert distance_miles(48.1, 11.5, 48.1, 11.5) == 0.0


class TestProximity:
    """Tests for proximity entry alerts."""

    def test_when_participant_reenters_range_then_alerts_again(self) -> None:
        """Given a 1 mile radius, when a participant enters, stays, leaves and re-enters, then exactly two alerts fire."""
        engine = AlertEngine()
        session = _session(proximity_radius_miles=1.0)
        fired = []

        for lng in (0.005, 0.005, 0.02, 0.005):
            snapshot = _located_at(lng)
            evaluation = engine.evaluate(snapshot, {"P": LOCATED}, [session], {})
            fired.append(len(evaluation.alerts))
            session = _with_in_range(session, evaluation.in_range)

        assert fired == [1, 0, 0, 1]

    def test_alert_carries_distance(self) -> None:
        engine = AlertEngine()

        evaluation = engine.evaluate(
            _located_at(0.005), {"P": LOCATED}, [_session(proximity_radius_miles=1.0)], {}
        )

        alert = evaluation.alerts[0].alert
        assert isinstance(alert, ProximityAlert)
        assert alert.distance_miles == pytest.approx(0.345, abs=0.001)
        assert alert.to_message()["type"] == "proximityAlert"
        assert evaluation.in_range == {"c1": frozenset({"P"})}

    def test_when_radius_zero_then_no_proximity_alerts(self) -> None:
        engine = AlertEngine()

        evaluation = engine.evaluate(
            _located_at(0.0), {"P": LOCATED}, [_session(proximity_radius_miles=0.0)], {}
        )

        assert evaluation.alerts == []

    def test_when_participant_is_viewer_then_skipped(self) -> None:
        """Given the viewer's own participant id, when it is in range, then no alert fires."""
        engine = AlertEngine()
        session = _session(proximity_radius_miles=1.0, own_participant_id="P")

        evaluation = engine.evaluate(_located_at(0.0), {"P": LOCATED}, [session], {})

        assert evaluation.alerts == []

    def test_when_no_live_location_then_own_last_known_is_origin(self) -> None:
        """Given no live location, when the own participant has a cached location, then it is used as origin."""
        engine = AlertEngine()
        session = _session(
            live_location=None, proximity_radius_miles=1.0, own_participant_id="me"
        )
        last_known = {"me": LastKnownLocation(0.0, 0.0)}

        evaluation = engine.evaluate(_located_at(0.005), {"P": LOCATED}, [session], last_known)

        assert len(evaluation.alerts) == 1

    def test_when_no_origin_then_in_range_untouched(self) -> None:
        engine = AlertEngine()
        session = _session(live_location=None, proximity_radius_miles=1.0)

        evaluation = engine.evaluate(_located_at(0.005), {"P": LOCATED}, [session], {})

        assert evaluation.alerts == []
        assert evaluation.in_range == {}

    def test_when_subscription_disabled_then_nothing(self) -> None:
        engine = AlertEngine()

        evaluation = engine.evaluate(
            _located_at(0.0), {"P": LOCATED}, [_session(enabled=False)], {}
        )

        assert evaluation.alerts == []

    def test_when_session_unauthenticated_then_nothing(self) -> None:
        engine = AlertEngine()
        session = replace(_session(), profile=None)

        evaluation = engine.evaluate(_located_at(0.0), {"P": LOCATED}, [session], {})

        assert evaluation.alerts == []


class TestGhost:
    """Tests for located-to-hidden transition alerts."""

    def test_when_located_participant_vanishes_then_single_ghost_alert(self) -> None:
        """Given a Located participant, when it turns Stealthed and stays so, then one ghost alert fires."""
        engine = AlertEngine()
        session = _session(proximity_radius_miles=0.0)

        first = engine.evaluate(_located_at(1.0), {"P": LOCATED}, [session], {})
        second = engine.evaluate(_stealthed(), {"P": STEALTHED}, [session], {})
        third = engine.evaluate(_stealthed(), {"P": STEALTHED}, [session], {})

        assert first.alerts == []
        assert len(second.alerts) == 1
        assert isinstance(second.alerts[0].alert, GhostAlert)
        assert second.alerts[0].alert.to_message()["type"] == "ghostAlert"
        assert third.alerts == []

    def test_when_located_becomes_not_located_then_ghost_alert(self) -> None:
        engine = AlertEngine()
        session = _session(proximity_radius_miles=0.0)
        not_located = Snapshot(
            not_located=(Participant("P", ParticipantState.NOT_LOCATED, reason="Invalid coordinates"),)
        )

        engine.evaluate(_located_at(1.0), {"P": LOCATED}, [session], {})
        evaluation = engine.evaluate(not_located, {"P": ParticipantState.NOT_LOCATED}, [session], {})

        assert len(evaluation.alerts) == 1

    def test_when_located_becomes_immune_then_no_ghost_alert(self) -> None:
        engine = AlertEngine()
        session = _session(proximity_radius_miles=0.0)
        immune = Snapshot(stealthed=(Participant("P", ParticipantState.IMMUNE),))

        engine.evaluate(_located_at(1.0), {"P": LOCATED}, [session], {})
        evaluation = engine.evaluate(immune, {"P": ParticipantState.IMMUNE}, [session], {})

        assert evaluation.alerts == []

    def test_when_ghost_radius_limited_then_distance_decides(self) -> None:
        """Given a limited ghost radius, when the vanishing point is outside it, then no alert fires."""
        last_known = {"P": LastKnownLocation(0.0, 0.02)}
        outcomes = []
        for radius in (0.1, 2.0):
            engine = AlertEngine()
            session = _session(proximity_radius_miles=0.0, ghost_radius_miles=radius)
            engine.evaluate(_located_at(0.02), {"P": LOCATED}, [session], last_known)
            evaluation = engine.evaluate(_stealthed(), {"P": STEALTHED}, [session], last_known)
            outcomes.append(len(evaluation.alerts))

        assert outcomes == [0, 1]

    def test_when_ghost_is_viewer_then_skipped(self) -> None:
        engine = AlertEngine()
        session = _session(proximity_radius_miles=0.0, own_participant_id="P")

        engine.evaluate(_located_at(1.0), {"P": LOCATED}, [session], {})
        evaluation = engine.evaluate(_stealthed(), {"P": STEALTHED}, [session], {})

        assert evaluation.alerts == []

    def test_previous_states_track_latest_cycle(self) -> None:
        engine = AlertEngine()

        engine.evaluate(_stealthed(), {"P": STEALTHED}, [], {})

        assert engine.previous_states == {"P": STEALTHED}
