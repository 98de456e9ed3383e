"""Transition-triggered alert engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from hunt_tracker.application.services.geo import distance_miles
from hunt_tracker.domain.models.alerts import GhostAlert, PendingAlert, ProximityAlert
from hunt_tracker.domain.models.last_known_location import LastKnownLocation
from hunt_tracker.domain.models.participant import Participant
from hunt_tracker.domain.models.participant_state import ParticipantState
from hunt_tracker.domain.models.snapshot import Snapshot
from hunt_tracker.domain.models.viewer_session import ViewerSession

logger = logging.getLogger(__name__)

GHOST_STATES = frozenset({ParticipantState.STEALTHED, ParticipantState.NOT_LOCATED})


@dataclass(frozen=True)
class AlertEvaluation:
    """Alerts to deliver plus the new in-range set for each evaluated connection."""

    alerts: list[PendingAlert] = field(default_factory=list)
    in_range: dict[str, frozenset[str]] = field(default_factory=dict)


class AlertEngine:
    """Detects proximity entries and ghost transitions once per cycle.

    Ghost detection compares the previous cycle's per-participant states
    with the current ones and is process-wide. Proximity detection is per
    viewer and relies on the in-range set each session carries.
    """

    def __init__(self) -> None:
        self._previous_states: dict[str, ParticipantState] = {}

    @property
    def previous_states(self) -> dict[str, ParticipantState]:
        return dict(self._previous_states)

    def evaluate(
        self,
        snapshot: Snapshot,
        states: Mapping[str, ParticipantState],
        sessions: Iterable[ViewerSession],
        last_known: Mapping[str, LastKnownLocation],
    ) -> AlertEvaluation:
        """Evaluate both alert kinds against the unfiltered snapshot."""
        ghosts = self._detect_ghosts(snapshot, states)
        self._previous_states = dict(states)

        evaluation = AlertEvaluation()
        for session in sessions:
            if not session.is_authenticated or not session.subscription.enabled:
                continue
            origin = self._viewer_location(session, last_known)
            if origin is not None:
                evaluation.in_range[session.connection_id] = self._evaluate_proximity(
                    session, origin, snapshot, evaluation.alerts
                )
            self._evaluate_ghosts(session, origin, ghosts, last_known, evaluation.alerts)

        if evaluation.alerts:
            logger.info(f"Alert engine produced {len(evaluation.alerts)} alert(s)")
        return evaluation

    def _detect_ghosts(
        self, snapshot: Snapshot, states: Mapping[str, ParticipantState]
    ) -> list[Participant]:
        entries = {p.participant_id: p for p in snapshot.stealthed + snapshot.not_located}
        ghosts = []
        for participant_id, state in states.items():
            previous = self._previous_states.get(participant_id)
            if previous is ParticipantState.LOCATED and state in GHOST_STATES:
                participant = entries.get(participant_id)
                if participant is not None:
                    logger.info(f"Participant {participant_id} went ghost ({state.value})")
                    ghosts.append(participant)
        return ghosts

    @staticmethod
    def _viewer_location(
        session: ViewerSession, last_known: Mapping[str, LastKnownLocation]
    ) -> tuple[float, float] | None:
        if session.live_location is not None:
            return session.live_location
        own_id = session.subscription.own_participant_id
        if own_id and own_id in last_known:
            location = last_known[own_id]
            return location.latitude, location.longitude
        return None

    @staticmethod
    def _evaluate_proximity(
        session: ViewerSession,
        origin: tuple[float, float],
        snapshot: Snapshot,
        alerts: list[PendingAlert],
    ) -> frozenset[str]:
        subscription = session.subscription
        if subscription.proximity_radius_miles <= 0:
            return frozenset()

        now_in_range: set[str] = set()
        for participant in snapshot.located:
            if participant.participant_id == subscription.own_participant_id:
                continue
            if not participant.has_coordinates:
                continue
            distance = distance_miles(
                origin[0], origin[1], participant.latitude, participant.longitude  # type: ignore[arg-type]
            )
            if distance > subscription.proximity_radius_miles:
                continue
            now_in_range.add(participant.participant_id)
            if participant.participant_id not in subscription.in_range:
                alerts.append(
                    PendingAlert(session.connection_id, ProximityAlert(participant, distance))
                )
        return frozenset(now_in_range)

    @staticmethod
    def _evaluate_ghosts(
        session: ViewerSession,
        origin: tuple[float, float] | None,
        ghosts: list[Participant],
        last_known: Mapping[str, LastKnownLocation],
        alerts: list[PendingAlert],
    ) -> None:
        subscription = session.subscription
        for participant in ghosts:
            if participant.participant_id == subscription.own_participant_id:
                continue
            vanished_at = last_known.get(participant.participant_id)
            distance = None
            if origin is not None and vanished_at is not None:
                distance = distance_miles(
                    origin[0], origin[1], vanished_at.latitude, vanished_at.longitude
                )
            if not subscription.ghost_radius_unlimited:
                if distance is None or distance > subscription.ghost_radius_miles:
                    continue
            alerts.append(PendingAlert(session.connection_id, GhostAlert(participant, distance)))
