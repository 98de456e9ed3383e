"""State classifier merging roster, telemetry and the last-known-location cache."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime

from hunt_tracker.application.services.visibility_filter import display_role
from hunt_tracker.domain.models.last_known_location import LastKnownLocation
from hunt_tracker.domain.models.location_sample import LocationSample
from hunt_tracker.domain.models.participant import Participant
from hunt_tracker.domain.models.participant_state import ParticipantState
from hunt_tracker.domain.models.roster import Roster
from hunt_tracker.domain.models.roster_entry import RosterEntry
from hunt_tracker.domain.models.snapshot import ClassificationResult, Snapshot

logger = logging.getLogger(__name__)

NOT_LOCATED_REASON = "Invalid coordinates"


def _base_participant(entry: RosterEntry, sample: LocationSample, roster: Roster) -> Participant:
    return Participant(
        participant_id=entry.participant_id,
        state=ParticipantState.NOT_LOCATED,
        first_name=entry.first_name,
        last_name=entry.last_name,
        team_id=entry.team_id,
        team_name=entry.team_name,
        team_color=entry.team_color,
        avatar_url=entry.avatar_url,
        role=display_role(entry.team_id, roster.own_team_id, roster.target_team_ids),
        status=sample.status,
        speed=sample.speed,
        battery_level=sample.battery_level,
        is_charging=sample.is_charging,
        accuracy=sample.accuracy,
        heading=sample.heading,
        updated_at=sample.updated_at,
        in_safe_zone=entry.in_safe_zone or sample.in_safe_zone,
    )


def _at(
    participant: Participant, state: ParticipantState, location: LastKnownLocation | None
) -> Participant:
    if location is None:
        return replace(participant, state=state, latitude=None, longitude=None)
    return replace(
        participant, state=state, latitude=location.latitude, longitude=location.longitude
    )


def classify(
    roster: Roster,
    samples: Iterable[LocationSample],
    last_known: Mapping[str, LastKnownLocation],
    now: datetime,
) -> ClassificationResult:
    """Sort every sampled roster participant into the snapshot buckets.

    Priority is Immune, then Stealthed, then SafeZone, then NotLocated. A
    participant with a live fix is additionally placed in the located bucket
    whatever else applies, so a live participant inside a safe zone appears
    in both the located and the safe-zone buckets.

    The returned ``states`` map holds one state per participant for
    transition tracking: Immune wins, then Located for anyone with a live
    fix, then the bucket the participant was sorted into.
    """
    located: list[Participant] = []
    stealthed: list[Participant] = []
    safe_zone: list[Participant] = []
    not_located: list[Participant] = []
    states: dict[str, ParticipantState] = {}
    updates: dict[str, LastKnownLocation] = {}

    for sample in samples:
        participant_id = sample.participant_id
        entry = roster.entries.get(participant_id)
        if entry is None:
            logger.debug(f"Dropping sample for {participant_id}: not on roster")
            continue

        cached = last_known.get(participant_id)
        if sample.has_coordinates:
            cached = LastKnownLocation(
                latitude=sample.latitude,  # type: ignore[arg-type]
                longitude=sample.longitude,  # type: ignore[arg-type]
                timestamp=sample.updated_at,
            )
            updates[participant_id] = cached

        participant = _base_participant(entry, sample, roster)

        if entry.is_immune(now):
            state = ParticipantState.IMMUNE
            stealthed.append(
                replace(_at(participant, state, cached), expires_at=entry.immunity_expires_at)
            )
        elif not sample.has_coordinates and sample.status is None and not participant.in_safe_zone:
            state = ParticipantState.STEALTHED
            stealthed.append(_at(participant, state, cached))
        elif participant.in_safe_zone:
            state = ParticipantState.SAFE_ZONE
            safe_zone.append(_at(participant, state, cached))
        elif not sample.has_coordinates:
            state = ParticipantState.NOT_LOCATED
            not_located.append(
                replace(participant, state=state, reason=NOT_LOCATED_REASON)
            )
        else:
            state = ParticipantState.LOCATED

        if sample.has_coordinates:
            located.append(
                replace(
                    participant,
                    state=ParticipantState.LOCATED,
                    latitude=sample.latitude,
                    longitude=sample.longitude,
                )
            )
            if state is not ParticipantState.IMMUNE:
                state = ParticipantState.LOCATED

        states[participant_id] = state

    snapshot = Snapshot(
        located=tuple(located),
        stealthed=tuple(stealthed),
        safe_zone=tuple(safe_zone),
        not_located=tuple(not_located),
    )
    logger.debug(
        f"Classified {len(states)} participants: located={len(located)}, "
        f"stealthed={len(stealthed)}, safe_zone={len(safe_zone)}, "
        f"not_located={len(not_located)}"
    )
    return ClassificationResult(snapshot=snapshot, states=states, location_updates=updates)
