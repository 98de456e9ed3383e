"""Per-viewer visibility filter."""

from __future__ import annotations

from dataclasses import replace

from hunt_tracker.domain.models.participant import Participant
from hunt_tracker.domain.models.participant_state import DisplayRole, ParticipantState
from hunt_tracker.domain.models.snapshot import Snapshot
from hunt_tracker.domain.models.viewer_profile import ViewerProfile


def display_role(
    team_id: str | None, own_team_id: str | None, target_team_ids: frozenset[str]
) -> DisplayRole:
    """Relationship of a team to a viewing team."""
    if team_id is not None and team_id == own_team_id:
        return DisplayRole.TEAMMATE
    if team_id is not None and team_id in target_team_ids:
        return DisplayRole.TARGET
    return DisplayRole.NEUTRAL


def is_visible(participant: Participant, profile: ViewerProfile) -> bool:
    """Whether the team filter lets ``profile`` see ``participant``."""
    if profile.is_master or profile.can_see_all_players:
        return True
    team_id = participant.team_id
    if team_id is None:
        return False
    return team_id == profile.team_id or team_id in profile.target_team_ids


def view_participant(
    participant: Participant, profile: ViewerProfile, live: bool | None = None
) -> Participant:
    """Relabel ``participant`` for ``profile`` and strip cached coordinates it may not see.

    ``live`` tells whether the coordinates are a live fix; by default only
    Located entries are treated as live.
    """
    if profile.is_master:
        return participant
    if live is None:
        live = participant.state is ParticipantState.LOCATED

    role = display_role(participant.team_id, profile.team_id, profile.target_team_ids)
    if role is not participant.role:
        participant = replace(participant, role=role)
    if not live and not profile.can_see_last_known_location and participant.has_coordinates:
        participant = replace(participant, latitude=None, longitude=None)
    return participant


def filter_snapshot(snapshot: Snapshot, profile: ViewerProfile) -> Snapshot:
    """Return the part of ``snapshot`` that ``profile`` is allowed to see.

    Masters get the snapshot unchanged. Everyone else gets roles relabelled
    relative to their own team, is limited to their own and target teams
    unless ``can_see_all_players`` is set, and loses cached coordinates on
    safe-zone and stealthed entries unless ``can_see_last_known_location``
    is set.
    """
    if profile.is_master:
        return snapshot

    def keep(bucket: tuple[Participant, ...], live: bool) -> tuple[Participant, ...]:
        return tuple(
            view_participant(p, profile, live=live) for p in bucket if is_visible(p, profile)
        )

    return Snapshot(
        located=keep(snapshot.located, live=True),
        stealthed=keep(snapshot.stealthed, live=False),
        safe_zone=keep(snapshot.safe_zone, live=False),
        not_located=keep(snapshot.not_located, live=True),
    )
