"""Roster fetch result domain model."""

from dataclasses import dataclass, field

from hunt_tracker.domain.models.location_sample import LocationSample
from hunt_tracker.domain.models.roster_entry import RosterEntry


@dataclass(frozen=True)
class Roster:
    """Deduplicated roster plus the polling account's own team and targets."""

    entries: dict[str, RosterEntry] = field(default_factory=dict)
    own_team_id: str | None = None
    target_team_ids: frozenset[str] = frozenset()
    own_participant_id: str | None = None


@dataclass(frozen=True)
class FetchResult:
    """Everything one fetch pass produced for the classifier."""

    roster: Roster
    samples: list[LocationSample] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardSummary:
    """The polling account's own player, teammates and current targets."""

    current_player: RosterEntry | None = None
    teammates: list[RosterEntry] = field(default_factory=list)
    targets: list[RosterEntry] = field(default_factory=list)

    @property
    def own_team_id(self) -> str | None:
        if self.current_player is not None and self.current_player.team_id:
            return self.current_player.team_id
        for entry in self.teammates:
            if entry.team_id:
                return entry.team_id
        return None

    @property
    def target_team_ids(self) -> frozenset[str]:
        return frozenset(entry.team_id for entry in self.targets if entry.team_id)


@dataclass(frozen=True)
class RosterPage:
    """One page of the paginated roster, grouped by team upstream."""

    team_group_count: int = 0
    entries: list[RosterEntry] = field(default_factory=list)

    @property
    def is_last(self) -> bool:
        return self.team_group_count == 0
