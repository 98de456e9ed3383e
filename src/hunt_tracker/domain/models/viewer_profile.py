"""Viewer permission profile domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ViewerProfile:
    """What a connected viewer is allowed to see."""

    viewer_id: str
    is_master: bool = False
    team_id: str | None = None
    target_team_ids: frozenset[str] = frozenset()
    can_see_all_players: bool = False
    can_see_last_known_location: bool = False


@dataclass(frozen=True)
class ViewerConfiguration:
    """A viewer as declared in configuration.

    When reference login credentials are present the team and targets are
    resolved live against the upstream provider instead of taken from here.
    """

    viewer_id: str
    display_name: str = ""
    is_master: bool = False
    team_id: str | None = None
    target_team_ids: frozenset[str] = frozenset()
    can_see_all_players: bool = False
    can_see_last_known_location: bool = False
    reference_email: str | None = None
    reference_password: str | None = None
    push_recipient: str | None = None

    @property
    def has_reference_login(self) -> bool:
        return bool(self.reference_email and self.reference_password)

    def to_profile(
        self, team_id: str | None = None, target_team_ids: frozenset[str] | None = None
    ) -> ViewerProfile:
        """Build a profile, optionally overriding the team assignment."""
        return ViewerProfile(
            viewer_id=self.viewer_id,
            is_master=self.is_master,
            team_id=team_id if team_id is not None else self.team_id,
            target_team_ids=target_team_ids if target_team_ids is not None else self.target_team_ids,
            can_see_all_players=self.can_see_all_players,
            can_see_last_known_location=self.can_see_last_known_location,
        )
