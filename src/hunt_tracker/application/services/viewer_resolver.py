"""Viewer profile resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hunt_tracker.domain.errors import ResolutionError, UpstreamError

if TYPE_CHECKING:
    from hunt_tracker.domain.models.viewer_profile import ViewerConfiguration, ViewerProfile
    from hunt_tracker.domain.ports import LocationProvider

logger = logging.getLogger(__name__)


class ViewerResolver:
    """Turns a viewer id into a permission profile.

    Viewers configured with a reference login have their team and targets
    discovered live from the upstream dashboard of that account.
    """

    def __init__(
        self, provider: LocationProvider, viewers: list[ViewerConfiguration]
    ) -> None:
        self.provider = provider
        self.viewers = {viewer.viewer_id: viewer for viewer in viewers}

    def configuration(self, viewer_id: str) -> ViewerConfiguration:
        viewer = self.viewers.get(viewer_id)
        if viewer is None:
            raise ResolutionError(f"Unknown viewer '{viewer_id}'")
        return viewer

    async def resolve(self, viewer_id: str) -> ViewerProfile:
        viewer = self.configuration(viewer_id)
        if not viewer.has_reference_login:
            return viewer.to_profile()

        try:
            access_token = await self.provider.authenticate(
                viewer.reference_email or "", viewer.reference_password or ""
            )
            dashboard = await self.provider.fetch_dashboard(access_token)
        except UpstreamError as e:
            raise ResolutionError(f"Could not resolve team for viewer '{viewer_id}': {e}") from e

        team_id = dashboard.own_team_id
        if team_id is None:
            raise ResolutionError(f"Reference login for viewer '{viewer_id}' has no team")

        logger.info(
            f"Resolved viewer {viewer_id}: team={team_id}, "
            f"targets={sorted(dashboard.target_team_ids)}"
        )
        return viewer.to_profile(team_id=team_id, target_team_ids=dashboard.target_team_ids)
