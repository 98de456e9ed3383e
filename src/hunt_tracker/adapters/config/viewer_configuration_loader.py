"""Viewer configuration loader."""

import logging
from typing import Any

from hunt_tracker.adapters.config.app_config import AppConfig
from hunt_tracker.domain.models.viewer_profile import ViewerConfiguration

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class ViewerConfigurationLoader:
    """Loads viewer configurations from app config."""

    @staticmethod
    def load(config: AppConfig) -> list[ViewerConfiguration]:
        """Load viewer configurations from app config."""
        viewers_data = config.get_viewers_config()
        viewers: list[ViewerConfiguration] = []

        for viewer_data in viewers_data:
            viewer_id = _optional_str(viewer_data.get("id"))
            if not viewer_id:
                logger.warning("Skipping viewer without an 'id'")
                continue

            target_team_ids = viewer_data.get("target_team_ids", [])
            if not isinstance(target_team_ids, list):
                target_team_ids = []
            # Ensure all items are strings
            target_team_ids = [str(t) for t in target_team_ids if isinstance(t, (str, int))]

            viewers.append(
                ViewerConfiguration(
                    viewer_id=viewer_id,
                    display_name=str(viewer_data.get("name", viewer_id)),
                    is_master=bool(viewer_data.get("master", False)),
                    team_id=_optional_str(viewer_data.get("team_id")),
                    target_team_ids=frozenset(target_team_ids),
                    can_see_all_players=bool(viewer_data.get("can_see_all_players", False)),
                    can_see_last_known_location=bool(
                        viewer_data.get("can_see_last_known_location", False)
                    ),
                    reference_email=_optional_str(viewer_data.get("reference_email")),
                    reference_password=_optional_str(viewer_data.get("reference_password")),
                    push_recipient=_optional_str(viewer_data.get("push_recipient")),
                )
            )

        return viewers
