"""Configuration adapters."""

from hunt_tracker.adapters.config.app_config import AppConfig
from hunt_tracker.adapters.config.viewer_configuration_loader import ViewerConfigurationLoader

__all__ = ["AppConfig", "ViewerConfigurationLoader"]
