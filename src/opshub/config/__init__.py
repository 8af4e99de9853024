"""OpsHub configuration system."""

from opshub.config.loader import find_config_file, load_config, resolve_snapshot_path
from opshub.config.models import DisplayConfig, HubIdentity, OpsHubConfig

__all__ = [
    "DisplayConfig",
    "HubIdentity",
    "OpsHubConfig",
    "load_config",
    "find_config_file",
    "resolve_snapshot_path",
]
