"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging, get_log_level
from .snapshot import SnapshotConfig, get_snapshot_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "SnapshotConfig",
    "configure_logging",
    "get_log_level",
    "get_snapshot_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
