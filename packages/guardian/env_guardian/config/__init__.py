"""Configuration management for env-guardian."""

from env_guardian.config.ignore import (
    GuardianConfig,
    IgnoreConfig,
    IgnoreManager,
    ScanSettings,
    create_default_config,
)
from env_guardian.config.env_file import append_suggestions, format_env_line

__all__ = [
    "GuardianConfig",
    "IgnoreConfig",
    "IgnoreManager",
    "ScanSettings",
    "create_default_config",
    "append_suggestions",
    "format_env_line",
]
