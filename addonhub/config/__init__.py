"""Configuration system for AddonHub."""

from addonhub.config.loader import ConfigLoadError, YAMLConfigLoader, load_config
from addonhub.config.models import (
    AddonHubConfig,
    ArchiveConfig,
    DatabaseConfig,
    DependencyConfig,
    IndexConfig,
)

__all__ = [
    "AddonHubConfig",
    "ArchiveConfig",
    "ConfigLoadError",
    "DatabaseConfig",
    "DependencyConfig",
    "IndexConfig",
    "YAMLConfigLoader",
    "load_config",
]
