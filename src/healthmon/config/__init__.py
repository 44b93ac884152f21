"""Configuration loading and validation module."""

from healthmon.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    PlaceholderResolutionError,
)
from healthmon.config.loader import deep_merge, load_config, merge_resources
from healthmon.config.models import (
    AppSettings,
    LoggingSettings,
    MonitorSettings,
    ResourceSettings,
    ServiceSettings,
)

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    "LoggingSettings",
    "MonitorSettings",
    "PlaceholderResolutionError",
    "ResourceSettings",
    "ServiceSettings",
    "deep_merge",
    "load_config",
    "merge_resources",
]
