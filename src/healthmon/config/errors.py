"""Errors raised while loading ``appsettings`` files."""

from __future__ import annotations

from pathlib import Path

from healthmon.errors import HealthmonError


class ConfigError(HealthmonError):
    """Base class for configuration problems; the CLI exits with code 2 on these."""


class ConfigFileNotFoundError(ConfigError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Configuration file not found: {self.path}")


class ConfigValidationError(ConfigError):
    """Merged settings could not be parsed or validated.

    ``errors`` holds one ``{"loc": ..., "msg": ...}`` entry per problem. Locations
    inside the resource list read ``resources[<index>].<field> (<name>)``.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        detail = "\n".join(
            f"  - {err.get('loc', '?')}: {err.get('msg', 'invalid value')}" for err in errors
        )
        super().__init__(f"Invalid health monitor configuration:\n{detail}")


class PlaceholderResolutionError(ConfigError):
    def __init__(self, placeholder: str, key_path: str) -> None:
        self.placeholder = placeholder
        self.key_path = key_path
        super().__init__(
            f"Environment variable for '{placeholder}' at '{key_path}' is not set"
        )
