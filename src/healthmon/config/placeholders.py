"""Environment variable placeholder resolution."""

from __future__ import annotations

import os
import re
from typing import Any

from healthmon.config.errors import PlaceholderResolutionError

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_placeholders(
    data: dict[str, Any],
    *,
    strict: bool = True,
    _path: str = "",
) -> dict[str, Any]:
    """Resolve ${ENV_VAR} placeholders in configuration data.

    Resource handles usually embed credentials (DSNs, passwords), so they
    are expected to arrive through placeholders rather than literal values.

    Raises:
        PlaceholderResolutionError: If strict=True and a placeholder cannot be resolved.
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        current_path = f"{_path}.{key}" if _path else key
        result[key] = _resolve_any(value, current_path, strict)

    return result


def _resolve_any(value: Any, path: str, strict: bool) -> Any:
    if isinstance(value, dict):
        return resolve_placeholders(value, strict=strict, _path=path)
    if isinstance(value, list):
        return [_resolve_any(item, f"{path}[{i}]", strict) for i, item in enumerate(value)]
    return _resolve_value(value, path, strict)


def _resolve_value(value: Any, path: str, strict: bool) -> Any:
    """Resolve placeholders in a single value."""
    if not isinstance(value, str):
        return value

    def replace_match(match: re.Match[str]) -> str:
        env_var = match.group(1)
        env_value = os.environ.get(env_var)

        if env_value is None:
            if strict:
                raise PlaceholderResolutionError(f"${{{env_var}}}", path)
            return match.group(0)

        return env_value

    return PLACEHOLDER_PATTERN.sub(replace_match, value)
