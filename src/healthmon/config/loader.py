"""Loads ``appsettings`` files into validated ``AppSettings``.

``appsettings.json`` is read first and ``appsettings.<env>.json`` is layered on
top of it. Mappings merge recursively. The ``resources`` list merges entry by
entry on ``(type, name)``: an overlay entry updates the matching base entry,
an unmatched entry is appended, and an entry carrying ``"disabled": true``
removes the resource. Placeholders are resolved after merging, so overlays
can introduce them and disabled resources never need their variables set.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from healthmon.config.errors import ConfigFileNotFoundError, ConfigValidationError
from healthmon.config.models import AppSettings
from healthmon.config.placeholders import resolve_placeholders

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("config")
BASE_FILE_NAME = "appsettings.json"
ENV_VAR_NAME = "HEALTHMON_ENV"
DEFAULT_ENV = "development"
RESOURCES_KEY = "resources"
DISABLED_KEY = "disabled"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` layered on top; neither input is modified."""
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif key == RESOURCES_KEY and isinstance(current, list) and isinstance(value, list):
            result[key] = merge_resources(current, value)
        else:
            result[key] = value
    return result


def merge_resources(base: list[Any], override: list[Any]) -> list[Any]:
    """Merge overlay resource entries into ``base`` keyed on ``(type, name)``.

    Base order is kept; new resources are appended in overlay order.
    Disabled entries are kept here and dropped by ``drop_disabled``.
    """
    merged = list(base)
    positions = {
        key: index
        for index, entry in enumerate(merged)
        if (key := _resource_key(entry)) is not None
    }
    for entry in override:
        key = _resource_key(entry)
        if key is not None and key in positions:
            index = positions[key]
            merged[index] = deep_merge(merged[index], entry)
            continue
        if key is not None:
            positions[key] = len(merged)
        merged.append(entry)
    return merged


def drop_disabled(resources: list[Any]) -> list[Any]:
    """Remove entries flagged ``"disabled": true`` and strip the flag from the rest."""
    kept: list[Any] = []
    for entry in resources:
        if not isinstance(entry, dict):
            kept.append(entry)
            continue
        if entry.get(DISABLED_KEY) is True:
            logger.debug(
                "Resource disabled by configuration",
                extra={"resource_type": entry.get("type"), "resource_name": entry.get("name")},
            )
            continue
        kept.append({key: value for key, value in entry.items() if key != DISABLED_KEY})
    return kept


def _resource_key(entry: Any) -> tuple[str, str] | None:
    if not isinstance(entry, dict) or "type" not in entry or "name" not in entry:
        return None
    return str(entry["type"]), str(entry["name"])


def load_json_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigFileNotFoundError(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigValidationError(
            [{"loc": f"{path.name}:{exc.lineno}:{exc.colno}", "msg": exc.msg}]
        ) from exc
    if not isinstance(data, dict):
        raise ConfigValidationError([{"loc": path.name, "msg": "expected a JSON object"}])
    return data


def load_config(
    *,
    config_dir: Path | str | None = None,
    env: str | None = None,
    strict_placeholders: bool = True,
) -> AppSettings:
    """Load, merge and validate ``appsettings`` for ``env``.

    ``config_dir`` defaults to ``./config`` and ``env`` to ``$HEALTHMON_ENV``
    or ``development``. A missing overlay file is not an error.

    Raises:
        ConfigFileNotFoundError: ``appsettings.json`` does not exist.
        ConfigValidationError: a file is not a JSON object or the merged
            settings fail validation.
        PlaceholderResolutionError: a ``${VAR}`` is unset and
            ``strict_placeholders`` is true.
    """
    directory = DEFAULT_CONFIG_DIR if config_dir is None else Path(config_dir)
    env = env or os.environ.get(ENV_VAR_NAME, DEFAULT_ENV)

    config = load_json_file(directory / BASE_FILE_NAME)
    overlay_path = directory / f"appsettings.{env}.json"
    if overlay_path.exists():
        config = deep_merge(config, load_json_file(overlay_path))

    if isinstance(config.get(RESOURCES_KEY), list):
        config[RESOURCES_KEY] = drop_disabled(config[RESOURCES_KEY])
    config = resolve_placeholders(config, strict=strict_placeholders)

    try:
        return AppSettings.model_validate(config)
    except ValidationError as exc:
        errors = [
            {"loc": _error_location(err["loc"], config), "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise ConfigValidationError(errors) from exc


def _error_location(loc: tuple[Any, ...], config: dict[str, Any]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)

    if len(loc) >= 2 and loc[0] == RESOURCES_KEY and isinstance(loc[1], int):
        entries = config.get(RESOURCES_KEY) or []
        entry = entries[loc[1]] if loc[1] < len(entries) else None
        if isinstance(entry, dict) and entry.get("name"):
            path += f" ({entry['name']})"
    return path
