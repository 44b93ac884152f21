"""In-memory registry of monitored resources."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

from healthmon.errors import ResourceValidationError
from healthmon.models import Resource, ResourceKind

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("type", "name", "handle")


@dataclass(slots=True)
class ResourceRegistry:
    """Stores ``kind -> name -> handle`` entries and the critical resource names.

    Example usage::

        registry = ResourceRegistry()
        accepted, error = registry.register(
            Resource(type="serviceUrl", name="graphql", handle="https://api/health", critical=True)
        )

    Critical names are kept in a flat list that is not scoped by kind, so a
    critical ``cache`` under one kind also marks a ``cache`` under any other
    kind as critical.
    """

    _monitors: dict[ResourceKind, dict[str, str]] = field(default_factory=dict)
    _critical: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def register(self, resource: Resource) -> tuple[bool, ResourceValidationError | None]:
        """Add or overwrite a resource.

        Returns ``(True, None)`` when the resource was stored and
        ``(False, error)`` when validation failed. A rejected resource leaves
        the registry untouched.
        """
        error = _validate(resource)
        if error is not None:
            logger.warning(
                "Rejected resource registration",
                extra={"resource_type": resource.type, "resource_name": resource.name},
            )
            return False, error

        kind = ResourceKind(resource.type)
        with self._lock:
            self._monitors.setdefault(kind, {})[resource.name] = resource.handle
            if resource.critical:
                self._critical.append(resource.name)

        logger.debug(
            "Registered resource",
            extra={
                "resource_type": kind.value,
                "resource_name": resource.name,
                "critical": resource.critical,
            },
        )
        return True, None

    def snapshot(self) -> dict[ResourceKind, dict[str, str]]:
        """Return an independent copy of the registered resources in enumeration order."""
        with self._lock:
            return {kind: dict(names) for kind, names in self._monitors.items()}

    def is_critical(self, name: str) -> bool:
        with self._lock:
            return name in self._critical

    @property
    def critical_names(self) -> list[str]:
        with self._lock:
            return list(self._critical)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(names) for names in self._monitors.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind = ResourceKind.parse(key[0])
        if kind is None:
            return False
        with self._lock:
            return key[1] in self._monitors.get(kind, {})

    def __iter__(self) -> Iterator[tuple[ResourceKind, str, str]]:
        for kind, names in self.snapshot().items():
            for name, handle in names.items():
                yield kind, name, handle


def _validate(resource: Resource) -> ResourceValidationError | None:
    empty = tuple(name for name in _REQUIRED_FIELDS if not getattr(resource, name))
    if empty:
        return ResourceValidationError(
            f"Resource has empty values: {', '.join(empty)}",
            fields=empty,
        )
    if ResourceKind.parse(resource.type) is None:
        return ResourceValidationError(
            f"Unknown resource type: {resource.type}",
            fields=("type",),
        )
    return None
