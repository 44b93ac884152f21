"""aiohttp endpoint exposing the aggregate health check."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from healthmon.errors import MissingDependencyError
from healthmon.monitor import HealthMonitor, get_health_monitor

AiohttpHandler: TypeAlias = Callable[[Any], Awaitable[Any]]


def _import_aiohttp_web() -> Any:
    try:
        from aiohttp import web
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "The health endpoint requires optional dependency 'aiohttp'. "
            "Install with: pip install 'healthmon[http]'"
        ) from exc
    return web


def create_aiohttp_health_handler(monitor: HealthMonitor | None = None) -> AiohttpHandler:
    """Build an aiohttp handler that runs a check and mirrors its status code.

    Without an explicit ``monitor`` the process-wide instance is used.
    """

    async def handler(request: Any) -> Any:
        del request
        resolved = get_health_monitor() if monitor is None else monitor
        response = await resolved.check()
        web = _import_aiohttp_web()
        return web.json_response(response.to_dict(), status=response.status)

    return handler


def add_health_route(app: Any, monitor: HealthMonitor | None = None, *, path: str = "/health") -> None:
    """Register the health handler on an aiohttp application under ``path``."""
    app.router.add_get(path, create_aiohttp_health_handler(monitor))
