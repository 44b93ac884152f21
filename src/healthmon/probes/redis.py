"""Redis prober backed by the redis-py asyncio client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from healthmon.errors import MissingDependencyError
from healthmon.models import STATUS_OK, ServiceResponse
from healthmon.probes.base import down, elapsed_ms

logger = logging.getLogger(__name__)


def _import_redis_asyncio() -> Any:
    try:
        import redis.asyncio as redis_asyncio
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "Redis prober requires optional dependency 'redis'. "
            "Install with: pip install 'healthmon[redis]'"
        ) from exc
    return redis_asyncio


async def _close(client: Any) -> None:
    close = getattr(client, "aclose", None)
    if close is None:
        close = getattr(client, "close", None)
    if callable(close):
        maybe_awaitable = close()
        if hasattr(maybe_awaitable, "__await__"):
            await maybe_awaitable


@dataclass(slots=True, frozen=True)
class RedisProber:
    """Connects to the handle URL and sends a PING."""

    timeout_seconds: float = 5.0

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        redis_asyncio = _import_redis_asyncio()
        started = perf_counter()
        client: Any = None
        try:
            client = redis_asyncio.from_url(
                handle,
                socket_timeout=self.timeout_seconds,
                socket_connect_timeout=self.timeout_seconds,
            )
            pong = bool(await client.ping())
        except Exception as exc:
            logger.warning(
                "Redis probe failed",
                extra={"resource_name": name, "error_type": type(exc).__name__},
            )
            return down(name, started, exc)
        finally:
            if client is not None:
                await _close(client)

        return ServiceResponse(
            resource=name,
            status=STATUS_OK if pong else "no_pong",
            latency_ms=elapsed_ms(started),
        )
