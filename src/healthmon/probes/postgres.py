"""PostgreSQL prober backed by asyncpg."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from healthmon.errors import MissingDependencyError
from healthmon.models import STATUS_OK, ServiceResponse
from healthmon.probes.base import down, elapsed_ms

logger = logging.getLogger(__name__)


def _import_asyncpg() -> Any:
    try:
        import asyncpg
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "PostgreSQL prober requires optional dependency 'asyncpg'. "
            "Install with: pip install 'healthmon[postgres]'"
        ) from exc
    return asyncpg


@dataclass(slots=True, frozen=True)
class PostgresProber:
    """Opens a connection to the handle DSN and runs ``SELECT 1``."""

    timeout_seconds: float = 5.0

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        asyncpg = _import_asyncpg()
        started = perf_counter()
        try:
            connection = await asyncpg.connect(dsn=handle, timeout=self.timeout_seconds)
            try:
                value = await connection.fetchval("SELECT 1", timeout=self.timeout_seconds)
            finally:
                await connection.close()
        except Exception as exc:
            logger.warning(
                "PostgreSQL probe failed",
                extra={"resource_name": name, "error_type": type(exc).__name__},
            )
            return down(name, started, exc)

        return ServiceResponse(
            resource=name,
            status=STATUS_OK if value == 1 else "unexpected_result",
            latency_ms=elapsed_ms(started),
        )
