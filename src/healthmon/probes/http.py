"""HTTP probers for service URLs and Elasticsearch clusters, backed by aiohttp."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from healthmon.errors import MissingDependencyError
from healthmon.models import STATUS_OK, ServiceResponse
from healthmon.probes.base import down, elapsed_ms

logger = logging.getLogger(__name__)

_HEALTHY_CLUSTER_STATES = frozenset({"green", "yellow"})


def _import_aiohttp() -> Any:
    try:
        import aiohttp
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "HTTP probers require optional dependency 'aiohttp'. "
            "Install with: pip install 'healthmon[http]'"
        ) from exc
    return aiohttp


def _client_session(aiohttp: Any, timeout_seconds: float) -> Any:
    return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout_seconds))


def _http_status(status_code: int) -> str:
    return STATUS_OK if status_code < 400 else f"http_{status_code}"


def _cluster_status(payload: Any) -> str:
    if not isinstance(payload, dict):
        return "unknown"
    return str(payload.get("status") or "unknown").lower()


@dataclass(slots=True, frozen=True)
class ServiceUrlProber:
    """Issues a GET against the handle URL; any non-error status is healthy."""

    timeout_seconds: float = 5.0

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        aiohttp = _import_aiohttp()
        started = perf_counter()
        try:
            async with _client_session(aiohttp, self.timeout_seconds) as session:
                async with session.get(handle) as response:
                    status_code = int(response.status)
        except Exception as exc:
            logger.warning(
                "Service URL probe failed",
                extra={"resource_name": name, "error_type": type(exc).__name__},
            )
            return down(name, started, exc)

        return ServiceResponse(
            resource=name,
            status=_http_status(status_code),
            latency_ms=elapsed_ms(started),
            message=f"HTTP {status_code}",
        )


@dataclass(slots=True, frozen=True)
class ElasticsearchProber:
    """Reads ``/_cluster/health``; green and yellow clusters are healthy."""

    timeout_seconds: float = 5.0

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        aiohttp = _import_aiohttp()
        url = f"{handle.rstrip('/')}/_cluster/health"
        started = perf_counter()
        try:
            async with _client_session(aiohttp, self.timeout_seconds) as session:
                async with session.get(url) as response:
                    status_code = int(response.status)
                    cluster_status = (
                        _cluster_status(await response.json()) if status_code < 400 else ""
                    )
        except Exception as exc:
            logger.warning(
                "Elasticsearch probe failed",
                extra={"resource_name": name, "error_type": type(exc).__name__},
            )
            return down(name, started, exc)

        if status_code >= 400:
            return ServiceResponse(
                resource=name,
                status=_http_status(status_code),
                latency_ms=elapsed_ms(started),
                message=f"HTTP {status_code}",
            )

        return ServiceResponse(
            resource=name,
            status=STATUS_OK if cluster_status in _HEALTHY_CLUSTER_STATES else cluster_status,
            latency_ms=elapsed_ms(started),
            message=f"cluster {cluster_status}",
        )
