"""Concurrent health check aggregation over the resource registry."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping
from time import perf_counter

from healthmon.config.models import MonitorSettings
from healthmon.errors import CheckTimeoutError, ResourceValidationError, UnknownResourceKindError
from healthmon.models import (
    MESSAGE_CRITICAL_FAILURE,
    MESSAGE_OK,
    Resource,
    ResourceKind,
    ServerResponse,
    ServiceResponse,
    generic_error,
    nothing_to_check,
    timed_out,
)
from healthmon.observability.logging import check_scope
from healthmon.observability.metrics import MetricsRecorder, get_metrics_recorder
from healthmon.probes import Prober, build_probers
from healthmon.registry import ResourceRegistry

logger = logging.getLogger(__name__)


class HealthMonitor:
    """Registers resources and aggregates their health on demand.

    Example usage::

        monitor = HealthMonitor(settings=MonitorSettings(timeout_seconds=2.0))
        monitor.register(Resource(type="redisClient", name="cache", handle="redis://cache:6379"))
        response = await monitor.check()

    Each ``check()`` call dispatches one probe task per registered resource,
    then collects the results in dispatch order under a single shared
    deadline. Tasks that were not collected when the deadline expires are
    cancelled before ``check()`` returns.
    """

    def __init__(
        self,
        registry: ResourceRegistry | None = None,
        *,
        probers: Mapping[ResourceKind, Prober] | None = None,
        settings: MonitorSettings | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        if settings is None:
            settings = MonitorSettings()
        self.registry = ResourceRegistry() if registry is None else registry
        self.settings = settings
        self.probers: dict[ResourceKind, Prober] = (
            build_probers(settings) if probers is None else dict(probers)
        )
        self._metrics = metrics

    def register(self, resource: Resource) -> tuple[bool, ResourceValidationError | None]:
        """Register a resource; see ``ResourceRegistry.register``."""
        return self.registry.register(resource)

    async def check(self) -> ServerResponse:
        """Probe every registered resource and derive the aggregate status."""
        started = perf_counter()
        with check_scope():
            response = await self._check()
            duration = perf_counter() - started
            logger.info(
                "Health check finished",
                extra={
                    "status_code": response.status,
                    "outcome": response.message,
                    "failed": list(response.failed),
                    "duration_ms": round(duration * 1000, 3),
                },
            )
        self._metrics_recorder().observe_check(
            status_code=response.status,
            duration_seconds=duration,
        )
        return response

    async def _check(self) -> ServerResponse:
        snapshot = self.registry.snapshot()
        if not any(snapshot.values()):
            logger.info("Nothing to check")
            return nothing_to_check()

        try:
            plan = [(kind, self._prober_for(kind), names) for kind, names in snapshot.items()]
        except UnknownResourceKindError:
            logger.exception("Cannot dispatch health check")
            return generic_error()

        tasks: list[asyncio.Task[ServiceResponse]] = []
        for kind, prober, names in plan:
            for name, handle in names.items():
                tasks.append(
                    asyncio.create_task(
                        self._run_probe(kind, prober, name, handle),
                        name=f"healthmon:{kind.value}:{name}",
                    )
                )
        logger.debug("Dispatched probes", extra={"probes": len(tasks)})

        try:
            results = await self._collect(tasks)
        except CheckTimeoutError:
            logger.warning(
                "Timed out while checking resources",
                extra={
                    "timeout_seconds": self.settings.timeout_seconds,
                    "pending": sum(1 for task in tasks if not task.done()),
                },
            )
            return timed_out()
        except Exception:
            logger.exception("Probe failed unexpectedly")
            return generic_error()
        finally:
            await _cancel_and_reap(tasks)

        return self._derive_status(results)

    async def _collect(self, tasks: list[asyncio.Task[ServiceResponse]]) -> list[ServiceResponse]:
        # Awaited in dispatch order; the deadline spans the whole loop, not each task.
        results: list[ServiceResponse] = []
        deadline = asyncio.timeout(self.settings.timeout_seconds)
        try:
            async with deadline:
                for task in tasks:
                    results.append(await task)
        except TimeoutError as exc:
            if deadline.expired():
                raise CheckTimeoutError(self.settings.timeout_seconds) from exc
            raise
        return results

    async def _run_probe(
        self,
        kind: ResourceKind,
        prober: Prober,
        name: str,
        handle: str,
    ) -> ServiceResponse:
        started = perf_counter()
        try:
            response = await prober.probe(name, handle)
        except Exception:
            self._metrics_recorder().observe_probe(
                kind=kind.value,
                status="error",
                duration_seconds=perf_counter() - started,
            )
            raise

        if not isinstance(response, ServiceResponse):
            raise TypeError(
                f"prober for '{kind.value}' returned {type(response).__name__}, "
                "expected ServiceResponse"
            )
        self._metrics_recorder().observe_probe(
            kind=kind.value,
            status=response.status,
            duration_seconds=perf_counter() - started,
        )
        return response

    def _derive_status(self, results: list[ServiceResponse]) -> ServerResponse:
        response = ServerResponse(status=200, message=MESSAGE_OK, service_responses=results)
        for result in results:
            if result.ok:
                continue
            response.failed.append(result.resource)
            if self.registry.is_critical(result.resource):
                response.status = 503
                response.message = MESSAGE_CRITICAL_FAILURE
        return response

    def _prober_for(self, kind: ResourceKind) -> Prober:
        prober = self.probers.get(kind)
        if prober is None:
            raise UnknownResourceKindError(kind.value)
        return prober

    def _metrics_recorder(self) -> MetricsRecorder:
        return get_metrics_recorder() if self._metrics is None else self._metrics


async def _cancel_and_reap(tasks: list[asyncio.Task[ServiceResponse]]) -> None:
    for task in tasks:
        if not task.done():
            task.cancel()
    if tasks:
        await asyncio.gather(*tasks, return_exceptions=True)


_DEFAULT_MONITOR: HealthMonitor | None = None
_DEFAULT_MONITOR_LOCK = threading.Lock()


def get_health_monitor(settings: MonitorSettings | None = None) -> HealthMonitor:
    """Return the process-wide monitor, creating it on first call.

    ``settings`` only applies to the call that creates the instance.
    """
    global _DEFAULT_MONITOR
    if _DEFAULT_MONITOR is None:
        with _DEFAULT_MONITOR_LOCK:
            if _DEFAULT_MONITOR is None:
                logger.info("Creating shared health monitor")
                _DEFAULT_MONITOR = HealthMonitor(settings=settings)
    return _DEFAULT_MONITOR
