"""Prometheus metrics primitives for probes and aggregate checks."""

from __future__ import annotations

import re
from typing import Any, Protocol

from healthmon.errors import MissingDependencyError

_LABEL_NORMALIZER = re.compile(r"[^a-zA-Z0-9_]+")


def _import_prometheus_client() -> Any:
    try:
        import prometheus_client
    except ImportError as exc:  # pragma: no cover - depends on optional extras
        raise MissingDependencyError(
            "Prometheus metrics require optional dependency 'prometheus-client'. "
            "Install with: pip install 'healthmon[metrics]'"
        ) from exc
    return prometheus_client


def _sanitize_label(value: str, *, default: str = "unknown") -> str:
    normalized = _LABEL_NORMALIZER.sub("_", value.strip().lower()).strip("_")
    return normalized or default


_PROBE_OUTCOMES = frozenset({"ok", "error"})


def _probe_outcome(status: str) -> str:
    # Probe statuses are open-ended (cluster states, http_<code>); keep the label set fixed.
    label = _sanitize_label(status)
    return label if label in _PROBE_OUTCOMES else "failed"


def _collector_or_create(registry: Any, name: str, factory: Any) -> Any:
    names_to_collectors = getattr(registry, "_names_to_collectors", None)
    if isinstance(names_to_collectors, dict):
        collector = names_to_collectors.get(name)
        if collector is not None:
            return collector
    return factory()


class MetricsRecorder(Protocol):
    """Observer contract for probe and check metrics."""

    def observe_probe(
        self,
        *,
        kind: str,
        status: str,
        duration_seconds: float,
    ) -> None:
        """Record one probe outcome and its latency."""
        ...

    def observe_check(
        self,
        *,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        """Record one aggregate check outcome."""
        ...


class NoopMetricsRecorder:
    """No-op recorder used when metrics are not configured."""

    def observe_probe(
        self,
        *,
        kind: str,
        status: str,
        duration_seconds: float,
    ) -> None:
        del kind, status, duration_seconds

    def observe_check(
        self,
        *,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        del status_code, duration_seconds


class PrometheusMetricsRecorder:
    """Prometheus-backed recorder with standard healthmon_* naming."""

    def __init__(
        self,
        *,
        registry: Any | None = None,
        prefix: str = "healthmon",
    ) -> None:
        prometheus_client = _import_prometheus_client()
        self._registry = prometheus_client.REGISTRY if registry is None else registry
        self._prefix = _sanitize_label(prefix, default="healthmon")
        self._probe_latency = _collector_or_create(
            self._registry,
            f"{self._prefix}_probe_latency_seconds",
            lambda: prometheus_client.Histogram(
                f"{self._prefix}_probe_latency_seconds",
                "Resource probe latency in seconds.",
                labelnames=("kind", "status"),
                registry=self._registry,
                buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
            ),
        )
        self._probes = _collector_or_create(
            self._registry,
            f"{self._prefix}_probe_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_probe_total",
                "Resource probe outcomes.",
                labelnames=("kind", "status"),
                registry=self._registry,
            ),
        )
        self._checks = _collector_or_create(
            self._registry,
            f"{self._prefix}_check_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_check_total",
                "Aggregate health check outcomes.",
                labelnames=("status_code",),
                registry=self._registry,
            ),
        )
        self._check_latency = _collector_or_create(
            self._registry,
            f"{self._prefix}_check_latency_seconds",
            lambda: prometheus_client.Histogram(
                f"{self._prefix}_check_latency_seconds",
                "Aggregate health check latency in seconds.",
                labelnames=("status_code",),
                registry=self._registry,
            ),
        )

    def observe_probe(
        self,
        *,
        kind: str,
        status: str,
        duration_seconds: float,
    ) -> None:
        kind_label = _sanitize_label(kind)
        status_label = _probe_outcome(status)
        self._probe_latency.labels(kind=kind_label, status=status_label).observe(
            max(0.0, duration_seconds)
        )
        self._probes.labels(kind=kind_label, status=status_label).inc()

    def observe_check(
        self,
        *,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        label = str(status_code)
        self._checks.labels(status_code=label).inc()
        self._check_latency.labels(status_code=label).observe(max(0.0, duration_seconds))


_NOOP_RECORDER = NoopMetricsRecorder()
_DEFAULT_RECORDER: MetricsRecorder = _NOOP_RECORDER


def get_metrics_recorder() -> MetricsRecorder:
    """Return the process-level metrics recorder."""
    return _DEFAULT_RECORDER


def set_metrics_recorder(recorder: MetricsRecorder | None) -> MetricsRecorder:
    """Set process-level recorder. `None` switches back to no-op."""
    global _DEFAULT_RECORDER
    _DEFAULT_RECORDER = _NOOP_RECORDER if recorder is None else recorder
    return _DEFAULT_RECORDER


def configure_prometheus_metrics(
    *,
    registry: Any | None = None,
    prefix: str = "healthmon",
    set_default: bool = True,
) -> PrometheusMetricsRecorder:
    """Build a Prometheus recorder and optionally set it as default."""
    recorder = PrometheusMetricsRecorder(registry=registry, prefix=prefix)
    if set_default:
        set_metrics_recorder(recorder)
    return recorder


def render_prometheus_metrics(*, registry: Any | None = None) -> bytes:
    """Render current Prometheus metrics in exposition text format."""
    prometheus_client = _import_prometheus_client()
    resolved_registry = prometheus_client.REGISTRY if registry is None else registry
    return bytes(prometheus_client.generate_latest(resolved_registry))
