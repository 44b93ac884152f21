"""Logging and metrics helpers."""

from healthmon.observability.logging import (
    JsonFormatter,
    SamplingFilter,
    TextFormatter,
    bootstrap_logging,
    bootstrap_logging_from_app_settings,
    check_scope,
    get_check_id,
)
from healthmon.observability.metrics import (
    MetricsRecorder,
    NoopMetricsRecorder,
    PrometheusMetricsRecorder,
    configure_prometheus_metrics,
    get_metrics_recorder,
    render_prometheus_metrics,
    set_metrics_recorder,
)

__all__ = [
    "JsonFormatter",
    "MetricsRecorder",
    "NoopMetricsRecorder",
    "PrometheusMetricsRecorder",
    "SamplingFilter",
    "TextFormatter",
    "bootstrap_logging",
    "bootstrap_logging_from_app_settings",
    "check_scope",
    "configure_prometheus_metrics",
    "get_check_id",
    "get_metrics_recorder",
    "render_prometheus_metrics",
    "set_metrics_recorder",
]
