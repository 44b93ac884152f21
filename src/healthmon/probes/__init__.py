"""Probers for each supported resource kind."""

from __future__ import annotations

from collections.abc import Mapping

from healthmon.config.models import MonitorSettings
from healthmon.models import ResourceKind
from healthmon.probes.base import Prober
from healthmon.probes.http import ElasticsearchProber, ServiceUrlProber
from healthmon.probes.postgres import PostgresProber
from healthmon.probes.redis import RedisProber
from healthmon.probes.synthetic import SyntheticProber


def build_probers(
    settings: MonitorSettings | None = None,
    *,
    overrides: Mapping[ResourceKind, Prober] | None = None,
) -> dict[ResourceKind, Prober]:
    """Return the ``kind -> Prober`` mapping used by the monitor.

    ``probe_mode="synthetic"`` maps every kind to a ``SyntheticProber``;
    ``overrides`` replace individual kinds after the defaults are built.
    """
    if settings is None:
        settings = MonitorSettings()

    probers: dict[ResourceKind, Prober]
    if settings.probe_mode == "synthetic":
        stand_in = SyntheticProber(delay_seconds=settings.synthetic_delay_seconds)
        probers = {kind: stand_in for kind in ResourceKind}
    else:
        timeout = settings.probe_timeout_seconds
        probers = {
            ResourceKind.SERVICE_URL: ServiceUrlProber(timeout_seconds=timeout),
            ResourceKind.REDIS_CLIENT: RedisProber(timeout_seconds=timeout),
            ResourceKind.ELASTICSEARCH_CLIENT: ElasticsearchProber(timeout_seconds=timeout),
            ResourceKind.POSTGRES_CLIENT: PostgresProber(timeout_seconds=timeout),
        }

    if overrides:
        probers.update(overrides)
    return probers


__all__ = [
    "ElasticsearchProber",
    "PostgresProber",
    "Prober",
    "RedisProber",
    "ServiceUrlProber",
    "SyntheticProber",
    "build_probers",
]
