"""In-process health check aggregation for external resources."""

from healthmon.errors import (
    CheckTimeoutError,
    HealthmonError,
    MissingDependencyError,
    ResourceValidationError,
    UnknownResourceKindError,
)
from healthmon.models import Resource, ResourceKind, ServerResponse, ServiceResponse
from healthmon.monitor import HealthMonitor, get_health_monitor
from healthmon.probes import (
    ElasticsearchProber,
    PostgresProber,
    Prober,
    RedisProber,
    ServiceUrlProber,
    SyntheticProber,
    build_probers,
)
from healthmon.registry import ResourceRegistry

__all__ = [
    "CheckTimeoutError",
    "ElasticsearchProber",
    "HealthMonitor",
    "HealthmonError",
    "MissingDependencyError",
    "PostgresProber",
    "Prober",
    "RedisProber",
    "Resource",
    "ResourceKind",
    "ResourceRegistry",
    "ResourceValidationError",
    "ServerResponse",
    "ServiceResponse",
    "ServiceUrlProber",
    "SyntheticProber",
    "UnknownResourceKindError",
    "build_probers",
    "get_health_monitor",
]
