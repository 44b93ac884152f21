"""Resource registration input and health check result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

STATUS_OK = "ok"

MESSAGE_OK = "Ok"
MESSAGE_NOTHING_TO_CHECK = "Nothing to check"
MESSAGE_TIMED_OUT = "Timed out while checking resources"
MESSAGE_CRITICAL_FAILURE = "Fail in a critical resource service"
MESSAGE_GENERIC_ERROR = "Generic error"


class ResourceKind(str, Enum):
    """Supported resource kinds, keyed by their registration names."""

    SERVICE_URL = "serviceUrl"
    REDIS_CLIENT = "redisClient"
    ELASTICSEARCH_CLIENT = "elasticsearchClient"
    POSTGRES_CLIENT = "postgresPromiseClient"

    @classmethod
    def parse(cls, value: str | ResourceKind) -> ResourceKind | None:
        """Return the matching kind, or None when the value is not a known kind."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(slots=True, frozen=True)
class Resource:
    """An external dependency to register for health monitoring."""

    type: str
    name: str
    handle: str
    critical: bool = False


@dataclass(slots=True)
class ServiceResponse:
    """Result of probing a single resource."""

    resource: str
    status: str
    latency_ms: float = 0.0
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        payload: dict[str, Any] = {
            "resource": self.resource,
            "status": self.status,
            "latency_ms": max(0.0, float(self.latency_ms)),
        }
        if self.message is not None:
            payload["message"] = self.message
        return payload


@dataclass(slots=True)
class ServerResponse:
    """Aggregated outcome of one health check."""

    status: int
    message: str
    service_responses: list[ServiceResponse] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == 200

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable payload suitable for `/health` endpoints.

        ``results`` is only present when probe results were collected and
        ``failed`` only when at least one resource reported a failure.
        """
        payload: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.service_responses:
            payload["results"] = [response.to_dict() for response in self.service_responses]
        if self.failed:
            payload["failed"] = list(self.failed)
        return payload


def nothing_to_check() -> ServerResponse:
    return ServerResponse(status=500, message=MESSAGE_NOTHING_TO_CHECK)


def timed_out() -> ServerResponse:
    return ServerResponse(status=503, message=MESSAGE_TIMED_OUT)


def generic_error() -> ServerResponse:
    return ServerResponse(status=500, message=MESSAGE_GENERIC_ERROR)
