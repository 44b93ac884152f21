"""Prober contract and helpers shared by the built-in probers."""

from __future__ import annotations

from time import perf_counter
from typing import Protocol, runtime_checkable

from healthmon.models import ServiceResponse

STATUS_DOWN = "down"


@runtime_checkable
class Prober(Protocol):
    """Assesses the health of one resource of a given kind.

    The monitor schedules every ``probe`` call as its own task, so an
    implementation may take as long as it needs; it is cancelled when the
    check deadline expires. Connection and protocol failures should be
    reported as a failing ``ServiceResponse`` rather than raised.
    """

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        """Return exactly one response for the resource."""
        ...


def elapsed_ms(started: float) -> float:
    return (perf_counter() - started) * 1000


def down(name: str, started: float, exc: Exception) -> ServiceResponse:
    """Build the failing response reported when a probe cannot reach its resource."""
    return ServiceResponse(
        resource=name,
        status=STATUS_DOWN,
        latency_ms=elapsed_ms(started),
        message=f"{type(exc).__name__}: {exc}",
    )
