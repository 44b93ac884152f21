"""Shared fakes for monitor and prober tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

import healthmon.monitor as monitor_module
from healthmon.models import ResourceKind, ServiceResponse
from healthmon.observability.metrics import set_metrics_recorder


@dataclass
class FakeProber:
    """Records calls and answers with a per-name status after an optional delay."""

    delay_seconds: float = 0.0
    statuses: dict[str, str] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[tuple[str, str]] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        self.calls.append((name, handle))
        try:
            await asyncio.sleep(self.delays.get(name, self.delay_seconds))
        except asyncio.CancelledError:
            self.cancelled.append(name)
            raise
        if self.error is not None:
            raise self.error
        return ServiceResponse(resource=name, status=self.statuses.get(name, "ok"))


@dataclass
class RecordingMetrics:
    probes: list[tuple[str, str]] = field(default_factory=list)
    checks: list[int] = field(default_factory=list)

    def observe_probe(self, *, kind: str, status: str, duration_seconds: float) -> None:
        del duration_seconds
        self.probes.append((kind, status))

    def observe_check(self, *, status_code: int, duration_seconds: float) -> None:
        del duration_seconds
        self.checks.append(status_code)


@pytest.fixture
def fake_prober() -> FakeProber:
    return FakeProber()


@pytest.fixture
def probers(fake_prober: FakeProber) -> dict[ResourceKind, FakeProber]:
    return {kind: fake_prober for kind in ResourceKind}


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    yield
    set_metrics_recorder(None)
    monitor_module._DEFAULT_MONITOR = None


@pytest.fixture
def prober_factory() -> type[FakeProber]:
    return FakeProber


@pytest.fixture
def recording_metrics() -> RecordingMetrics:
    return RecordingMetrics()
