"""Stand-in prober that waits and then reports a fixed status."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from time import perf_counter

from healthmon.models import STATUS_OK, ServiceResponse
from healthmon.probes.base import elapsed_ms


@dataclass(slots=True, frozen=True)
class SyntheticProber:
    """Simulates a remote round trip without touching the network."""

    delay_seconds: float = 3.0
    status: str = STATUS_OK

    async def probe(self, name: str, handle: str) -> ServiceResponse:
        del handle
        started = perf_counter()
        await asyncio.sleep(self.delay_seconds)
        return ServiceResponse(resource=name, status=self.status, latency_ms=elapsed_ms(started))
