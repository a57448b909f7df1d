"""Fake MonitorMetrics for testing.

Records all calls in memory so tests can assert on metrics behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass
class InitializeRecord:
    """Single initialize() call."""

    enabled: bool
    version: str
    buckets: Optional[tuple[float, ...]]


@dataclass
class LatencyRecord:
    """Single observed request duration."""

    scheme: str
    status: str
    method: str
    path: str
    is_error: bool
    elapsed_seconds: float


@dataclass
class SizeRecord:
    """Single observed response size."""

    scheme: str
    status: str
    method: str
    path: str
    is_error: bool
    byte_count: int


class FakeMonitorMetrics:
    """In-memory spy implementing the MonitorMetrics protocol.

    Usage:
        fake = FakeMonitorMetrics()
        # … inject into the middleware …
        assert len(fake.latencies) == 1
        assert fake.sizes[0].byte_count == 12
    """

    def __init__(self) -> None:
        self.initialize_calls: list[InitializeRecord] = []
        self.latencies: list[LatencyRecord] = []
        self.sizes: list[SizeRecord] = []

    def initialize(
        self,
        enabled: bool,
        version: str,
        buckets: Optional[Sequence[float]] = None,
    ) -> None:
        self.initialize_calls.append(
            InitializeRecord(enabled, version, tuple(buckets) if buckets is not None else None)
        )

    def observe_latency(
        self,
        scheme: str,
        status: str,
        method: str,
        path: str,
        is_error: bool,
        elapsed_seconds: float,
    ) -> None:
        self.latencies.append(
            LatencyRecord(scheme, status, method, path, is_error, elapsed_seconds)
        )

    def observe_size(
        self,
        scheme: str,
        status: str,
        method: str,
        path: str,
        is_error: bool,
        byte_count: int,
    ) -> None:
        self.sizes.append(SizeRecord(scheme, status, method, path, is_error, byte_count))

    # -- test helpers --

    @property
    def observation_count(self) -> int:
        return len(self.latencies) + len(self.sizes)

    def clear(self) -> None:
        """Reset all recorded state."""
        self.initialize_calls.clear()
        self.latencies.clear()
        self.sizes.clear()
