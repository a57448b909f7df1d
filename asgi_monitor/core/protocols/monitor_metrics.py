"""MonitorMetrics protocol for request latency and response size metrics.

Abstracts metric storage so the collector middleware depends on a protocol
rather than a concrete library. Production uses Prometheus; tests inject a
fake that records calls in memory.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class MonitorMetrics(Protocol):
    """Protocol for the metrics backend fed by the collector middleware."""

    def initialize(
        self,
        enabled: bool,
        version: str,
        buckets: Optional[Sequence[float]] = None,
    ) -> None:
        """Register the metric families.

        Called once at startup. Implementations must treat later calls as
        no-ops rather than registering twice.

        Args:
            enabled: Whether observations should be recorded at all.
            version: Application version reported alongside the metrics.
            buckets: Latency histogram boundaries in seconds; None for defaults.
        """
        ...

    def observe_latency(
        self,
        scheme: str,
        status: str,
        method: str,
        path: str,
        is_error: bool,
        elapsed_seconds: float,
    ) -> None:
        """Record how long one request took."""
        ...

    def observe_size(
        self,
        scheme: str,
        status: str,
        method: str,
        path: str,
        is_error: bool,
        byte_count: int,
    ) -> None:
        """Record how many response body bytes one request wrote."""
        ...
