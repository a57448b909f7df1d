"""Prometheus implementation of the MonitorMetrics protocol.

Metric families follow the request/response conventions shared by the
monitoring libraries for other stacks, so the same dashboards work:

* ``request_seconds`` histogram
* ``response_size_bytes`` counter
* ``application_info`` gauge carrying the version label

Families are created on the first ``initialize`` call because the latency
buckets are only known then.
"""

import threading
from typing import Optional, Sequence

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from asgi_monitor.core.logging import LoggerConfigurator

logger = LoggerConfigurator.configure_logger(__name__)

_REQUEST_LABELS = ("type", "status", "method", "addr", "isError")


class PrometheusMonitorMetrics:
    """Prometheus-backed request metrics.

    Satisfies the ``MonitorMetrics`` protocol structurally.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self._registry = registry or CollectorRegistry()
        self._lock = threading.Lock()
        self._initialized = False
        self._enabled = False
        self._request_seconds: Optional[Histogram] = None
        self._response_size: Optional[Counter] = None
        self._application_info: Optional[Gauge] = None

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    # -- MonitorMetrics protocol methods --

    def initialize(
        self,
        enabled: bool,
        version: str,
        buckets: Optional[Sequence[float]] = None,
    ) -> None:
        with self._lock:
            if self._initialized:
                logger.debug("Prometheus monitor metrics already initialized; ignoring.")
                return

            histogram_kwargs = {}
            if buckets:
                # prometheus-client rejects unsorted boundaries.
                histogram_kwargs["buckets"] = tuple(sorted(set(buckets)))

            self._request_seconds = Histogram(
                "request_seconds",
                "records in a histogram the number of http requests and their duration in seconds",
                _REQUEST_LABELS,
                registry=self._registry,
                **histogram_kwargs,
            )
            self._response_size = Counter(
                "response_size_bytes",
                "counts the size of each http response",
                _REQUEST_LABELS,
                registry=self._registry,
            )
            self._application_info = Gauge(
                "application_info",
                "static information about the application",
                ["version"],
                registry=self._registry,
            )
            self._application_info.labels(version=version).set(1)

            self._enabled = enabled
            self._initialized = True

    def observe_latency(
        self,
        scheme: str,
        status: str,
        method: str,
        path: str,
        is_error: bool,
        elapsed_seconds: float,
    ) -> None:
        if not self._enabled:
            return
        self._request_seconds.labels(
            type=scheme,
            status=status,
            method=method,
            addr=path,
            isError=_bool_label(is_error),
        ).observe(elapsed_seconds)

    def observe_size(
        self,
        scheme: str,
        status: str,
        method: str,
        path: str,
        is_error: bool,
        byte_count: int,
    ) -> None:
        if not self._enabled:
            return
        self._response_size.labels(
            type=scheme,
            status=status,
            method=method,
            addr=path,
            isError=_bool_label(is_error),
        ).inc(byte_count)


def _bool_label(value: bool) -> str:
    return "true" if value else "false"


_default_metrics: Optional[PrometheusMonitorMetrics] = None
_default_lock = threading.Lock()


def default_monitor_metrics() -> PrometheusMonitorMetrics:
    """Process-wide adapter bound to the prometheus-client default REGISTRY.

    Used when the middleware is attached without an explicit backend, so the
    families show up in any existing ``/metrics`` exposition.
    """
    global _default_metrics
    with _default_lock:
        if _default_metrics is None:
            _default_metrics = PrometheusMonitorMetrics(registry=REGISTRY)
        return _default_metrics
