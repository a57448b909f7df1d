"""Monitor metrics adapters."""

from asgi_monitor.adapters.monitor_metrics.fake import FakeMonitorMetrics
from asgi_monitor.adapters.monitor_metrics.prometheus import (
    PrometheusMonitorMetrics,
    default_monitor_metrics,
)

__all__ = ["PrometheusMonitorMetrics", "FakeMonitorMetrics", "default_monitor_metrics"]
