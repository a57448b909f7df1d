"""Request latency and response size metrics for ASGI apps."""

from asgi_monitor.core.config import MonitorSettings
from asgi_monitor.core.context import MonitorContext
from asgi_monitor.core.exceptions import MonitorConfigError, MonitorError
from asgi_monitor.core.protocols import MonitorMetrics
from asgi_monitor.middleware import MetricsCollectorMiddleware, install_metrics_collector

__all__ = [
    "MetricsCollectorMiddleware",
    "MonitorConfigError",
    "MonitorContext",
    "MonitorError",
    "MonitorMetrics",
    "MonitorSettings",
    "install_metrics_collector",
]
