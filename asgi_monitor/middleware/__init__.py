"""ASGI middleware."""

from asgi_monitor.middleware.counting_send import ResponseByteCounter
from asgi_monitor.middleware.metrics_collector import (
    MetricsCollectorMiddleware,
    install_metrics_collector,
)

__all__ = ["MetricsCollectorMiddleware", "ResponseByteCounter", "install_metrics_collector"]
