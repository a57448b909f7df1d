"""Core protocols for dependency injection."""

from asgi_monitor.core.protocols.monitor_metrics import MonitorMetrics

__all__ = [
    "MonitorMetrics",
]
