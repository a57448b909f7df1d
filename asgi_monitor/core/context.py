"""Process-wide monitor state and per-request records.

``MonitorContext`` is built once at startup and shared read-only by every
request; ``RequestContext`` and ``MeasuredOutcome`` live for one request.
"""

from dataclasses import dataclass
from typing import Optional

from starlette.types import Scope

from asgi_monitor.core.config import MonitorSettings
from asgi_monitor.core.logging import LoggerConfigurator
from asgi_monitor.core.protocols.monitor_metrics import MonitorMetrics
from asgi_monitor.core.version import application_version

logger = LoggerConfigurator.configure_logger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """What the collector needs to know about one request."""

    scheme: str
    method: str
    path: str
    root_path: str

    @classmethod
    def from_scope(cls, scope: Scope) -> "RequestContext":
        return cls(
            scheme=scope.get("scheme", "http"),
            method=scope.get("method", "GET"),
            path=scope.get("path", ""),
            root_path=scope.get("root_path", ""),
        )


@dataclass(frozen=True)
class MeasuredOutcome:
    """Measurements of one completed request."""

    elapsed_seconds: float
    byte_count: int
    status_code: int

    @property
    def is_error(self) -> bool:
        return is_error_status(self.status_code)


def is_error_status(status: int) -> bool:
    """Anything outside 2xx/3xx counts as an error."""
    return status < 200 or status >= 400


@dataclass(frozen=True)
class MonitorContext:
    """Read-only state shared by every request handled by the collector."""

    metrics: MonitorMetrics
    path_depth: int = 0
    exclusions: tuple[str, ...] = ()
    version: Optional[str] = None

    @classmethod
    def initialize(cls, settings: MonitorSettings, metrics: MonitorMetrics) -> "MonitorContext":
        """Apply ``settings`` and register the metric families with ``metrics``.

        Args:
            settings: Parsed monitor settings.
            metrics: Backend receiving the observations.

        Returns:
            The context to hand to the middleware.
        """
        if settings.debug:
            LoggerConfigurator.set_debug(True)
        version = application_version(settings.distribution, settings.version)
        metrics.initialize(enabled=True, version=version, buckets=settings.buckets)
        logger.debug(
            "Monitor initialized: version=%s path_depth=%s exclusions=%s buckets=%s",
            version,
            settings.path_depth,
            settings.exclusions,
            settings.buckets,
        )
        return cls(
            metrics=metrics,
            path_depth=settings.path_depth,
            exclusions=tuple(settings.exclusions),
            version=version,
        )
