"""ASGI middleware recording request latency and response size.

Every HTTP request is labelled by scheme, status code, method and a
depth-limited path, then reported to a ``MonitorMetrics`` backend. Can be
attached with ``app.add_middleware`` (settings from init parameters or the
environment) or with ``install_metrics_collector``.

Example:
    app = FastAPI()
    app.add_middleware(
        MetricsCollectorMiddleware,
        init_params={"path-depth": "2", "exclusions": "/health,/metrics"},
    )
"""

from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from asgi_monitor.adapters.monitor_metrics.prometheus import default_monitor_metrics
from asgi_monitor.core.config import MonitorSettings
from asgi_monitor.core.context import MeasuredOutcome, MonitorContext, RequestContext
from asgi_monitor.core.logging import LoggerConfigurator
from asgi_monitor.core.paths import is_excluded_path, truncate_path
from asgi_monitor.core.protocols.monitor_metrics import MonitorMetrics
from asgi_monitor.core.timer import RequestTimer
from asgi_monitor.middleware.counting_send import ResponseByteCounter

logger = LoggerConfigurator.configure_logger(__name__)


class MetricsCollectorMiddleware:
    """Collects latency and response size metrics for every HTTP request.

    Requests whose path (minus ``root_path``) starts with a configured
    exclusion are passed through without any instrumentation. All other
    requests are reported exactly once, whether the wrapped app returns,
    raises or is cancelled. Errors from the wrapped app are re-raised
    unchanged.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        metrics: Optional[MonitorMetrics] = None,
        settings: Optional[MonitorSettings] = None,
        init_params: Optional[Mapping[str, Optional[str]]] = None,
        context: Optional[MonitorContext] = None,
        timer: Optional[RequestTimer] = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI app.
            metrics: Backend for observations; defaults to the shared Prometheus adapter.
            settings: Parsed settings; built from ``init_params`` and the
                environment when omitted.
            init_params: Descriptor-style parameters (``buckets``, ``path-depth``,
                ``exclusions``, ``debug``, ``version``, ``distribution``).
            context: A ready MonitorContext. Skips initialization entirely.
            timer: Clock used for latency; mainly for tests.

        Raises:
            MonitorConfigError: If the bucket configuration is malformed.
        """
        self.app = app
        if context is None:
            if settings is None:
                settings = MonitorSettings.from_init_params(init_params)
            context = MonitorContext.initialize(settings, metrics or default_monitor_metrics())
        self.context = context
        self._timer = timer or RequestTimer()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = RequestContext.from_scope(scope)
        path = truncate_path(request.path, self.context.path_depth)

        if is_excluded_path(request.root_path, path, self.context.exclusions):
            await self.app(scope, receive, send)
            return

        with self._measure(request, path, send) as counting_send:
            await self.app(scope, receive, counting_send)

    @contextmanager
    def _measure(
        self, request: RequestContext, path: str, send: Send
    ) -> Iterator[ResponseByteCounter]:
        """Time the block and report once on exit, however the block ends.

        When the block raises, a failing backend is logged instead of
        replacing the app's exception.
        """
        handle = self._timer.start()
        counting_send = ResponseByteCounter(send)
        try:
            yield counting_send
        except BaseException:
            try:
                self._collect(request, path, counting_send, self._timer.elapsed_seconds(handle))
            except Exception:
                logger.exception("Failed to report metrics for %s %s", request.method, path)
            raise
        else:
            self._collect(request, path, counting_send, self._timer.elapsed_seconds(handle))

    def _collect(
        self,
        request: RequestContext,
        path: str,
        counting_send: ResponseByteCounter,
        elapsed_seconds: float,
    ) -> None:
        outcome = MeasuredOutcome(
            elapsed_seconds=elapsed_seconds,
            byte_count=counting_send.byte_count,
            status_code=counting_send.status_code,
        )
        status = str(outcome.status_code)
        logger.with_context(
            method=request.method,
            status=status,
            response_started=counting_send.response_started,
        ).debug("%s ; bytes count = %d", path, outcome.byte_count)
        self.context.metrics.observe_latency(
            request.scheme, status, request.method, path, outcome.is_error, outcome.elapsed_seconds
        )
        self.context.metrics.observe_size(
            request.scheme, status, request.method, path, outcome.is_error, outcome.byte_count
        )


def install_metrics_collector(
    app: ASGIApp,
    *,
    metrics: Optional[MonitorMetrics] = None,
    settings: Optional[MonitorSettings] = None,
    init_params: Optional[Mapping[str, Optional[str]]] = None,
) -> MonitorContext:
    """Register the collector on a Starlette/FastAPI app.

    Initialization happens here, not on the first request, so configuration
    errors surface at startup.

    Returns:
        The MonitorContext shared by the installed middleware.
    """
    if settings is None:
        settings = MonitorSettings.from_init_params(init_params)
    context = MonitorContext.initialize(settings, metrics or default_monitor_metrics())
    app.add_middleware(MetricsCollectorMiddleware, context=context)
    return context
