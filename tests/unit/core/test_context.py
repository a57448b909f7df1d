"""Unit tests for monitor initialization and per-request records."""

import logging

import pytest

from asgi_monitor.adapters.monitor_metrics import FakeMonitorMetrics
from asgi_monitor.core.config import MonitorSettings
from asgi_monitor.core.context import (
    MeasuredOutcome,
    MonitorContext,
    RequestContext,
    is_error_status,
)


@pytest.fixture(autouse=True)
def _reset_package_log_level():
    yield
    logging.getLogger("asgi_monitor").setLevel(logging.NOTSET)


class TestIsErrorStatus:
    @pytest.mark.parametrize(
        "status, expected",
        [(200, False), (199, True), (404, True), (500, True), (301, False), (100, True), (399, False)],
    )
    def test_classification(self, status, expected):
        assert is_error_status(status) is expected

    def test_outcome_uses_same_rule(self):
        assert MeasuredOutcome(0.1, 10, 503).is_error is True
        assert MeasuredOutcome(0.1, 10, 204).is_error is False


class TestRequestContext:
    def test_from_scope(self):
        scope = {
            "type": "http",
            "scheme": "https",
            "method": "POST",
            "path": "/ctx/items",
            "root_path": "/ctx",
        }
        assert RequestContext.from_scope(scope) == RequestContext(
            scheme="https", method="POST", path="/ctx/items", root_path="/ctx"
        )

    def test_missing_keys_fall_back(self):
        ctx = RequestContext.from_scope({"type": "http", "method": "GET", "path": "/"})
        assert ctx.scheme == "http"
        assert ctx.root_path == ""


class TestMonitorContextInitialize:
    def test_registers_backend_once(self):
        fake = FakeMonitorMetrics()
        settings = MonitorSettings(buckets=(0.1, 1.0), path_depth=2, exclusions=("/health",), version="2.0.0")

        ctx = MonitorContext.initialize(settings, fake)

        assert len(fake.initialize_calls) == 1
        call = fake.initialize_calls[0]
        assert call.enabled is True
        assert call.version == "2.0.0"
        assert call.buckets == (0.1, 1.0)
        assert ctx.path_depth == 2
        assert ctx.exclusions == ("/health",)
        assert ctx.metrics is fake
        assert ctx.version == "2.0.0"

    def test_default_buckets_passed_as_none(self):
        fake = FakeMonitorMetrics()
        MonitorContext.initialize(MonitorSettings(), fake)
        assert fake.initialize_calls[0].buckets is None
        assert fake.initialize_calls[0].version == "unknown"

    def test_debug_enables_package_debug_logging(self):
        MonitorContext.initialize(MonitorSettings(debug=True), FakeMonitorMetrics())
        assert logging.getLogger("asgi_monitor").level == logging.DEBUG

    def test_context_is_immutable(self):
        ctx = MonitorContext.initialize(MonitorSettings(), FakeMonitorMetrics())
        with pytest.raises(AttributeError):
            ctx.path_depth = 3
