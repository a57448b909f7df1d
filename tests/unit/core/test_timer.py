"""Unit tests for the monotonic request timer."""

from asgi_monitor.core.timer import RequestTimer, TimerHandle


class _StepClock:
    """Clock returning preset nanosecond readings in order."""

    def __init__(self, *readings: int):
        self._readings = list(readings)

    def __call__(self) -> int:
        return self._readings.pop(0)


class TestRequestTimer:
    def test_start_captures_clock_reading(self):
        timer = RequestTimer(clock=_StepClock(42))
        assert timer.start() == TimerHandle(started_ns=42)

    def test_elapsed_seconds_converts_nanoseconds(self):
        timer = RequestTimer(clock=_StepClock(1_000, 1_500_001_000))
        handle = timer.start()
        assert timer.elapsed_seconds(handle) == 1.5

    def test_elapsed_is_never_negative(self):
        timer = RequestTimer(clock=_StepClock(10, 5))
        handle = timer.start()
        assert timer.elapsed_seconds(handle) == 0.0

    def test_long_spans_keep_precision(self):
        """A 25h span still resolves single nanoseconds."""
        day_and_hour_ns = 25 * 3600 * 1_000_000_000
        timer = RequestTimer(clock=_StepClock(0, day_and_hour_ns + 1))
        handle = timer.start()
        assert timer.elapsed_seconds(handle) > 25 * 3600

    def test_default_clock_is_monotonic(self):
        timer = RequestTimer()
        handle = timer.start()
        first = timer.elapsed_seconds(handle)
        second = timer.elapsed_seconds(handle)
        assert 0.0 <= first <= second
