"""Monotonic request timer."""

import time
from dataclasses import dataclass
from typing import Callable

_NANOS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class TimerHandle:
    """Start mark of one timed span, in clock nanoseconds."""

    started_ns: int


class RequestTimer:
    """Measures elapsed seconds on a monotonic nanosecond clock.

    ``time.perf_counter_ns`` is unaffected by system clock changes and,
    being an int, does not lose precision on long spans.
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self._clock = clock

    def start(self) -> TimerHandle:
        return TimerHandle(started_ns=self._clock())

    def elapsed_seconds(self, handle: TimerHandle) -> float:
        elapsed_ns = self._clock() - handle.started_ns
        return max(elapsed_ns, 0) / _NANOS_PER_SECOND
