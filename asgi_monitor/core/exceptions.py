"""Exceptions raised by the monitor."""


class MonitorError(Exception):
    """Base class for monitor errors."""


class MonitorConfigError(MonitorError):
    """Hard error raised when the monitor configuration cannot be used.

    Raised at initialization only; the middleware never raises it while
    serving requests.
    """
