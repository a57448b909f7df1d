"""Logging for the monitor.

Every module logs through a ContextualLogger built with
``LoggerConfigurator.configure_logger`` so the ``debug`` setting can flip
the whole package to DEBUG in one place.
"""

import logging
from typing import Any, MutableMapping, Optional

ROOT_LOGGER_NAME = "asgi_monitor"
DEBUG_HANDLER_NAME = "asgi_monitor.debug"
DEBUG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that carries a dict of dimensions on every record.

    Dimensions are rendered as a ``[k=v ...]`` prefix and also attached to
    the record as ``extra`` so structured handlers can pick them up.
    """

    def __init__(self, logger: logging.Logger, dimensions: Optional[dict[str, Any]] = None):
        super().__init__(logger, dimensions or {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        if not self.dimensions:
            return msg, kwargs
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("dimensions", self.dimensions)
        kwargs["extra"] = extra
        prefix = " ".join(f"{k}={v}" for k, v in self.dimensions.items())
        return f"[{prefix}] {msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with ``dimensions`` merged over the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


class LoggerConfigurator:
    """Builds contextual loggers under the package root logger."""

    @staticmethod
    def configure_logger(
        name: str, dimensions: Optional[dict[str, Any]] = None
    ) -> ContextualLogger:
        """Return a ContextualLogger for ``name``.

        Names outside the package are nested under ``asgi_monitor`` so that
        ``set_debug`` reaches them.
        """
        if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        return ContextualLogger(logging.getLogger(name), dimensions)

    @staticmethod
    def set_debug(enabled: bool) -> None:
        """Switch the package root logger between DEBUG and inherited level.

        Enabling attaches a stderr handler when the package logger has none,
        so debug traces show up even if the host never configured logging.
        Disabling removes that handler again.
        """
        root = logging.getLogger(ROOT_LOGGER_NAME)
        if enabled:
            root.setLevel(logging.DEBUG)
            if not root.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
                handler.set_name(DEBUG_HANDLER_NAME)
                root.addHandler(handler)
            return
        root.setLevel(logging.NOTSET)
        for handler in list(root.handlers):
            if handler.get_name() == DEBUG_HANDLER_NAME:
                root.removeHandler(handler)
