"""Path labelling and exclusion rules for the metrics collector."""

from typing import Optional, Sequence

from asgi_monitor.core.logging import LoggerConfigurator

logger = LoggerConfigurator.configure_logger(__name__)

SEPARATOR = "/"


def truncate_path(path: Optional[str], depth: int) -> Optional[str]:
    """Cut ``path`` down to its first ``depth`` segments.

    Args:
        path: The request path.
        depth: How many ``/`` separators to keep. Anything below 1 means full
            granularity and returns ``path`` untouched.

    Returns:
        The prefix of ``path`` ending just before its ``depth + 1``-th
        separator, or the whole path if it is not that deep. A leading ``/``
        is added when missing.

    Examples:
        >>> truncate_path("/a/b/c", 2)
        '/a/b'
        >>> truncate_path("a/b", 1)
        '/a'
    """
    if not path or depth < 1:
        return path
    if not path.startswith(SEPARATOR):
        path = SEPARATOR + path

    index = -1
    for _ in range(depth + 1):
        index = path.find(SEPARATOR, index + 1)
        if index < 0:
            # Shallower than depth.
            return path
    return path[:index]


def is_excluded_path(root_path: str, path: str, exclusions: Sequence[str]) -> bool:
    """Check whether ``path`` is configured to skip metrics collection.

    ``root_path`` is stripped first when ``path`` starts with it. Matching is
    a plain string prefix test, so an exclusion of ``/health`` also covers
    ``/healthy``.
    """
    if not exclusions:
        return False
    if root_path and path.startswith(root_path):
        path = path[len(root_path):]
    for exclusion in exclusions:
        if path.startswith(exclusion):
            logger.debug("Excluded %s", path)
            return True
    return False
