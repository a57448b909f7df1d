"""Application version lookup for the ``application_info`` metric."""

from importlib import metadata
from typing import Optional

from asgi_monitor.core.logging import LoggerConfigurator

logger = LoggerConfigurator.configure_logger(__name__)

UNKNOWN_VERSION = "unknown"
ERROR_READING_VERSION = "error-reading-version"


def application_version(
    distribution: Optional[str] = None, override: Optional[str] = None
) -> str:
    """Resolve the version string reported to the metrics backend.

    Args:
        distribution: Name of the installed distribution to read the version from.
        override: Explicit version; wins over the distribution lookup.

    Returns:
        The version, ``"unknown"`` when there is nothing to read, or
        ``"error-reading-version"`` when the package metadata is unreadable.
    """
    if override:
        return override
    if not distribution:
        return UNKNOWN_VERSION
    try:
        return metadata.version(distribution) or UNKNOWN_VERSION
    except metadata.PackageNotFoundError:
        logger.debug("Distribution %s is not installed; version unknown.", distribution)
        return UNKNOWN_VERSION
    except Exception as e:
        logger.warning(f"Error reading version of {distribution} from package metadata: {e}")
        return ERROR_READING_VERSION
