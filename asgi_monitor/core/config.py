"""Monitor configuration.

Settings come from init parameters (a string-keyed mapping using the keys of
a deployment descriptor, e.g. ``path-depth``) or from ``MONITOR_*``
environment variables. Values are parsed once at startup.
"""

import json
import math
from typing import Any, Mapping, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from asgi_monitor.core.exceptions import MonitorConfigError
from asgi_monitor.core.logging import LoggerConfigurator

logger = LoggerConfigurator.configure_logger(__name__)

BUCKETS_PARAM = "buckets"
PATH_DEPTH_PARAM = "path-depth"
EXCLUSIONS_PARAM = "exclusions"
DEBUG_PARAM = "debug"
VERSION_PARAM = "version"
DISTRIBUTION_PARAM = "distribution"
KNOWN_PARAMS = frozenset(
    {BUCKETS_PARAM, PATH_DEPTH_PARAM, EXCLUSIONS_PARAM, DEBUG_PARAM, VERSION_PARAM, DISTRIBUTION_PARAM}
)

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _csv_to_list(value: str) -> list[str]:
    items = [part.strip() for part in value.split(",")]
    return [item for item in items if item]


class _CsvFriendlyEnvSettingsSource(EnvSettingsSource):
    """Env source that hands undecodable complex values to the field validators.

    ``MONITOR_BUCKETS=0.1,0.5`` is not JSON; without this the env source
    fails before the CSV validator runs.
    """

    def decode_complex_value(self, field_name: str, field: Any, value: Any) -> Any:
        try:
            return super().decode_complex_value(field_name, field, value)
        except ValueError:
            return value


class MonitorSettings(BaseSettings):
    """Initialization-time configuration for the metrics collector."""

    model_config = SettingsConfigDict(env_prefix="MONITOR_", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        if isinstance(env_settings, EnvSettingsSource):
            env_settings = _CsvFriendlyEnvSettingsSource(
                settings_cls,
                case_sensitive=env_settings.case_sensitive,
                env_prefix=env_settings.env_prefix,
                env_nested_delimiter=env_settings.env_nested_delimiter,
                env_ignore_empty=env_settings.env_ignore_empty,
                env_parse_none_str=env_settings.env_parse_none_str,
            )
        return init_settings, env_settings, dotenv_settings, file_secret_settings

    buckets: Optional[tuple[float, ...]] = Field(
        None, description="Latency histogram boundaries; None means backend defaults."
    )
    path_depth: int = Field(0, description="Path segments kept in the path label; < 1 keeps all.")
    exclusions: tuple[str, ...] = Field((), description="Path prefixes skipped entirely.")
    debug: bool = False
    version: Optional[str] = Field(None, description="Explicit application version.")
    distribution: Optional[str] = Field(
        None, description="Installed distribution whose version is reported."
    )

    @field_validator("buckets", mode="before")
    @classmethod
    def _parse_buckets(cls, value: object) -> object:
        if _is_blank(value):
            return None
        if isinstance(value, str):
            text = value.strip()
            items: list[Any] = json.loads(text) if text.startswith("[") else text.split(",")
        elif isinstance(value, (int, float)):
            items = [value]
        else:
            items = list(value)  # type: ignore[call-overload]
        buckets = []
        for item in items:
            bucket = float(item.strip()) if isinstance(item, str) else float(item)
            if not math.isfinite(bucket) or bucket <= 0:
                raise ValueError(f"bucket boundaries must be finite positive numbers, got {item!r}")
            buckets.append(bucket)
        return tuple(buckets)

    @field_validator("path_depth", mode="before")
    @classmethod
    def _parse_path_depth(cls, value: object) -> int:
        if _is_blank(value):
            return 0
        try:
            return int(str(value).strip())
        except ValueError:
            logger.warning(
                "Error: %s must be an int value but got '%s'; using full path granularity.",
                PATH_DEPTH_PARAM,
                value,
            )
            return 0

    @field_validator("exclusions", mode="before")
    @classmethod
    def _parse_exclusions(cls, value: object) -> object:
        if _is_blank(value):
            return ()
        if isinstance(value, str):
            return tuple(_csv_to_list(value))
        if isinstance(value, (list, set, tuple)):
            return tuple(str(item).strip() for item in value if str(item).strip())
        return (str(value),)

    @field_validator("debug", mode="before")
    @classmethod
    def _parse_debug(cls, value: object) -> bool:
        if isinstance(value, bool):
            return value
        if _is_blank(value):
            return False
        return str(value).strip().lower() in _TRUTHY

    @classmethod
    def from_init_params(
        cls, params: Optional[Mapping[str, Optional[str]]] = None
    ) -> "MonitorSettings":
        """Build settings from init parameters, falling back to the environment.

        Keys use the descriptor spelling (``path-depth``); blank values are
        treated as absent.

        Raises:
            MonitorConfigError: if the bucket list cannot be parsed.
        """
        data = {}
        for key, value in (params or {}).items():
            key = key.strip()
            if key not in KNOWN_PARAMS:
                logger.warning("Ignoring unknown monitor init parameter '%s'.", key)
                continue
            if not _is_blank(value):
                data[key.replace("-", "_")] = value
        try:
            return cls(**data)
        except ValidationError as e:
            raise MonitorConfigError(f"Invalid monitor configuration: {e}") from e
