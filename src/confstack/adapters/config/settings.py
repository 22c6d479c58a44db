"""Typed settings for the source registry and its cache.

Parses the ``[confstack]`` configuration section into frozen Pydantic
models at the boundary, so the composition root works with validated
values only.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from confstack.domain.cache import DEFAULT_MAX_ENTRIES, DEFAULT_TIME_TO_IDLE, DEFAULT_TIME_TO_LIVE
from confstack.domain.enums import EvictionPolicy, WriteStrategy
from confstack.domain.errors import ConfigurationError

SETTINGS_SECTION = "confstack"


class CacheSettings(BaseModel):
    """Validated cache settings from ``[confstack.cache]``.

    Example:
        >>> settings = CacheSettings(max_entries=10, eviction_policy="LRU")
        >>> settings.max_entries, settings.eviction_policy
        (10, <EvictionPolicy.LRU: 'lru'>)
        >>> CacheSettings().time_to_live
        300.0
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    time_to_live: float = Field(default=float(DEFAULT_TIME_TO_LIVE), ge=0)
    time_to_idle: float = Field(default=float(DEFAULT_TIME_TO_IDLE), ge=0)
    max_entries: int = Field(default=DEFAULT_MAX_ENTRIES, ge=1)
    eviction_policy: EvictionPolicy = EvictionPolicy.LFU
    reload_on_write: bool = False

    @field_validator("eviction_policy", mode="before")
    @classmethod
    def _lowercase_policy(cls, v: Any) -> Any:
        """Accept policy names in any case (``LFU``, ``lfu``)."""
        return v.strip().lower() if isinstance(v, str) else v


class SourcesSettings(BaseModel):
    """Validated settings from the ``[confstack]`` section.

    Example:
        >>> SourcesSettings.model_validate({"write_strategy": "all"}).write_strategy
        <WriteStrategy.ALL: 'all'>
    """

    model_config = ConfigDict(frozen=True)

    write_strategy: WriteStrategy = WriteStrategy.HIGHEST
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @field_validator("write_strategy", mode="before")
    @classmethod
    def _lowercase_strategy(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


def load_sources_settings_from_dict(section: Mapping[str, Any]) -> SourcesSettings:
    """Validate a raw ``[confstack]`` mapping.

    Raises:
        ConfigurationError: A value is missing its required type or range.

    Example:
        >>> load_sources_settings_from_dict({"cache": {"max_entries": 0}})
        Traceback (most recent call last):
        ...
        confstack.domain.errors.ConfigurationError: Invalid [confstack] settings: cache.max_entries: Input should be greater than or equal to 1
    """
    try:
        return SourcesSettings.model_validate(dict(section))
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid [{SETTINGS_SECTION}] settings: {details}") from exc


def load_sources_settings(config: Config) -> SourcesSettings:
    """Read and validate the ``[confstack]`` section of a loaded Config.

    A missing section yields the defaults.

    Raises:
        ConfigurationError: The section holds invalid values.
    """
    raw: object = config.get(SETTINGS_SECTION, default={})
    section = cast("dict[str, Any]", raw) if isinstance(raw, Mapping) else {}
    return load_sources_settings_from_dict(section)


__all__ = [
    "CacheSettings",
    "SETTINGS_SECTION",
    "SourcesSettings",
    "load_sources_settings",
    "load_sources_settings_from_dict",
]
