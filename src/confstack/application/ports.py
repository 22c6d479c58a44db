"""Application ports: Protocol definitions for caches and adapter functions.

:class:`ExpiringCache` is the contract the caching decorators require from
any expiring key/value cache. The callable protocols each define a
``__call__`` method whose signature matches the corresponding adapter
function, so module-level functions satisfy them via structural subtyping
(PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``SourcesSettings``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..domain.sources import ConfigurationSource

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.config.settings import SourcesSettings


class ExpiringCache(Protocol):
    """Key/value cache with per-entry expiry, bounded size, and invalidation.

    ``recover`` must report expired entries as absent even if no sweep has
    run, and ``size`` must never exceed the configured capacity.
    """

    def admit(self, key: str, value: str) -> None: ...
    def recover(self, key: str) -> str | None: ...
    def remove(self, key: str) -> None: ...
    def clear(self) -> None: ...
    def size(self) -> int: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class LoadSourcesSettings(Protocol):
    """Validate the ``[confstack]`` section into typed settings."""

    def __call__(self, config: Config) -> SourcesSettings: ...


class BuildConfiguration(Protocol):
    """Assemble the source registry (and its cache) described by the settings."""

    def __call__(self, config: Config, settings: SourcesSettings) -> ConfigurationSource: ...


__all__ = [
    "BuildConfiguration",
    "ExpiringCache",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadSourcesSettings",
]
