"""Composition root wiring adapters to application ports.

Also owns the process-wide default configuration handle. Library code takes
its sources as constructor arguments; only the outermost boundary (the CLI
or an application's ``main``) reaches for :func:`get_default_configuration`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from lib_layered_config import Config

# Configuration services
from ..adapters.config.layered_source import LayeredConfigSource
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.config.settings import CacheSettings, SourcesSettings, load_sources_settings

# Logging services
from ..adapters.logging.setup import init_logging
from ..adapters.memory.source import MemoryConfigurationSource
from ..domain.cache import ExpiringMemoryCache
from ..domain.caching import CachingConfigurationSource, ReloadingCachingConfigurationSource
from ..domain.registry import PrioritizedSources
from ..domain.sources import ConfigurationSource

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..application.ports import (
        BuildConfiguration,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadSourcesSettings,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_init_logging: InitLogging = init_logging
    _assert_load_sources_settings: LoadSourcesSettings = load_sources_settings

logger = logging.getLogger(__name__)

#: Priority of the runtime (in-memory) source in the default registry.
RUNTIME_PRIORITY = 0
#: Priority of the layered configuration files in the default registry.
LAYERED_PRIORITY = 1


def _wrap_in_cache(registry: PrioritizedSources, settings: CacheSettings) -> ConfigurationSource:
    cache = ExpiringMemoryCache(
        time_to_live=settings.time_to_live,
        time_to_idle=settings.time_to_idle,
        max_entries=settings.max_entries,
        eviction_policy=settings.eviction_policy,
        name=f"registry-{registry.uuid}",
    )
    if settings.reload_on_write:
        return ReloadingCachingConfigurationSource(registry, cache)
    return CachingConfigurationSource(registry, cache)


def build_configuration(config: Config, settings: SourcesSettings) -> ConfigurationSource:
    """Assemble the default source registry described by ``settings``.

    Runtime values (a :class:`MemoryConfigurationSource`) take precedence over
    the layered configuration files. With caching enabled the registry is
    wrapped in a caching decorator.

    Example:
        >>> config = Config({"db": {"host": "localhost"}}, {})
        >>> handle = build_configuration(config, SourcesSettings())
        >>> handle.retrieve("db.host")
        'localhost'
        >>> handle.store("db.host", "db.internal")
        >>> handle.retrieve("db.host")
        'db.internal'
    """
    registry = PrioritizedSources(write_strategy=settings.write_strategy)
    registry.add_source(MemoryConfigurationSource(), RUNTIME_PRIORITY)
    registry.add_source(LayeredConfigSource(config), LAYERED_PRIORITY)
    logger.debug(
        "Built registry with write strategy [%s], cache enabled [%s]",
        settings.write_strategy.value,
        settings.cache.enabled,
    )
    if not settings.cache.enabled:
        return registry
    return _wrap_in_cache(registry, settings.cache)


if TYPE_CHECKING:
    _assert_build_configuration: BuildConfiguration = build_configuration


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    init_logging: InitLogging
    load_sources_settings: LoadSourcesSettings
    build_configuration: BuildConfiguration

    def configuration(self, config: Config) -> ConfigurationSource:
        """Build the source registry for an already-loaded ``config``."""
        return self.build_configuration(config, self.load_sources_settings(config))


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        init_logging=init_logging,
        load_sources_settings=load_sources_settings,
        build_configuration=build_configuration,
    )


def build_testing() -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Registry assembly is pure domain wiring and stays the production one.
    """
    from ..adapters.memory import (
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
    )

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        init_logging=init_logging_in_memory,
        load_sources_settings=load_sources_settings,
        build_configuration=build_configuration,
    )


@lru_cache(maxsize=1)
def get_default_configuration() -> ConfigurationSource:
    """Return the process-wide default configuration handle.

    Built on first use from the merged layered configuration and reused
    afterwards. ``get_default_configuration.cache_clear()`` discards it so the
    next call rebuilds from freshly loaded layers.

    Raises:
        ConfigurationError: The ``[confstack]`` section is invalid.
    """
    services = build_production()
    return services.configuration(services.get_config())


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    "load_sources_settings",
    # Logging
    "init_logging",
    # Registry
    "LAYERED_PRIORITY",
    "RUNTIME_PRIORITY",
    "build_configuration",
    "get_default_configuration",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
