"""Public package surface: sources, the priority registry, and caching.

Imports are routed through the architectural layers:
- Domain exports: source interfaces, registry, write strategies, caches
- Composition exports: the lazily-built default configuration
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports (concrete sources)
from .adapters.config import LayeredConfigSource
from .adapters.memory import MemoryConfigurationSource

# Composition exports (wired adapters)
from .composition import build_configuration, get_config, get_default_configuration

# Domain exports
from .domain import (
    BlankKeyError,
    CacheConfigurationError,
    CachingConfigurationSource,
    ConfigurationError,
    ConfigurationSource,
    EvictionPolicy,
    ExpiringMemoryCache,
    LockedConfigurationSource,
    PartialWriteError,
    PrioritizedSource,
    PrioritizedSources,
    ReloadingCachingConfigurationSource,
    ThreadSafeConfigurationSource,
    WritableConfigurationSource,
    WriteStrategy,
)

__all__ = [
    "BlankKeyError",
    "CacheConfigurationError",
    "CachingConfigurationSource",
    "ConfigurationError",
    "ConfigurationSource",
    "EvictionPolicy",
    "ExpiringMemoryCache",
    "LayeredConfigSource",
    "LockedConfigurationSource",
    "MemoryConfigurationSource",
    "PartialWriteError",
    "PrioritizedSource",
    "PrioritizedSources",
    "ReloadingCachingConfigurationSource",
    "ThreadSafeConfigurationSource",
    "WritableConfigurationSource",
    "WriteStrategy",
    "build_configuration",
    "get_config",
    "get_default_configuration",
    "print_info",
]
