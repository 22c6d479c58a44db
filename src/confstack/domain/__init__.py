"""Domain layer - source resolution, write fan-out, and caching.

Pure Python with no I/O or framework dependencies.

Contents:
    * :mod:`.sources` - Source capability interfaces and locked bases
    * :mod:`.locking` - Reader/writer lock
    * :mod:`.prioritized` - Priority metadata for registered sources
    * :mod:`.writers` - Write strategies
    * :mod:`.registry` - Priority registry
    * :mod:`.cache` - Expiring memory cache
    * :mod:`.caching` - Caching decorators
    * :mod:`.enums` - Domain enumerations
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .cache import CacheEntry, ExpiringMemoryCache
from .caching import CachingConfigurationSource, ReloadingCachingConfigurationSource
from .enums import EvictionPolicy, OutputFormat, WriteStrategy
from .errors import BlankKeyError, CacheConfigurationError, ConfigurationError, PartialWriteError
from .locking import ReadWriteLock
from .prioritized import PrioritizedSource
from .registry import PrioritizedSources
from .sources import (
    ConfigurationSource,
    LockedConfigurationSource,
    ThreadSafeConfigurationSource,
    WritableConfigurationSource,
    is_blank,
)
from .writers import AllSourcesWriter, PrioritizedSourcesWriter, SourcesWriter, writer_for

__all__ = [
    # Sources
    "ConfigurationSource",
    "LockedConfigurationSource",
    "ThreadSafeConfigurationSource",
    "WritableConfigurationSource",
    "is_blank",
    # Registry
    "PrioritizedSource",
    "PrioritizedSources",
    "ReadWriteLock",
    # Writers
    "AllSourcesWriter",
    "PrioritizedSourcesWriter",
    "SourcesWriter",
    "writer_for",
    # Caching
    "CacheEntry",
    "CachingConfigurationSource",
    "ExpiringMemoryCache",
    "ReloadingCachingConfigurationSource",
    # Enums
    "EvictionPolicy",
    "OutputFormat",
    "WriteStrategy",
    # Errors
    "BlankKeyError",
    "CacheConfigurationError",
    "ConfigurationError",
    "PartialWriteError",
]
