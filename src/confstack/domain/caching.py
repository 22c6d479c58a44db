"""Caching decorators memoizing lookups of a wrapped source.

Contents:
    * :class:`CachingConfigurationSource` - read-through cache, drop-on-write.
    * :class:`ReloadingCachingConfigurationSource` - read-through cache that
      reloads the written key right after a store.

System Role:
    The decorator's read/write lock orders its own cache against calls into
    the wrapped source. A store holds the write lock across both the
    delegated store and the invalidation, so no concurrent lookup can put a
    pre-write value back into the cache in between. The wrapped source keeps
    its own locking; the two locks are never held as one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .cache import ExpiringMemoryCache
from .locking import ReadWriteLock
from .sources import ConfigurationSource, WritableConfigurationSource

if TYPE_CHECKING:
    from ..application.ports import ExpiringCache

logger = logging.getLogger(__name__)


class CachingConfigurationSource(WritableConfigurationSource):
    """Serve lookups from an expiring cache, loading misses from ``source``.

    Absent results (``None``) are not cached, so a key that appears in the
    wrapped source later is seen on the next lookup. Blank strings are
    cached like any other value. Storing through a wrapped source that is
    not writable does nothing. A store invalidates its key even when the
    wrapped store raises, since some sources may already hold the new value.

    Args:
        source: The source whose lookups are memoized.
        cache: Any cache satisfying the ``ExpiringCache`` port. A fresh
            :class:`ExpiringMemoryCache` with default settings when omitted.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> backing = MemoryConfigurationSource({"k": "v1"})
        >>> cached = CachingConfigurationSource(backing)
        >>> cached.retrieve("k")
        'v1'
        >>> backing.store("k", "changed behind the cache")
        >>> cached.retrieve("k")
        'v1'
        >>> cached.store("k", "v2")
        >>> cached.retrieve("k")
        'v2'
    """

    def __init__(self, source: ConfigurationSource, cache: ExpiringCache | None = None) -> None:
        super().__init__()
        self._source = source
        self._cache: ExpiringCache = cache if cache is not None else ExpiringMemoryCache(name=str(self.uuid))
        self._lock = ReadWriteLock()

    @property
    def source(self) -> ConfigurationSource:
        return self._source

    @property
    def cache(self) -> ExpiringCache:
        return self._cache

    def retrieve(self, key: str) -> str | None:
        with self._lock.read_locked():
            value = self._cache.recover(key)
            if value is not None:
                return value
            value = self._source.retrieve(key)
            if value is not None:
                self._cache.admit(key, value)
            logger.debug("Cache miss for key [%s], loaded from %r", key, self._source)
            return value

    def store(self, key: str, value: str) -> None:
        if not isinstance(self._source, WritableConfigurationSource):
            logger.debug("Wrapped %r is not writable, store of key [%s] skipped", self._source, key)
            return
        with self._lock.write_locked():
            try:
                self._source.store(key, value)
            finally:
                self._cache.remove(key)
            self._after_store(key)

    def invalidate(self, key: str) -> None:
        """Drop the cached value for ``key`` so the next lookup reloads it."""
        with self._lock.write_locked():
            self._cache.remove(key)

    def invalidate_all(self) -> None:
        """Drop every cached value."""
        with self._lock.write_locked():
            self._cache.clear()

    def _after_store(self, key: str) -> None:
        """Hook run after invalidation while the write lock is still held."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uuid={self.uuid}, source={self._source!r})"


class ReloadingCachingConfigurationSource(CachingConfigurationSource):
    """Caching decorator that refreshes a key from the source after storing it.

    Readers observe the same values as with :class:`CachingConfigurationSource`;
    the difference is only that the first lookup after a store is a cache hit.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> cached = ReloadingCachingConfigurationSource(MemoryConfigurationSource())
        >>> cached.store("k", "v")
        >>> cached.cache.size()
        1
    """

    def _after_store(self, key: str) -> None:
        value = self._source.retrieve(key)
        if value is not None:
            self._cache.admit(key, value)


__all__ = [
    "CachingConfigurationSource",
    "ReloadingCachingConfigurationSource",
]
