"""Priority registry resolving keys across an ordered set of sources.

Contents:
    * :class:`PrioritizedSources` - the registry; itself a writable source.

System Role:
    Core of the domain layer. One read/write lock guards both the ordered
    entries and their use: lookups share the lock, structural changes and
    stores hold it exclusively. Nested components (a caching decorator
    around a registry, or a registry inside a registry) each keep their own
    lock; no lock spans two components.
"""

from __future__ import annotations

import bisect
import itertools
import logging
from collections.abc import Iterator

from .enums import WriteStrategy
from .locking import ReadWriteLock
from .prioritized import PrioritizedSource
from .sources import ConfigurationSource, WritableConfigurationSource, is_blank
from .writers import SourcesWriter, writer_for

logger = logging.getLogger(__name__)


def _sort_key(entry: PrioritizedSource) -> tuple[int, int]:
    return entry.sort_key


class PrioritizedSources(WritableConfigurationSource):
    """Ordered set of sources consulted by ascending priority.

    Sources passed to the constructor are registered with their position as
    priority, so the first one takes precedence. Equal priorities resolve in
    registration order. The same source may be registered at several
    priorities; registering it twice at the same priority is a no-op.

    Args:
        *sources: Initial sources, highest precedence first.
        write_strategy: Policy applied by :meth:`store`. Fixed for the
            registry's lifetime.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> primary = MemoryConfigurationSource({"k": "a"})
        >>> fallback = MemoryConfigurationSource({"k": "b", "only": "b"})
        >>> registry = PrioritizedSources(primary, fallback)
        >>> registry.retrieve("k"), registry.retrieve("only"), registry.retrieve("none")
        ('a', 'b', None)
        >>> registry.remove_source(primary)
        >>> registry.retrieve("k")
        'b'
    """

    def __init__(
        self,
        *sources: ConfigurationSource,
        write_strategy: WriteStrategy | str = WriteStrategy.ALL,
    ) -> None:
        super().__init__()
        self._write_strategy = WriteStrategy(write_strategy)
        self._writer: SourcesWriter = writer_for(self._write_strategy)
        self._entries: list[PrioritizedSource] = []
        self._sequence = itertools.count()
        self._lock = ReadWriteLock()
        for priority, source in enumerate(sources):
            self.add_source(source, priority)

    @property
    def write_strategy(self) -> WriteStrategy:
        return self._write_strategy

    @property
    def sources(self) -> tuple[PrioritizedSource, ...]:
        """Snapshot of the registered entries in lookup order."""
        with self._lock.read_locked():
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def __iter__(self) -> Iterator[PrioritizedSource]:
        return iter(self.sources)

    def add_source(self, source: ConfigurationSource, priority: int) -> None:
        """Register ``source`` at ``priority`` (lower values are consulted first).

        ``source`` may be an entry taken from another registry; the source it
        wraps is registered, so its writability is preserved.
        """
        if isinstance(source, PrioritizedSource):
            source = source.source
        with self._lock.write_locked():
            for entry in self._entries:
                if entry.priority == priority and entry.matches(source):
                    logger.debug("%r already registered with priority [%d], ignoring", source, priority)
                    return
            entry = PrioritizedSource(source, priority, next(self._sequence))
            logger.debug("Adding %r to sources with priority of [%d]", source, priority)
            bisect.insort(self._entries, entry, key=_sort_key)

    def remove_source(self, source: ConfigurationSource) -> None:
        """Remove the first entry matching ``source`` by identity.

        ``source`` may be the registered source itself or a
        :class:`PrioritizedSource` wrapping it. Unknown sources are ignored.
        """
        with self._lock.write_locked():
            logger.debug("Searching configured sources for %r to be removed", source)
            for index, entry in enumerate(self._entries):
                if entry.matches(source):
                    logger.debug("Found %r with priority of [%d] and removing", entry.source, entry.priority)
                    del self._entries[index]
                    return

    def remove_all_sources(self) -> None:
        """Drop every registered source."""
        with self._lock.write_locked():
            self._entries.clear()

    def retrieve(self, key: str) -> str | None:
        """Return the first non-blank value for ``key`` in priority order.

        Returns:
            The value, or ``None`` when no source holds a non-blank value.
        """
        with self._lock.read_locked():
            for entry in self._entries:
                value = entry.retrieve(key)
                if not is_blank(value):
                    logger.debug("Key [%s] found in %r", key, entry.source)
                    return value
            logger.debug("Key [%s] not found in any of the configured sources", key)
            return None

    def store(self, key: str, value: str) -> None:
        """Fan ``key``/``value`` out according to the write strategy.

        Raises:
            BlankKeyError: ``key`` is blank; no source is written.
            PartialWriteError: One or more selected sources failed.
        """
        with self._lock.write_locked():
            self._writer.store(key, value, self._entries)


__all__ = ["PrioritizedSources"]
