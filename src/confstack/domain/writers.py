"""Write strategies fanning a ``store`` out to registered sources.

Contents:
    * :class:`SourcesWriter` - key validation and writable-source selection.
    * :class:`AllSourcesWriter` - writes to every writable source.
    * :class:`PrioritizedSourcesWriter` - writes to one source chosen by priority.
    * :func:`writer_for` - maps a :class:`WriteStrategy` to its writer.

System Role:
    Pure policy objects used by the registry while it holds its write lock.
    They receive the registry's entries already ordered by
    ``(priority, sequence)`` and never mutate that sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .enums import WriteStrategy
from .errors import BlankKeyError, PartialWriteError
from .prioritized import PrioritizedSource
from .sources import ConfigurationSource, WritableConfigurationSource, is_blank

logger = logging.getLogger(__name__)


class SourcesWriter:
    """Base writer: rejects blank keys, then stores into the selected sources.

    Subclasses narrow the selection by overriding :meth:`select`.
    """

    def select(self, writable: list[WritableConfigurationSource]) -> list[WritableConfigurationSource]:
        """Choose which writable sources receive the value. Defaults to all."""
        return writable

    def collect_writable(self, sources: Sequence[PrioritizedSource]) -> list[WritableConfigurationSource]:
        """Return the writable sources in ``sources``, keeping their order."""
        return [entry.source for entry in sources if isinstance(entry.source, WritableConfigurationSource)]

    def store(self, key: str, value: str, sources: Sequence[PrioritizedSource]) -> None:
        """Store ``key``/``value`` into the selected writable sources.

        Every selected source is attempted even when an earlier one fails.

        Raises:
            BlankKeyError: ``key`` is blank; nothing is written.
            PartialWriteError: At least one selected source raised.
        """
        if is_blank(key):
            raise BlankKeyError("Key of configuration entry is not allowed to be blank.")
        targets = self.select(self.collect_writable(sources))
        if not targets:
            logger.debug("No writable source selected for key [%s], store skipped", key)
            return
        failures: list[tuple[ConfigurationSource, Exception]] = []
        for target in targets:
            try:
                target.store(key, value)
            except Exception as exc:
                logger.debug("Store of key [%s] into %r failed: %s", key, target, exc)
                failures.append((target, exc))
        if failures:
            raise PartialWriteError(key, failures) from failures[0][1]


class AllSourcesWriter(SourcesWriter):
    """Store into every writable source.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> a, b = MemoryConfigurationSource(), MemoryConfigurationSource()
        >>> entries = [PrioritizedSource(a, 0), PrioritizedSource(b, 1)]
        >>> AllSourcesWriter().store("k", "v", entries)
        >>> a.retrieve("k"), b.retrieve("k")
        ('v', 'v')
    """


class PrioritizedSourcesWriter(SourcesWriter):
    """Store into the first writable source in priority order.

    With ``descending=False`` that is the writable source with the lowest
    priority value (HIGHEST strategy); with ``descending=True`` the order is
    reversed and the highest priority value wins (LOWEST strategy). Ties
    follow registration order, reversed along with the priorities.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> a, b = MemoryConfigurationSource(), MemoryConfigurationSource()
        >>> entries = [PrioritizedSource(a, 0), PrioritizedSource(b, 1)]
        >>> PrioritizedSourcesWriter(descending=True).store("k", "v", entries)
        >>> a.retrieve("k"), b.retrieve("k")
        (None, 'v')
    """

    def __init__(self, *, descending: bool = False) -> None:
        self._descending = descending

    @property
    def descending(self) -> bool:
        return self._descending

    def select(self, writable: list[WritableConfigurationSource]) -> list[WritableConfigurationSource]:
        if not writable:
            return []
        return [writable[-1]] if self._descending else [writable[0]]


ALL_WRITER = AllSourcesWriter()
HIGHEST_WRITER = PrioritizedSourcesWriter(descending=False)
LOWEST_WRITER = PrioritizedSourcesWriter(descending=True)

_WRITERS: dict[WriteStrategy, SourcesWriter] = {
    WriteStrategy.ALL: ALL_WRITER,
    WriteStrategy.HIGHEST: HIGHEST_WRITER,
    WriteStrategy.LOWEST: LOWEST_WRITER,
}


def writer_for(strategy: WriteStrategy | str) -> SourcesWriter:
    """Return the shared writer implementing ``strategy``.

    Raises:
        ValueError: ``strategy`` names no known write strategy.

    Example:
        >>> writer_for("lowest").descending
        True
    """
    return _WRITERS[WriteStrategy(strategy)]


__all__ = [
    "ALL_WRITER",
    "AllSourcesWriter",
    "HIGHEST_WRITER",
    "LOWEST_WRITER",
    "PrioritizedSourcesWriter",
    "SourcesWriter",
    "writer_for",
]
