"""Priority metadata attached to a registered source."""

from __future__ import annotations

import uuid as uuid_module

from .sources import ConfigurationSource, WritableConfigurationSource


class PrioritizedSource(ConfigurationSource):
    """A source registered in a registry at a given priority.

    Lower ``priority`` values are consulted first. ``sequence`` records the
    order of registration and breaks ties between equal priorities. The
    wrapper's identity is the wrapped source's identity, so callers may hand
    either one to removal operations.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> inner = MemoryConfigurationSource({"k": "v"})
        >>> entry = PrioritizedSource(inner, priority=3, sequence=0)
        >>> entry.retrieve("k"), entry.sort_key, entry == inner
        ('v', (3, 0), True)
    """

    def __init__(self, source: ConfigurationSource, priority: int, sequence: int = 0) -> None:
        super().__init__()
        self._source = source
        self._priority = priority
        self._sequence = sequence

    @property
    def uuid(self) -> uuid_module.UUID:
        return self._source.uuid

    @property
    def source(self) -> ConfigurationSource:
        return self._source

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self._priority, self._sequence)

    @property
    def is_writable(self) -> bool:
        return isinstance(self._source, WritableConfigurationSource)

    def matches(self, source: ConfigurationSource) -> bool:
        """True when ``source`` is the wrapped source or shares its identity."""
        return source is self._source or source.uuid == self.uuid

    def retrieve(self, key: str) -> str | None:
        return self._source.retrieve(key)

    def __repr__(self) -> str:
        return f"PrioritizedSource(source={self._source!r}, priority={self._priority}, sequence={self._sequence})"


__all__ = ["PrioritizedSource"]
