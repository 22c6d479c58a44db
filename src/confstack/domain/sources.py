"""Source capability interfaces and the thread-safe source bases.

Contents:
    * :class:`ConfigurationSource` - readable capability with a stable identity.
    * :class:`WritableConfigurationSource` - extension adding ``store``.
    * :class:`LockedConfigurationSource` - template base serializing hooks
      behind a read/write lock.
    * :class:`ThreadSafeConfigurationSource` - locks an existing writable source.
    * :func:`is_blank` - absent/blank value test shared by all components.

System Role:
    Leaf of the domain layer. Whether a source is writable is decided by
    the interface it implements; write fan-out dispatches on that interface.
"""

from __future__ import annotations

import uuid as uuid_module
from abc import ABC, abstractmethod

from .locking import ReadWriteLock


def is_blank(value: str | None) -> bool:
    """Return True for ``None``, empty, or whitespace-only values.

    Example:
        >>> is_blank(None), is_blank(""), is_blank("  "), is_blank("x")
        (True, True, True, False)
    """
    return value is None or not value.strip()


class ConfigurationSource(ABC):
    """A provider of configuration values.

    Every source receives a random UUID at construction. Equality and
    hashing use that identifier, never the object reference, so wrappers
    that share an identity compare equal to the source they wrap.

    Example:
        >>> class Fixed(ConfigurationSource):
        ...     def retrieve(self, key: str) -> str | None:
        ...         return "fixed"
        >>> a, b = Fixed(), Fixed()
        >>> a == a, a == b
        (True, False)
    """

    def __init__(self) -> None:
        self._uuid = uuid_module.uuid4()

    @property
    def uuid(self) -> uuid_module.UUID:
        """Process-unique identifier of this source."""
        return self._uuid

    @abstractmethod
    def retrieve(self, key: str) -> str | None:
        """Return the value stored under ``key`` or ``None`` when absent."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigurationSource):
            return NotImplemented
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uuid={self.uuid})"


class WritableConfigurationSource(ConfigurationSource):
    """A source that also accepts new values."""

    @abstractmethod
    def store(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key`` in this source."""


class LockedConfigurationSource(WritableConfigurationSource):
    """Writable source whose hooks run under a read/write lock.

    Subclasses implement :meth:`_retrieve` and :meth:`_store`; the public
    methods acquire the shared lock for reads and the exclusive lock for
    writes before delegating.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = ReadWriteLock()

    def retrieve(self, key: str) -> str | None:
        with self._lock.read_locked():
            return self._retrieve(key)

    def store(self, key: str, value: str) -> None:
        with self._lock.write_locked():
            self._store(key, value)

    @abstractmethod
    def _retrieve(self, key: str) -> str | None:
        """Read hook, called while the read lock is held."""

    @abstractmethod
    def _store(self, key: str, value: str) -> None:
        """Write hook, called while the write lock is held."""


class ThreadSafeConfigurationSource(LockedConfigurationSource):
    """Serialize access to a writable source that is not thread-safe itself.

    The wrapper takes over the identity of its delegate, so registries treat
    the wrapper and the delegate as the same source.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> inner = MemoryConfigurationSource({"k": "v"})
        >>> safe = ThreadSafeConfigurationSource(inner)
        >>> safe.retrieve("k"), safe == inner
        ('v', True)
    """

    def __init__(self, delegate: WritableConfigurationSource) -> None:
        if delegate is None:
            raise ValueError("Delegate cannot be None.")
        super().__init__()
        self._delegate = delegate

    @property
    def uuid(self) -> uuid_module.UUID:
        return self._delegate.uuid

    @property
    def delegate(self) -> WritableConfigurationSource:
        return self._delegate

    def _retrieve(self, key: str) -> str | None:
        return self._delegate.retrieve(key)

    def _store(self, key: str, value: str) -> None:
        self._delegate.store(key, value)


__all__ = [
    "ConfigurationSource",
    "LockedConfigurationSource",
    "ThreadSafeConfigurationSource",
    "WritableConfigurationSource",
    "is_blank",
]
