"""Dictionary-backed configuration source."""

from __future__ import annotations

from collections.abc import Mapping

from ...domain.sources import LockedConfigurationSource


class MemoryConfigurationSource(LockedConfigurationSource):
    """Writable source keeping its values in a process-local dict.

    Used for runtime values in the default registry and as the stand-in
    source throughout the test suite.

    Example:
        >>> source = MemoryConfigurationSource({"greeting": "hello"})
        >>> source.retrieve("greeting"), source.retrieve("missing")
        ('hello', None)
        >>> source.store("missing", "found")
        >>> source.retrieve("missing")
        'found'
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._values: dict[str, str] = dict(initial or {})

    def snapshot(self) -> dict[str, str]:
        """Copy of the current values."""
        with self._lock.read_locked():
            return dict(self._values)

    def _retrieve(self, key: str) -> str | None:
        return self._values.get(key)

    def _store(self, key: str, value: str) -> None:
        self._values[key] = value


__all__ = ["MemoryConfigurationSource"]
