"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sources import ConfigurationSource


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete application settings.

    Raised when the ``[confstack]`` configuration section cannot be turned
    into valid settings. Typically caught at the CLI boundary.

    Example:
        >>> err = ConfigurationError("max_entries must be >= 1")
        >>> str(err)
        'max_entries must be >= 1'
    """


class BlankKeyError(ValueError):
    """A blank or empty key was passed to a write operation.

    Raised before any source is written to, so a rejected call never
    leaves a partial write behind.

    Example:
        >>> isinstance(BlankKeyError("key is blank"), ValueError)
        True
    """


class CacheConfigurationError(ValueError):
    """An expiring cache was constructed with unusable settings.

    Example:
        >>> str(CacheConfigurationError("max_entries must be >= 1, got 0"))
        'max_entries must be >= 1, got 0'
    """


class PartialWriteError(Exception):
    """One or more sources failed while a value was fanned out to them.

    Every selected source is attempted; the failures are collected and
    raised together once the fan-out is complete. Sources that succeeded
    keep the new value, nothing is rolled back.

    Attributes:
        key: The key that was being stored.
        failures: ``(source, exception)`` pairs in the order they occurred.

    Example:
        >>> err = PartialWriteError("db.url", [])
        >>> err.key
        'db.url'
        >>> err.failures
        ()
    """

    def __init__(self, key: str, failures: list[tuple[ConfigurationSource, Exception]]) -> None:
        self.key = key
        self.failures: tuple[tuple[ConfigurationSource, Exception], ...] = tuple(failures)
        super().__init__(f"Storing key [{key}] failed in {len(self.failures)} source(s)")


__all__ = [
    "BlankKeyError",
    "CacheConfigurationError",
    "ConfigurationError",
    "PartialWriteError",
]
