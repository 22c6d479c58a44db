"""Memory-only key/value cache with time-to-live and time-to-idle expiry.

Contents:
    * :class:`CacheEntry` - a cached value with its timestamps and hit count.
    * :class:`ExpiringMemoryCache` - bounded cache with lazy expiry and
      policy-driven eviction.

System Role:
    Default implementation of the ``ExpiringCache`` port consumed by the
    caching decorators. Expiry is checked on every access, so correctness
    never depends on :meth:`ExpiringMemoryCache.cleanup` having run.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .enums import EvictionPolicy
from .errors import CacheConfigurationError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

MINUTE_SECONDS = 60
DEFAULT_TIME_TO_LIVE = MINUTE_SECONDS * 5
DEFAULT_TIME_TO_IDLE = MINUTE_SECONDS * 5
DEFAULT_MAX_ENTRIES = 25


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    """A cached value and the bookkeeping the expiry and eviction rules need."""

    value: V
    inserted_at: float
    last_accessed_at: float
    hits: int = 0

    def expired(self, now: float, time_to_live: float, time_to_idle: float) -> bool:
        """Whether either enabled timer has been exceeded at ``now``.

        A timer set to ``0`` never expires the entry.

        Example:
            >>> entry = CacheEntry("v", inserted_at=0.0, last_accessed_at=5.0)
            >>> entry.expired(8.0, time_to_live=10, time_to_idle=2)
            True
            >>> entry.expired(6.0, time_to_live=10, time_to_idle=2)
            False
            >>> entry.expired(1000.0, time_to_live=0, time_to_idle=0)
            False
        """
        if time_to_live and now - self.inserted_at > time_to_live:
            return True
        return bool(time_to_idle and now - self.last_accessed_at > time_to_idle)


def _validate(time_to_live: float, time_to_idle: float, max_entries: int) -> None:
    if time_to_live < 0:
        raise CacheConfigurationError(f"time_to_live must be >= 0, got {time_to_live}")
    if time_to_idle < 0:
        raise CacheConfigurationError(f"time_to_idle must be >= 0, got {time_to_idle}")
    if max_entries < 1:
        raise CacheConfigurationError(f"max_entries must be >= 1, got {max_entries}")


class ExpiringMemoryCache(Generic[K, V]):
    """Bounded in-memory cache whose entries expire by age and by idleness.

    An entry is recoverable while it is younger than ``time_to_live`` and was
    last read less than ``time_to_idle`` seconds ago. Reading an entry
    refreshes its idle timer and counts a hit. When the cache is full,
    admitting a new key evicts exactly one entry: an expired one if there is
    any, otherwise the victim chosen by ``eviction_policy``.

    Args:
        time_to_live: Maximum entry age in seconds; ``0`` disables it.
        time_to_idle: Maximum seconds since last access; ``0`` disables it.
        max_entries: Capacity, at least 1.
        eviction_policy: Victim selection when full.
        name: Identifier used in logs; a random one is generated if omitted.
        clock: Monotonic time source in seconds.

    Raises:
        CacheConfigurationError: A timer is negative or ``max_entries`` < 1.

    Example:
        >>> now = [0.0]
        >>> cache = ExpiringMemoryCache(time_to_live=10, time_to_idle=0, max_entries=2, clock=lambda: now[0])
        >>> cache.admit("a", "1")
        >>> cache.recover("a")
        '1'
        >>> now[0] = 11.0
        >>> cache.recover("a") is None
        True
    """

    def __init__(
        self,
        time_to_live: float = DEFAULT_TIME_TO_LIVE,
        time_to_idle: float = DEFAULT_TIME_TO_IDLE,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        eviction_policy: EvictionPolicy | str = EvictionPolicy.LFU,
        *,
        name: str | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        _validate(time_to_live, time_to_idle, max_entries)
        try:
            policy = EvictionPolicy(eviction_policy)
        except ValueError as exc:
            raise CacheConfigurationError(f"Unknown eviction policy: {eviction_policy!r}") from exc
        self._time_to_live = time_to_live
        self._time_to_idle = time_to_idle
        self._max_entries = max_entries
        self._eviction_policy = policy
        self._name = name or f"ExpiringMemoryCache({uuid.uuid4()})"
        self._clock = clock if clock is not None else time.monotonic
        self._entries: dict[K, CacheEntry[V]] = {}
        self._mutex = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def time_to_live(self) -> float:
        return self._time_to_live

    @property
    def time_to_idle(self) -> float:
        return self._time_to_idle

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def eviction_policy(self) -> EvictionPolicy:
        return self._eviction_policy

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        with self._mutex:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def is_empty(self) -> bool:
        return self.size() == 0

    def admit(self, key: K, value: V) -> None:
        """Insert or overwrite ``key``, evicting one entry if the cache is full."""
        with self._mutex:
            now = self._clock()
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._evict_one(now)
            self._entries[key] = CacheEntry(value, inserted_at=now, last_accessed_at=now)

    def recover(self, key: K) -> V | None:
        """Return the value for ``key`` or ``None`` if missing or expired.

        Expired entries found here are removed on the spot.
        """
        with self._mutex:
            entry = self._entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            if entry.expired(now, self._time_to_live, self._time_to_idle):
                del self._entries[key]
                return None
            entry.last_accessed_at = now
            entry.hits += 1
            return entry.value

    def contains(self, key: K) -> bool:
        """Whether ``key`` is recoverable, without touching its timers or hits."""
        with self._mutex:
            entry = self._entries.get(key)
            return entry is not None and not entry.expired(self._clock(), self._time_to_live, self._time_to_idle)

    def remove(self, key: K) -> None:
        """Drop ``key``; unknown keys are ignored."""
        with self._mutex:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._mutex:
            self._entries.clear()

    def cleanup(self) -> int:
        """Evict every expired entry now and return how many were removed."""
        with self._mutex:
            now = self._clock()
            expired = [
                key
                for key, entry in self._entries.items()
                if entry.expired(now, self._time_to_live, self._time_to_idle)
            ]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Cache [%s] swept %d expired entries", self._name, len(expired))
        return len(expired)

    def _evict_one(self, now: float) -> None:
        victim = next(
            (
                key
                for key, entry in self._entries.items()
                if entry.expired(now, self._time_to_live, self._time_to_idle)
            ),
            None,
        )
        if victim is None:
            victim = min(self._entries, key=self._victim_rank)
        logger.debug("Cache [%s] full (%d entries), evicting [%s]", self._name, self._max_entries, victim)
        del self._entries[victim]

    def _victim_rank(self, key: K) -> tuple[float, ...]:
        entry = self._entries[key]
        if self._eviction_policy is EvictionPolicy.LFU:
            return (entry.hits, entry.last_accessed_at)
        if self._eviction_policy is EvictionPolicy.LRU:
            return (entry.last_accessed_at,)
        return (entry.inserted_at,)

    def __repr__(self) -> str:
        return (
            f"ExpiringMemoryCache(name={self._name!r}, time_to_live={self._time_to_live}, "
            f"time_to_idle={self._time_to_idle}, max_entries={self._max_entries}, "
            f"eviction_policy={self._eviction_policy.value!r})"
        )


__all__ = [
    "CacheEntry",
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_TIME_TO_IDLE",
    "DEFAULT_TIME_TO_LIVE",
    "ExpiringMemoryCache",
]
