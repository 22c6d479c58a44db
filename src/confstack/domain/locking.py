"""Reader/writer lock shared by every thread-safe component.

Contents:
    * :class:`ReadWriteLock` - many readers or one writer, writer-preferring.

System Role:
    The standard library only ships mutual-exclusion locks. Registries,
    decorators, and locked sources all need parallel readers with exclusive
    writers, so they share this one implementation.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Lock admitting many concurrent readers or a single writer.

    Writers waiting for the lock block newly arriving readers, so a steady
    stream of reads cannot starve a write. The lock is not reentrant: a
    thread holding it must not acquire it again.

    Example:
        >>> lock = ReadWriteLock()
        >>> with lock.read_locked():
        ...     lock.readers
        1
        >>> with lock.write_locked():
        ...     lock.writing
        True
        >>> lock.readers, lock.writing
        (0, False)
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """Number of threads currently holding the read lock."""
        return self._readers

    @property
    def writing(self) -> bool:
        """Whether a thread currently holds the write lock."""
        return self._writing

    def acquire_read(self) -> None:
        with self._condition:
            while self._writing or self._writers_waiting:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True

    def release_write(self) -> None:
        with self._condition:
            if not self._writing:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writing = False
            self._condition.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared lock for the duration of the ``with`` block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive lock for the duration of the ``with`` block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


__all__ = ["ReadWriteLock"]
