"""Type-safe domain enums for write strategies, eviction, and output formats."""

from __future__ import annotations

from enum import Enum


class WriteStrategy(str, Enum):
    """Policy selecting which writable sources receive a ``store`` call.

    Inherits from str so values read from configuration files compare
    directly against members.

    Attributes:
        ALL: Every writable source is written to.
        HIGHEST: Only the writable source with the lowest priority value.
        LOWEST: Only the writable source with the highest priority value.

    Example:
        >>> WriteStrategy("highest") is WriteStrategy.HIGHEST
        True
        >>> WriteStrategy.ALL == "all"
        True
    """

    ALL = "all"
    HIGHEST = "highest"
    LOWEST = "lowest"


class EvictionPolicy(str, Enum):
    """Victim selection used by a full cache when a new key is admitted.

    Attributes:
        LFU: Least frequently used (fewest hits, then least recently used).
        LRU: Least recently used.
        FIFO: Oldest insertion.

    Example:
        >>> EvictionPolicy.LFU.value
        'lfu'
    """

    LFU = "lfu"
    LRU = "lru"
    FIFO = "fifo"


class OutputFormat(str, Enum):
    """Output format options for the ``sources`` command.

    Example:
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "EvictionPolicy",
    "OutputFormat",
    "WriteStrategy",
]
