"""In-memory adapter implementations.

Lightweight implementations of the application ports that operate
entirely in memory -- no filesystem, no logging framework -- plus the
dict-backed source used for runtime values.

Contents:
    * :mod:`.source` - Dict-backed writable source
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import get_config_in_memory, get_default_config_path_in_memory
from .logging import init_logging_in_memory
from .source import MemoryConfigurationSource

# Static conformance assertions
if TYPE_CHECKING:
    from confstack.application.ports import GetConfig, GetDefaultConfigPath, InitLogging

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "MemoryConfigurationSource",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
]
