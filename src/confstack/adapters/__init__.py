"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.config` - layered configuration loading and settings
    * :mod:`.memory` - in-memory sources and port implementations
    * :mod:`.logging` - logging setup with lib_log_rich
    * :mod:`.cli` - rich-click CLI
"""

from __future__ import annotations

__all__: list[str] = []
