"""Application layer - port definitions.

Contains the port protocols that define the interfaces for adapter
implementations and for caches consumed by the domain.

Contents:
    * :mod:`.ports` - Protocol definitions
"""

from __future__ import annotations

from .ports import (
    BuildConfiguration,
    ExpiringCache,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadSourcesSettings,
)

__all__ = [
    "BuildConfiguration",
    "ExpiringCache",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadSourcesSettings",
]
