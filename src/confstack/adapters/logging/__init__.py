"""Logging adapter built on lib_log_rich."""

from __future__ import annotations

from .setup import LoggingConfigModel, init_logging

__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
