"""CLI subcommands registered on the root group."""

from __future__ import annotations

from .info import cli_info
from .resolve import cli_get, cli_sources, describe_configuration

__all__ = [
    "cli_get",
    "cli_info",
    "cli_sources",
    "describe_configuration",
]
