"""Per-invocation CLI state and the shared traceback switches.

The root group stores a :class:`CLIContext` on ``ctx.obj``; subcommands read
it back with :func:`get_cli_context`. Traceback output is governed by two
process-wide flags on ``lib_cli_exit_tools.config``, which :func:`main`
snapshots before a run and restores afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

from confstack.domain.sources import ConfigurationSource

if TYPE_CHECKING:
    from confstack.composition import AppServices


class TracebackState(NamedTuple):
    """Both traceback flags of ``lib_cli_exit_tools.config`` at one moment."""

    enabled: bool
    force_color: bool


@dataclass(slots=True)
class CLIContext:
    """Loaded configuration and services shared by every subcommand.

    The source registry is assembled on first use, so commands that never
    resolve keys (``info``) do not validate the ``[confstack]`` section.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    _configuration: ConfigurationSource | None = field(default=None, repr=False)

    def configuration(self) -> ConfigurationSource:
        """Return the source registry built from :attr:`config`, building it once.

        Raises:
            ConfigurationError: The ``[confstack]`` section is invalid.
        """
        if self._configuration is None:
            self._configuration = self.services.configuration(self.config)
        return self._configuration


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
) -> None:
    """Attach a fresh :class:`CLIContext` to ``ctx.obj``.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from confstack.composition import build_testing
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=True, config=MagicMock(), services=build_testing(), profile="test")
        >>> ctx.obj.traceback, ctx.obj.profile
        (True, 'test')
    """
    ctx.obj = CLIContext(traceback=traceback, config=config, services=services, profile=profile)


def get_cli_context(ctx: click.Context) -> CLIContext:
    if isinstance(ctx.obj, CLIContext):
        return ctx.obj
    raise RuntimeError("CLI context not initialized. Call store_cli_context first.")


def apply_traceback_preferences(enabled: bool) -> None:
    """Turn full (coloured) tracebacks on or off for the error handler.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
        >>> apply_traceback_preferences(False)
    """
    restore_traceback_state(TracebackState(bool(enabled), bool(enabled)))


def snapshot_traceback_state() -> TracebackState:
    config = lib_cli_exit_tools.config
    return TracebackState(
        enabled=bool(getattr(config, "traceback", False)),
        force_color=bool(getattr(config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Write a captured :class:`TracebackState` back to the shared config.

    Example:
        >>> before = snapshot_traceback_state()
        >>> apply_traceback_preferences(True)
        >>> restore_traceback_state(before)
        >>> snapshot_traceback_state() == before
        True
    """
    lib_cli_exit_tools.config.traceback = state.enabled
    lib_cli_exit_tools.config.traceback_force_color = state.force_color


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
