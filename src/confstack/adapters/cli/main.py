"""CLI entry point and error boundary.

Contents:
    * :func:`main` - Run the command group and return a POSIX exit code.

A ``SystemExit`` raised by a command passes its status through unprinted.
Domain errors that escape a command are reported as one ``Error:`` line and
mapped to their :class:`ExitCode`. Anything else is formatted by
``lib_cli_exit_tools``, honouring ``--traceback``.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from confstack import __init__conf__
from confstack.domain.errors import BlankKeyError, CacheConfigurationError, ConfigurationError, PartialWriteError

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import apply_traceback_preferences, restore_traceback_state, snapshot_traceback_state
from .exit_codes import ExitCode

if TYPE_CHECKING:
    from confstack.composition import AppServices

#: Domain errors reported without a traceback, first match wins.
DOMAIN_EXIT_CODES: tuple[tuple[type[Exception], ExitCode], ...] = (
    (ConfigurationError, ExitCode.CONFIG_ERROR),
    (CacheConfigurationError, ExitCode.CONFIG_ERROR),
    (BlankKeyError, ExitCode.INVALID_ARGUMENT),
    (PartialWriteError, ExitCode.GENERAL_ERROR),
)


def exit_code_for(exc: BaseException) -> int:
    """Map an exception escaping a command to its exit code.

    Example:
        >>> exit_code_for(ConfigurationError("bad")) == ExitCode.CONFIG_ERROR
        True
        >>> exit_code_for(SystemExit(3))
        3
    """
    for error_type, code in DOMAIN_EXIT_CODES:
        if isinstance(exc, error_type):
            return int(code)
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _report(exc: BaseException) -> int:
    tracebacks_enabled = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
    apply_traceback_preferences(tracebacks_enabled)
    is_domain_error = isinstance(exc, tuple(error_type for error_type, _ in DOMAIN_EXIT_CODES))
    if is_domain_error and not tracebacks_enabled:
        click.echo(f"Error: {exc}", err=True)
    else:
        length_limit = TRACEBACK_VERBOSE_LIMIT if tracebacks_enabled else TRACEBACK_SUMMARY_LIMIT
        lib_cli_exit_tools.print_exception_message(trace_back=tracebacks_enabled, length_limit=length_limit)
    return exit_code_for(exc)


def _exit_status(exc: SystemExit) -> int:
    """Return the status a command requested with ``SystemExit``.

    Commands report their own message before exiting, so nothing is printed
    here apart from a string status.

    Example:
        >>> _exit_status(SystemExit(ExitCode.KEY_NOT_FOUND))
        2
        >>> _exit_status(SystemExit())
        0
    """
    if exc.code is None:
        return int(ExitCode.SUCCESS)
    if isinstance(exc.code, int):
        return int(exc.code)
    click.echo(str(exc.code), err=True)
    return int(ExitCode.GENERAL_ERROR)


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    from .root import cli

    # lib_cli_exit_tools.run_cli cannot pass ``obj``, so the group is driven directly.
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except SystemExit as exc:
        return _exit_status(exc)
    except BaseException as exc:  # KeyboardInterrupt ends up here too
        return _report(exc)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Execute the CLI and return its exit code.

    Args:
        argv: CLI arguments; ``sys.argv`` when None.
        restore_traceback: Restore the prior traceback configuration afterwards.
        services_factory: Factory returning AppServices. Callers outside the
            adapters layer pass ``build_production``.

    Raises:
        ValueError: ``services_factory`` was not provided.

    Example:
        >>> from confstack.composition import build_testing
        >>> main(["--help"], services_factory=build_testing)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        # Shutting down from a worker thread would end logging for the others.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["DOMAIN_EXIT_CODES", "exit_code_for", "main"]
