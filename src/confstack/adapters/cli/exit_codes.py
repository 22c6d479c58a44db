"""POSIX-conventional exit codes for CLI error paths.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno conventions where applicable.

    * 0-1: generic success / failure
    * 2: requested key not found in any source (ENOENT)
    * 22: EINVAL
    * 78: EX_CONFIG (sysexits.h)

    Example:
        >>> int(ExitCode.KEY_NOT_FOUND)
        2
        >>> ExitCode.CONFIG_ERROR
        <ExitCode.CONFIG_ERROR: 78>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    KEY_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
