"""Static package metadata surfaced to CLI commands and documentation.

Values are kept in sync with ``pyproject.toml``; ``version`` is rewritten on
release. The ``LAYEREDCONF_*`` constants select the lib_layered_config
directories (``/etc/xdg/confstack``, ``~/.config/confstack`` and friends).
"""

from __future__ import annotations

name = "confstack"
title = "Prioritized configuration sources with expiring caches"
version = "1.0.0"
homepage = "https://github.com/confstack/confstack"
author = "confstack contributors"
author_email = "confstack@users.noreply.github.com"
shell_command = "confstack"

LAYEREDCONF_VENDOR = "confstack"
LAYEREDCONF_APP = "confstack"
LAYEREDCONF_SLUG = "confstack"


def info_lines() -> tuple[str, ...]:
    """Return the metadata block printed by ``confstack info``.

    Example:
        >>> info_lines()[0]
        'Info for confstack:'
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    return (f"Info for {name}:", "", *(f"    {label.ljust(pad)} = {value}" for label, value in fields))


def print_info() -> None:
    """Print the package metadata block."""
    print("\n".join(info_lines()))


__all__ = ["info_lines", "print_info"]
