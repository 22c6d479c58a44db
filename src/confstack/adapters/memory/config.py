"""In-memory configuration adapters for testing.

Provide functions that satisfy the same Protocols as the production
adapters but never touch the filesystem.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from lib_layered_config import Config


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def get_default_config_path_in_memory() -> Path:
    """Return a synthetic path (not a real file)."""
    return Path(tempfile.gettempdir()) / "confstack" / "defaultconfig.toml"


__all__ = [
    "get_config_in_memory",
    "get_default_config_path_in_memory",
]
