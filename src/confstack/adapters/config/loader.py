"""Layered configuration loading with per-profile caching."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from confstack import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Config loader exposing the ``cache_clear`` hook of its memoized core."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Path of the ``defaultconfig.toml`` bundled next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=4)
def _read_layers(profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged configuration: defaults → app → host → user → dotenv → env.

    Each ``(profile, start_dir)`` combination is read once per process.
    Call ``get_config.cache_clear()`` to force the next call to re-read the
    layers, e.g. after a configuration file changed.

    Args:
        profile: Optional profile name inserting a ``profile/<name>/``
            directory into every configuration path.
        start_dir: Directory seeding ``.env`` discovery; the working
            directory when omitted.

    Raises:
        ValueError: ``profile`` is empty, too long, or contains path
            separators or other characters lib_layered_config rejects.

    Example:
        >>> config = get_config()
        >>> isinstance(config.as_dict(), dict)
        True
    """
    if profile is not None:
        validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH)
    return _read_layers(profile, start_dir)


_get_config.cache_clear = _read_layers.cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
]
