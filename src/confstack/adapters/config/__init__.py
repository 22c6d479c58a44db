"""Configuration adapters.

Contents:
    * :mod:`.loader` - layered configuration loading via lib_layered_config.
    * :mod:`.settings` - validated ``[confstack]`` settings.
    * :mod:`.layered_source` - the loaded configuration as a read-only source.
"""

from __future__ import annotations

from .layered_source import LayeredConfigSource
from .loader import get_config, get_default_config_path
from .settings import (
    CacheSettings,
    SourcesSettings,
    load_sources_settings,
    load_sources_settings_from_dict,
)

__all__ = [
    "CacheSettings",
    "LayeredConfigSource",
    "SourcesSettings",
    "get_config",
    "get_default_config_path",
    "load_sources_settings",
    "load_sources_settings_from_dict",
]
