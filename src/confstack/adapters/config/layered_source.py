"""Read-only source over a merged lib_layered_config ``Config``."""

from __future__ import annotations

from collections.abc import Mapping

from lib_layered_config import Config

from ...domain.sources import ConfigurationSource


def _render(value: object) -> str | None:
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class LayeredConfigSource(ConfigurationSource):
    """Expose the scalar leaves of a layered configuration as a source.

    Keys use dotted paths (``section.subsection.key``). Booleans render as
    ``true``/``false``, other scalars through ``str``. Tables and arrays
    are not single values and read as absent.

    Example:
        >>> config = Config({"db": {"port": 5432, "debug": True, "hosts": ["a"]}}, {})
        >>> source = LayeredConfigSource(config)
        >>> source.retrieve("db.port"), source.retrieve("db.debug")
        ('5432', 'true')
        >>> source.retrieve("db") is None, source.retrieve("db.hosts") is None
        (True, True)
    """

    def __init__(self, config: Config) -> None:
        super().__init__()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    def retrieve(self, key: str) -> str | None:
        return _render(self._config.get(key, default=None))


__all__ = ["LayeredConfigSource"]
