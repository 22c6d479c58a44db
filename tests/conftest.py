"""Shared pytest fixtures for domain, adapter and CLI tests.

- All shared fixtures and test doubles live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from confstack.domain.sources import ConfigurationSource, WritableConfigurationSource

if TYPE_CHECKING:
    from confstack.composition import AppServices

_COVERAGE_BASENAME = ".coverage.confstack"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a local temp directory.

    Runs before ``pytest-cov`` creates its ``Coverage()`` object, so network
    mounted checkouts never host the SQLite file.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load a repository .env so integration runs can override configuration layers."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _remove_ansi_codes(text: str) -> str:
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ReadOnlySource(ConfigurationSource):
    """Readable-only source backed by a dict."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        super().__init__()
        self.values = dict(values or {})

    def retrieve(self, key: str) -> str | None:
        return self.values.get(key)


class CountingSource(WritableConfigurationSource):
    """Writable source recording every call made to it."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        super().__init__()
        self.values = dict(values or {})
        self.retrieve_calls: list[str] = []
        self.store_calls: list[tuple[str, str]] = []

    def retrieve(self, key: str) -> str | None:
        self.retrieve_calls.append(key)
        return self.values.get(key)

    def store(self, key: str, value: str) -> None:
        self.store_calls.append((key, value))
        self.values[key] = value


class FailingSource(WritableConfigurationSource):
    """Writable source whose store always raises."""

    def __init__(self, error: Exception | None = None) -> None:
        super().__init__()
        self.error = error if error is not None else OSError("disk full")
        self.attempts = 0

    def retrieve(self, key: str) -> str | None:
        return None

    def store(self, key: str, value: str) -> None:
        self.attempts += 1
        raise self.error


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock starting at t=1000s that only moves when told to."""
    return FakeClock()


@pytest.fixture
def counting_source() -> Callable[..., CountingSource]:
    """Return a factory creating call-recording writable sources."""

    def _factory(values: dict[str, str] | None = None) -> CountingSource:
        return CountingSource(values)

    return _factory


@pytest.fixture
def read_only_source() -> Callable[..., ReadOnlySource]:
    """Return a factory creating readable-only sources."""

    def _factory(values: dict[str, str] | None = None) -> ReadOnlySource:
        return ReadOnlySource(values)

    return _factory


@pytest.fixture
def failing_source() -> Callable[..., FailingSource]:
    """Return a factory creating sources whose store raises."""

    def _factory(error: Exception | None = None) -> FailingSource:
        return FailingSource(error)

    return _factory


# ---------------------------------------------------------------------------
# CLI fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g., JSON parsing) so log
    lines written to stderr never contaminate it.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from confstack.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config and default-configuration caches before the test.

    Only clears before, not after, to avoid errors when the function has
    been monkeypatched during the test.
    """
    from confstack.adapters.config import loader as config_mod
    from confstack.composition import get_default_configuration

    config_mod.get_config.cache_clear()
    get_default_configuration.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory serving the given config data.

    Only the I/O boundary is replaced: ``get_config`` returns the injected
    Config. Logging, settings validation and registry assembly run the
    production code.

    Example:
        def test_get(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"db": {"host": "localhost"}})
            result = cli_runner.invoke(cli, ["get", "db.host"], obj=factory)
            assert result.output.strip() == "localhost"
    """
    from confstack.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            init_logging=prod.init_logging,
            load_sources_settings=prod.load_sources_settings,
            build_configuration=prod.build_configuration,
        )
        return lambda: test_services

    return _create


@pytest.fixture
def profile_capture_context(
    clear_config_cache: None,
) -> Callable[[list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose ``get_config`` records the requested profiles."""
    from confstack.composition import AppServices, build_production

    def _create(captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return Config({}, {})

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            get_default_config_path=prod.get_default_config_path,
            init_logging=prod.init_logging,
            load_sources_settings=prod.load_sources_settings,
            build_configuration=prod.build_configuration,
        )
        return lambda: test_services

    return _create
