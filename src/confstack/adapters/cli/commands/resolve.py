"""Key resolution and registry inspection commands.

Contents:
    * :func:`cli_get` - Resolve one key through the default registry.
    * :func:`cli_sources` - List the registered sources in lookup order.
    * :func:`describe_configuration` - Plain-data view of a source tree.
"""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click
from rich.console import Console
from rich.table import Table

from confstack.domain.cache import ExpiringMemoryCache
from confstack.domain.caching import CachingConfigurationSource
from confstack.domain.enums import OutputFormat
from confstack.domain.registry import PrioritizedSources
from confstack.domain.sources import ConfigurationSource, is_blank

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def _describe_cache(source: CachingConfigurationSource) -> dict[str, Any]:
    cache = source.cache
    described: dict[str, Any] = {"type": type(source).__name__, "size": cache.size()}
    if isinstance(cache, ExpiringMemoryCache):
        described.update(
            time_to_live=cache.time_to_live,
            time_to_idle=cache.time_to_idle,
            max_entries=cache.max_entries,
            eviction_policy=cache.eviction_policy.value,
        )
    return described


def describe_configuration(configuration: ConfigurationSource) -> dict[str, Any]:
    """Flatten a (possibly cached) registry into plain data for display.

    Example:
        >>> from confstack.adapters.memory import MemoryConfigurationSource
        >>> info = describe_configuration(PrioritizedSources(MemoryConfigurationSource()))
        >>> info["cache"] is None, info["sources"][0]["type"], info["sources"][0]["writable"]
        (True, 'MemoryConfigurationSource', True)
    """
    cache: dict[str, Any] | None = None
    registry = configuration
    if isinstance(configuration, CachingConfigurationSource):
        cache = _describe_cache(configuration)
        registry = configuration.source

    if isinstance(registry, PrioritizedSources):
        write_strategy: str | None = registry.write_strategy.value
        entries = [
            {
                "priority": entry.priority,
                "type": type(entry.source).__name__,
                "writable": entry.is_writable,
                "uuid": str(entry.uuid),
            }
            for entry in registry.sources
        ]
    else:
        write_strategy = None
        entries = [{"priority": 0, "type": type(registry).__name__, "writable": False, "uuid": str(registry.uuid)}]

    return {"write_strategy": write_strategy, "cache": cache, "sources": entries}


def _render_human(described: dict[str, Any], console: Console) -> None:
    table = Table(title="Configuration sources (lookup order)")
    table.add_column("Priority", justify="right")
    table.add_column("Type")
    table.add_column("Writable")
    table.add_column("UUID", style="dim")
    for entry in described["sources"]:
        table.add_row(str(entry["priority"]), entry["type"], "yes" if entry["writable"] else "no", entry["uuid"])
    console.print(table)
    console.print(f"write strategy: {described['write_strategy'] or '-'}")
    cache = described["cache"]
    if cache is None:
        console.print("cache: disabled")
    else:
        details = ", ".join(f"{name}={value}" for name, value in cache.items() if name != "type")
        console.print(f"cache: {cache['type']} ({details})")


@click.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.pass_context
def cli_get(ctx: click.Context, key: str) -> None:
    """Resolve KEY through the configured sources and print its value.

    Keys of the layered configuration use dotted paths, e.g.
    ``confstack.cache.max_entries``. Exits with code 2 when no source holds
    a non-blank value.
    """
    if is_blank(key):
        click.echo("Error: key must not be blank", err=True)
        raise SystemExit(ExitCode.INVALID_ARGUMENT)
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-get", extra={"command": "get", "key": key}):
        value = cli_ctx.configuration().retrieve(key)
        if value is None:
            logger.info("Key not found", extra={"key": key})
            click.echo(f"Key [{key}] not found in any configured source", err=True)
            raise SystemExit(ExitCode.KEY_NOT_FOUND)
        click.echo(value)


@click.command("sources", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.pass_context
def cli_sources(ctx: click.Context, output_format: str) -> None:
    """List the registered sources in lookup order together with cache settings."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())
    with lib_log_rich.runtime.bind(job_id="cli-sources", extra={"command": "sources", "format": fmt.value}):
        described = describe_configuration(cli_ctx.configuration())
        logger.info("Listing configuration sources", extra={"count": len(described["sources"])})
        if lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.flush()
        if fmt is OutputFormat.JSON:
            click.echo(orjson.dumps(described, option=orjson.OPT_INDENT_2).decode())
        else:
            _render_human(described, Console())


__all__ = ["cli_get", "cli_sources", "describe_configuration"]
