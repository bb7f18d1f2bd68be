"""Click CLI for avatarcache — resolve avatars and inspect the cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from avatarcache.config.hierarchy import config_sources, load_config_hierarchy

if TYPE_CHECKING:
    from avatarcache.config.schema import AvatarConfig

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(default_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _build(config: dict[str, Any]) -> AvatarConfig:
    from avatarcache.config.schema import build_config
    from avatarcache.errors.exceptions import ConfigurationError

    try:
        return build_config(**config)
    except ConfigurationError as e:
        error_console.print(f"[red]Invalid configuration:[/red] {escape(e.message)}")
        sys.exit(2)


@click.group()
@click.version_option(package_name="avatarcache")
def cli() -> None:
    """avatarcache — resolve and cache avatar images."""


@cli.command()
@click.argument("entity_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_file", type=click.Path(exists=True), help="Avatar config YAML.")
@click.option("--size", type=int, default=None, help="Square size in pixels.")
@click.option("--width", type=int, default=None, help="Width in pixels.")
@click.option("--height", type=int, default=None, help="Height in pixels.")
@click.option("--cache-root", type=click.Path(file_okay=False), help="Cache directory.")
@click.option("--order", type=str, default=None, help="Comma-separated strategy order.")
@click.option("--no-cache", is_flag=True, default=False, help="Always fetch, ignoring cached files.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def resolve(
    entity_file: str,
    config_file: str | None,
    size: int | None,
    width: int | None,
    height: int | None,
    cache_root: str | None,
    order: str | None,
    no_cache: bool,
    verbose: int,
) -> None:
    """Resolve the avatar for the entity in ENTITY_FILE (JSON or YAML)."""
    from avatarcache.config.loader import load_yaml
    from avatarcache.core import resolve_avatar_async
    from avatarcache.types import Failed, ServedFromCache

    overrides: dict[str, Any] = {}
    if config_file:
        raw = load_yaml(config_file)
        overrides.update(raw.get("avatar", raw))

    # Explicit flags win over the --config file
    flags = {"size": size, "width": width, "height": height, "cache_root": cache_root, "order": order}
    overrides.update({k: v for k, v in flags.items() if v is not None})
    if no_cache:
        overrides["cache_disabled"] = True

    config = load_config_hierarchy(**overrides)
    _setup_logging(verbose, config.pop("log_level", "WARNING"))

    avatar_config = _build(config)
    entity = load_yaml(entity_file)

    outcome = asyncio.run(resolve_avatar_async(entity, avatar_config))

    if isinstance(outcome, Failed):
        error_console.print(f"[red]Error:[/red] {escape(str(outcome.error))}")
        sys.exit(1)

    record = outcome.record
    source = "cache" if isinstance(outcome, ServedFromCache) else record.strategy.value
    console.print(f"[green]{record.cache_path}[/green]")
    if verbose >= 1:
        table = Table(title="Avatar", show_header=True)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Identity", record.identity or "-")
        table.add_row("Size", f"{record.width}x{record.height}")
        table.add_row("Source", source)
        if record.target:
            table.add_row("URL", record.target.url)
        error_console.print(table)


@cli.command("show-config")
def show_config() -> None:
    """Show the merged configuration and where each value came from."""
    config = load_config_hierarchy()
    sources = config_sources()

    table = Table(title="Configuration", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    for key in sorted(config):
        value = config[key]
        if key == "mapbox_access_token" and value:
            value = "****"
        table.add_row(key, str(value), sources.get(key, "-"))

    console.print(table)


@cli.group()
def cache() -> None:
    """Cache inspection commands."""


@cache.command("stats")
@click.option("--cache-root", type=click.Path(file_okay=False), help="Cache directory.")
def cache_stats(cache_root: str | None) -> None:
    """Show cache statistics."""
    from avatarcache.cache.store import AvatarStore

    config = load_config_hierarchy(cache_root=cache_root)
    store = AvatarStore(Path(config["cache_root"]).expanduser())
    stats = store.stats()

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Root", str(store.root))
    table.add_row("Entries", str(stats.entries))
    table.add_row("Size (MB)", f"{stats.size_mb:.2f}")

    console.print(table)


@cli.command("validate-config")
@click.argument("config_yaml", type=click.Path(exists=True))
def validate_config(config_yaml: str) -> None:
    """Validate an avatar config YAML file."""
    from avatarcache.config.loader import load_config_yaml

    try:
        config = load_config_yaml(config_yaml)
        console.print(f"[green]Valid config:[/green] {config_yaml}")
        console.print(f"  Order: {', '.join(s.value for s in config.order)}")
        console.print(f"  Cache: {'on' if config.cache else 'off'} ({config.cache_root})")
    except Exception as e:
        error_console.print(f"[red]Invalid config:[/red] {escape(str(e))}")
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()
