"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import MetaEventsConfig, load_config
from ..definition import Registry, load_definitions

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> MetaEventsConfig:
    """Build configuration from CLI options."""
    return load_config(config_file=config, verbose=verbose, quiet=quiet)


def resolve_registry(definitions: Optional[Path], settings: MetaEventsConfig) -> Registry:
    """Load the definitions file given on the command line, else the configured one."""
    source = definitions or settings.definitions_file
    if source is None:
        console.print(
            "[red]Error:[/red] no definitions file given and none configured "
            "(set definitions_file in meta-events.toml or META_EVENTS_DEFINITIONS_FILE)"
        )
        raise typer.Exit(2)
    return load_definitions(source)


def format_timestamp(value) -> str:
    if value is None:
        return "-"
    if value.hour == value.minute == value.second == 0 and value.tzinfo is None:
        return value.date().isoformat()
    return value.isoformat(timespec="seconds")
