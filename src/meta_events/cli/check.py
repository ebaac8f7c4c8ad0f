"""Check command -- validate a definitions file."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import DefinitionError, MetaEventsError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config, resolve_registry


@app.command()
def check(
    definitions: Optional[Path] = typer.Argument(
        None,
        help="Definitions file (TOML); defaults to the configured definitions_file",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only report errors"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Build the registry and report what it declares.

    Exits with status 1 if the definitions are invalid (duplicates, missing
    descriptions, bad timestamps, misplaced notes...).
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
        registry = resolve_registry(definitions, settings)
    except DefinitionError as e:
        console.print(f"[red]Invalid definitions:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except MetaEventsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if quiet:
        return

    table = Table(title="Event definitions", show_lines=False)
    table.add_column("Version", justify="right")
    table.add_column("Categories", justify="right")
    table.add_column("Events", justify="right")
    table.add_column("Retired events", justify="right")
    table.add_column("Status")

    for number, version in registry.versions.items():
        events = [e for c in version.categories.values() for e in c.events.values()]
        retired = sum(1 for e in events if e.is_retired)
        status = "[red]retired[/red]" if version.is_retired else "[green]active[/green]"
        table.add_row(str(number), str(len(version.categories)), str(len(events)), str(retired), status)

    console.print(table)
    console.print("[green]Definitions OK[/green]")
