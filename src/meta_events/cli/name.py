"""Name command -- print the external name an event is sent under."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import MetaEventsError, RetiredEventError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config, resolve_registry


@app.command()
def name(
    category: str = typer.Argument(..., help="Category name"),
    event: str = typer.Argument(..., help="Event name"),
    definitions: Optional[Path] = typer.Argument(
        None,
        help="Definitions file (TOML); defaults to the configured definitions_file",
        dir_okay=False,
    ),
    version: Optional[int] = typer.Option(
        None,
        "--version",
        "-V",
        help="Version to resolve in (default: configured default_version, else latest)",
        min=1,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
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
    Resolve CATEGORY EVENT and print its qualified name.

    Fails (exit status 1) if the event is unknown or retired, exactly as
    firing it would.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
        registry = resolve_registry(definitions, settings)
        number = version or settings.default_version
        if number is None:
            latest = registry.latest_version
            number = latest.number if latest is not None else 0
        _, qualified = registry.fetch_event(number, category, event)
    except RetiredEventError as e:
        console.print(f"[red]Retired:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except MetaEventsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(qualified, markup=False, highlight=False)
