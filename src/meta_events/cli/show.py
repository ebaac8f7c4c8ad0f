"""Show command -- render the definitions registry as a tree."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.tree import Tree

from ..definition import Registry
from ..exceptions import MetaEventsError
from ..logging_config import setup_logging
from . import app
from ._common import console, format_timestamp, resolve_config, resolve_registry


@app.command()
def show(
    definitions: Optional[Path] = typer.Argument(
        None,
        help="Definitions file (TOML); defaults to the configured definitions_file",
        dir_okay=False,
    ),
    version: Optional[int] = typer.Option(
        None,
        "--version",
        "-V",
        help="Only show this version",
        min=1,
    ),
    active_only: bool = typer.Option(
        False,
        "--active-only",
        "-a",
        help="Hide retired versions, categories and events",
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
    Show every declared event with its history.

    [bold cyan]Examples:[/bold cyan]

      meta-events show events.toml

      meta-events show events.toml --version 2 --active-only
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
        registry = resolve_registry(definitions, settings)
        if version is not None:
            registry.version(version)
        console.print(build_tree(registry, version=version, active_only=active_only))
    except MetaEventsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def build_tree(registry: Registry, version: Optional[int] = None, active_only: bool = False) -> Tree:
    """Build a rich Tree of versions, categories, events and notes."""
    prefix = registry.global_prefix or "(no prefix)"
    root = Tree(f"[bold cyan]Event definitions[/bold cyan] prefix={escape(prefix)}")

    for number, ver in registry.versions.items():
        if version is not None and number != version:
            continue
        if active_only and ver.is_retired:
            continue
        vnode = root.add(
            f"[bold]v{number}[/bold] introduced {format_timestamp(ver.introduced)}"
            + _retired_suffix(ver.retired_at)
        )
        for category in ver.categories.values():
            if active_only and category.is_retired:
                continue
            cnode = vnode.add(f"[green]{escape(category.name)}[/green]" + _retired_suffix(category.retired_at))
            for event in category.events.values():
                if active_only and event.is_retired:
                    continue
                enode = cnode.add(
                    f"[yellow]{escape(event.qualified_name)}[/yellow] "
                    f"introduced {format_timestamp(event.introduced)}"
                    + _retired_suffix(event.retired_at)
                )
                enode.add(escape(event.description))
                for note in event.notes:
                    enode.add(
                        f"[dim]{format_timestamp(note.at)} {escape(note.author)}:[/dim] {escape(note.text)}"
                    )
    return root


def _retired_suffix(retired_at) -> str:
    if retired_at is None:
        return ""
    return f" [red]retired {format_timestamp(retired_at)}[/red]"
