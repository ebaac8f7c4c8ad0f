"""Expand command -- preview how properties are flattened."""

import json
from typing import Any, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import PropertyError
from ..properties import expand_properties, scalar_kind
from . import app
from ._common import console


def _parse_json_object(raw: str, label: str) -> dict[str, Any]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] {label} is not valid JSON: {escape(str(e))}")
        raise typer.Exit(1)
    if not isinstance(value, dict):
        console.print(f"[red]Error:[/red] {label} must be a JSON object")
        raise typer.Exit(1)
    return value


@app.command()
def expand(
    properties: str = typer.Argument(..., help="Explicit properties as a JSON object"),
    implicit: Optional[str] = typer.Option(
        None,
        "--implicit",
        "-i",
        help="Implicit properties as a JSON object",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (table) or json",
    ),
):
    """
    Merge and flatten properties the way a tracker would.

    [bold cyan]Examples:[/bold cyan]

      meta-events expand '{"user": {"age": 27, "gender": "female"}}'

      meta-events expand '{"plan": "pro"}' --implicit '{"plan": "free", "ip": "10.0.0.1"}'
    """
    explicit_props = _parse_json_object(properties, "PROPERTIES")
    implicit_props = _parse_json_object(implicit, "--implicit") if implicit is not None else {}

    try:
        flat = expand_properties(implicit_props, explicit_props)
    except PropertyError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if fmt == "json":
        console.print_json(json.dumps(flat))
        return

    table = Table(title="Effective properties")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Kind", style="dim")
    for key, value in flat.items():
        table.add_row(escape(key), escape(repr(value)), scalar_kind(value).value)
    console.print(table)
