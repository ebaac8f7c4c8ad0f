"""meta-events command line: wires the subcommands onto one typer app."""

import typer

app = typer.Typer(
    name="meta-events",
    help="meta-events - Inspect and validate versioned analytics event definitions",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .expand import expand as _expand  # noqa: F401, E402
from .name import name as _name  # noqa: F401, E402
from .show import show as _show  # noqa: F401, E402


def main() -> None:
    app()
