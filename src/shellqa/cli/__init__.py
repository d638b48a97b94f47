"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="shellqa",
    help="shellqa - Duplicate-name and trivial-wrapper checks for shell codebases",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .check import main as _main_callback  # noqa: F401, E402
from .tools import functions as _functions, similarity as _similarity  # noqa: F401, E402
