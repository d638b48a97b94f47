"""Main check command."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..core import ShellQA
from ..exceptions import ConfigurationError, ShellQAError
from ..formatters import FORMATTERS, get_formatter
from ..logging_config import configure_logging, get_logger
from . import app
from ._common import EXIT_CONFIG_ERROR, EXIT_INTERRUPTED, console, resolve_config

logger = get_logger(__name__)


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Root directory to check (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "-f",
        "--format",
        help="Output format (default: rich, or quiet with --quiet)",
        click_type=click.Choice(sorted(FORMATTERS), case_sensitive=False),
    ),
    only: Optional[str] = typer.Option(
        None,
        "--only",
        help="Run a single check: duplication | wrappers",
        click_type=click.Choice(["duplication", "wrappers"], case_sensitive=False),
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print failing findings and errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Check shell sources for near-duplicate function names and trivial wrappers.

    Exits 1 when a function name nearly duplicates one in another file, or
    when a short function only renames another command. Warnings never fail
    the run.

    [bold cyan]Examples:[/bold cyan]

      shellqa

      shellqa -C scripts/ --format github

      shellqa --only wrappers --verbose

      shellqa similarity git_check_valid git_check_valide
    """
    target = Path(path) if path else Path.cwd()
    ctx.ensure_object(dict)
    ctx.obj["path"] = target
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]shellqa[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    try:
        settings = resolve_config(
            config=config,
            only=only,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        configure_logging(settings)
        quiet = settings.verbosity == "quiet"

        report = ShellQA(target, config=settings).run()

        name = (output_format or ("quiet" if quiet else "rich")).lower()
        formatter = get_formatter(
            name,
            console=console,
            thresholds=settings.thresholds,
            markers=tuple(settings.annotation_markers),
            show_help=not quiet,
        )
        formatter.render(report)

        if report.should_fail:
            raise typer.Exit(report.exit_code)

    except typer.Exit:
        raise

    except ConfigurationError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    except ShellQAError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Check interrupted by user")
        console.print("\n[yellow]Check interrupted[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)
