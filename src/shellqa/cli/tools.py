"""Helper commands: name similarity and function listing."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..analysis import MetricCalculator
from ..core import ShellQA
from ..duplication.similarity import levenshtein, similarity as similarity_score, strip_prefix
from ..exceptions import ConfigurationError
from ..logging_config import configure_logging, get_logger
from . import app
from ._common import EXIT_CONFIG_ERROR, console, resolve_config

logger = get_logger(__name__)


@app.command()
def similarity(
    ctx: typer.Context,
    first: str = typer.Argument(..., help="First function name"),
    second: str = typer.Argument(..., help="Second function name"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Score two names the way the duplication check does.

    Prints the edit distance, the similarity score, and the same two values
    for the names with their module prefix removed. The verdict uses the
    thresholds from the active configuration (-c, shellqa.toml, SHELLQA_*).
    """
    ctx.ensure_object(dict)
    try:
        thresholds = resolve_config(config=ctx.obj.get("config")).thresholds
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    first_core, second_core = strip_prefix(first), strip_prefix(second)
    score = similarity_score(first, second)
    stripped_score = similarity_score(first_core, second_core)

    if score >= thresholds.full_fail_threshold:
        verdict = "fail"
    elif score >= thresholds.similarity_threshold:
        verdict = "warn"
    else:
        verdict = "distinct"

    result = {
        "first": first,
        "second": second,
        "distance": levenshtein(first, second),
        "similarity": round(score, 3),
        "verdict": verdict,
        "first_stripped": first_core,
        "second_stripped": second_core,
        "stripped_distance": levenshtein(first_core, second_core),
        "stripped_similarity": round(stripped_score, 3),
    }

    if json_output:
        print(json.dumps(result, indent=2))
        return

    label = {
        "fail": "[red bold]would fail[/red bold]",
        "warn": "[yellow]would warn[/yellow]",
        "distinct": "[green]distinct[/green]",
    }[verdict]
    console.print(
        f"[bold]{escape(first)}[/bold] vs [bold]{escape(second)}[/bold]: "
        f"distance {result['distance']}, similarity {score:.3f} ({label})"
    )
    console.print(
        f"[dim]core names:[/dim] {escape(first_core)} vs {escape(second_core)}: "
        f"distance {result['stripped_distance']}, "
        f"similarity {stripped_score:.3f}"
    )


@app.command()
def functions(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(
        None,
        help="Directory to list (default: the -C path or current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    List every extracted shell function with its metrics.
    """
    ctx.ensure_object(dict)
    target = path or ctx.obj.get("path") or Path.cwd()

    try:
        settings = resolve_config(config=ctx.obj.get("config"), verbose=verbose)
        configure_logging(settings)
        qa = ShellQA(target, config=settings)
    except ConfigurationError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    sources, records, diagnostics = qa.collect()
    calculator = MetricCalculator.for_corpus(sources, records)
    rows = [(record, calculator.compute(record)) for record in records]

    if json_output:
        data = [
            {
                "function": record.name,
                "file": record.path,
                "start_line": record.start_line,
                "end_line": record.end_line,
                "metrics": metrics.to_dict(),
            }
            for record, metrics in rows
        ]
        print(json.dumps(data, indent=2))
        return

    if not rows:
        console.print(f"[dim]No shell functions found under {escape(str(qa.root_dir))}[/dim]")
        return

    table = Table(title=f"{len(rows)} functions in {len(sources)} files", title_justify="left")
    table.add_column("Function")
    table.add_column("Location", style="dim")
    table.add_column("Lines", justify="right")
    table.add_column("Local/Global", justify="right")
    table.add_column("Vars", justify="right")
    table.add_column("Tokens", justify="right")
    for record, metrics in rows:
        table.add_row(
            escape(record.name),
            escape(f"{record.path}:{record.start_line}-{record.end_line}"),
            str(metrics.meaningful_line_count),
            f"{metrics.local_usage_count}/{metrics.global_usage_count}",
            str(metrics.variable_count),
            str(metrics.token_count),
        )
    console.print(table)

    for diag in diagnostics:
        console.print(f"[yellow]-[/yellow] {escape(str(diag))}")
