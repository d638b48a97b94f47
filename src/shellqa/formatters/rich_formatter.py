"""Rich terminal formatter for shellqa."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analysis.wrappers import WrapperReason, WrapperStatus
from ..config import ThresholdConfig
from ..duplication.models import ComparisonMode, Verdict
from ..report import QAReport
from .base import BaseFormatter

_VERDICT_STYLE = {
    "fail": "[red bold]FAIL[/red bold]",
    "warn": "[yellow]WARN[/yellow]",
}

# Wrappers that pass only because they are annotated or used often
_EXEMPT_REASONS = (WrapperReason.ANNOTATED, WrapperReason.LOCAL_USAGE, WrapperReason.GLOBAL_USAGE)


def _label(value: str) -> str:
    return _VERDICT_STYLE.get(value, value)


def wrapper_help(thresholds: ThresholdConfig, markers: tuple[str, ...]) -> str:
    """Explain what the wrapper check flags and how to resolve a finding."""
    t = thresholds
    lines = [
        "What makes a function a trivial wrapper:",
        f"  - Only 1-{t.max_lines} lines of meaningful code (excluding declarations, comments)",
        "  - Just calls another function or command without adding logic",
        "",
        "How to resolve:",
        "  1. Inline the wrapper at call sites (if rarely used)",
        "  2. Expand it with real logic (error handling, validation, logging)",
    ]
    for number, marker in enumerate(markers, start=3):
        lines.append(f"  {number}. Add '# {marker}' above the definition to exempt it")
    lines += [
        "",
        "Passes if ANY of these holds:",
        f"  - more than {t.max_lines} meaningful lines",
        f"  - >= {t.local_usage_threshold} local or >= {t.global_usage_threshold} global usages",
        f"  - >= {t.min_vars_for_ergonomic} distinct variables",
        f"  - >= {t.token_complexity_pass} tokens "
        f"(>= {t.token_complexity_warn} is a warning instead of an error)",
    ]
    return "\n".join(lines)


class RichFormatter(BaseFormatter):
    """Rich terminal output: summary panel, one table per finding kind."""

    def __init__(
        self,
        console: Optional[Console] = None,
        thresholds: Optional[ThresholdConfig] = None,
        markers: tuple[str, ...] = (),
        show_help: bool = True,
    ):
        self.console = console or Console()
        self.thresholds = thresholds or ThresholdConfig()
        self.markers = tuple(markers)
        self.show_help = show_help

    def render(self, report: QAReport) -> None:
        self._print_summary(report)
        if report.is_empty:
            return
        self._print_duplicates(report)
        self._print_wrappers(report)
        self._print_diagnostics(report)
        self._print_verdict(report)

    def format(self, report: QAReport) -> str:
        with self.console.capture() as capture:
            self.render(report)
        return capture.get()

    # ── Sections ───────────────────────────────────────────────

    def _print_summary(self, report: QAReport) -> None:
        c = report.counts
        if report.is_empty:
            body = f"[dim]No shell files under[/dim] {escape(report.root)}[dim], nothing to check.[/dim]"
        else:
            checks = report.checks
            if checks["duplication"]:
                duplicates = (
                    f"[red]{c['duplicate_fail']} fail[/red], "
                    f"[yellow]{c['duplicate_warn']} warn[/yellow], "
                    f"[yellow]{c['stripped_warn']} similar core names[/yellow]"
                )
            else:
                duplicates = "[dim]skipped[/dim]"
            if checks["trivial_wrappers"]:
                wrappers = (
                    f"[red]{c['wrapper_fail']} fail[/red], "
                    f"[yellow]{c['wrapper_warn']} warn[/yellow], "
                    f"[green]{c['wrapper_pass']} pass[/green]"
                )
                reasons = report.wrapper_reasons
                exempt = sum(reasons[r.value] for r in _EXEMPT_REASONS)
                if exempt:
                    wrappers += f" [dim]({exempt} annotated or widely used)[/dim]"
            else:
                wrappers = "[dim]skipped[/dim]"
            body = (
                f"Files scanned:      [bold]{c['files']}[/bold]\n"
                f"Functions:          [bold]{c['functions']}[/bold]\n"
                f"Name comparisons:   [bold]{c['comparisons']}[/bold]\n"
                f"Duplicate names:    {duplicates}\n"
                f"Trivial wrappers:   {wrappers}"
            )
            if c["diagnostics"]:
                body += f"\nDiagnostics:        [yellow]{c['diagnostics']}[/yellow]"
        self.console.print(
            Panel(body, title="[bold cyan]shellqa[/bold cyan]", expand=False)
        )
        self.console.print()

    def _print_duplicates(self, report: QAReport) -> None:
        full = report.pairs_for(ComparisonMode.FULL_NAME)
        if full:
            table = Table(title="Similar function names", title_justify="left")
            table.add_column("Verdict")
            table.add_column("Score", justify="right")
            table.add_column("Function")
            table.add_column("Location", style="dim")
            table.add_column("Function")
            table.add_column("Location", style="dim")
            for pair in full:
                table.add_row(
                    _label(pair.verdict.value),
                    f"{pair.score:.3f}",
                    escape(pair.first.name),
                    escape(f"{pair.first.path}:{pair.first.start_line}"),
                    escape(pair.second.name),
                    escape(f"{pair.second.path}:{pair.second.start_line}"),
                )
            self.console.print(table)
            if report.pairs_for(ComparisonMode.FULL_NAME, Verdict.FAIL):
                self.console.print(
                    "[red]Function pairs this similar are likely duplicates.[/red]"
                )
            self.console.print()

        stripped = report.pairs_for(ComparisonMode.STRIPPED_NAME)
        if stripped:
            table = Table(
                title="Similar core names (module prefix removed, warnings only)",
                title_justify="left",
            )
            table.add_column("Score", justify="right")
            table.add_column("Function")
            table.add_column("Core")
            table.add_column("Function")
            table.add_column("Core")
            for pair in stripped:
                table.add_row(
                    f"{pair.score:.3f}",
                    escape(f"{pair.first.name} ({pair.first.path})"),
                    escape(pair.first_compared),
                    escape(f"{pair.second.name} ({pair.second.path})"),
                    escape(pair.second_compared),
                )
            self.console.print(table)
            self.console.print()

    def _print_wrappers(self, report: QAReport) -> None:
        findings = report.wrapper_findings
        if not findings:
            return

        table = Table(title="Trivial wrappers", title_justify="left")
        table.add_column("Verdict")
        table.add_column("Function")
        table.add_column("Location", style="dim")
        table.add_column("Lines", justify="right")
        table.add_column("Local/Global", justify="right")
        table.add_column("Vars", justify="right")
        table.add_column("Tokens", justify="right")
        table.add_column("Body")
        for verdict in findings:
            m = verdict.metrics
            fn = verdict.function
            table.add_row(
                _label(verdict.status.value),
                escape(fn.name),
                escape(f"{fn.path}:{fn.start_line}"),
                str(m.meaningful_line_count),
                f"{m.local_usage_count}/{m.global_usage_count}",
                str(m.variable_count),
                str(m.token_count),
                escape(verdict.preview),
            )
        self.console.print(table)
        self.console.print()

        if self.show_help and report.wrappers_with(WrapperStatus.FAIL):
            self.console.print(f"[dim]{escape(wrapper_help(self.thresholds, self.markers))}[/dim]")
            self.console.print()

    def _print_diagnostics(self, report: QAReport) -> None:
        if not report.diagnostics:
            return
        self.console.print("[bold]Diagnostics:[/bold]")
        for diag in report.diagnostics:
            self.console.print(f"  [yellow]-[/yellow] {escape(str(diag))}")
        self.console.print()

    def _print_verdict(self, report: QAReport) -> None:
        if report.should_fail:
            self.console.print("[red bold]QA check failed[/red bold]")
        elif report.has_warnings:
            self.console.print("[yellow]QA check passed with warnings[/yellow]")
        else:
            self.console.print("[green]QA check passed[/green]")
