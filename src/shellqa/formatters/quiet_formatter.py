"""Quiet formatter: failing findings only."""

from ..analysis.wrappers import WrapperStatus
from ..duplication.models import ComparisonMode, Verdict
from ..report import QAReport
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """One ``path:line: message`` line per finding that fails the run."""

    def render(self, report: QAReport) -> None:
        text = self.format(report)
        if text:
            print(text)

    def format(self, report: QAReport) -> str:
        lines = []
        for pair in report.pairs_for(ComparisonMode.FULL_NAME, Verdict.FAIL):
            lines.append(f"{pair.first.path}:{pair.first.start_line}: {pair.describe()}")
        for verdict in report.wrappers_with(WrapperStatus.FAIL):
            fn = verdict.function
            lines.append(f"{fn.path}:{fn.start_line}: trivial wrapper {verdict.describe()}")
        return "\n".join(lines)
