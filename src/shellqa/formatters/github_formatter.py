"""GitHub Actions formatter: workflow command annotations."""

from ..analysis.wrappers import WrapperStatus
from ..duplication.models import Verdict
from ..report import QAReport
from .base import BaseFormatter


def _escape(message: str) -> str:
    # Workflow commands end at a newline; '%' introduces an escape
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output ``::error`` / ``::warning`` annotations, one per finding.

    Failing findings become errors, everything else (warnings and
    diagnostics) becomes warnings.
    """

    def render(self, report: QAReport) -> None:
        text = self.format(report)
        if text:
            print(text)

    def format(self, report: QAReport) -> str:
        lines: list[str] = []

        for pair in report.duplicate_pairs:
            level = "error" if pair.verdict is Verdict.FAIL else "warning"
            other = f"{pair.second.path}:{pair.second.start_line}"
            msg = _escape(f"{pair.describe()} (also in {other})")
            lines.append(f"::{level} file={pair.first.path},line={pair.first.start_line}::{msg}")

        for verdict in report.wrapper_findings:
            fn = verdict.function
            level = "error" if verdict.status is WrapperStatus.FAIL else "warning"
            msg = _escape(f"Trivial wrapper ({verdict.reason.value}): {verdict.describe()}")
            lines.append(f"::{level} file={fn.path},line={fn.start_line}::{msg}")

        for diag in report.diagnostics:
            location = f"file={diag.path}" if diag.path else ""
            if diag.path and diag.line:
                location += f",line={diag.line}"
            msg = _escape(f"[{diag.code.value}] {diag.message}")
            lines.append(f"::warning {location}::{msg}" if location else f"::warning::{msg}")

        return "\n".join(lines)
