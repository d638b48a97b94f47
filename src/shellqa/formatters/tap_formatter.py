"""TAP (Test Anything Protocol, version 13) formatter.

Every finding is one test point. Failing findings are ``not ok``; warnings
are ``ok`` with a YAML block carrying the details, so TAP consumers pass the
run while still showing them. A run without findings emits a single passing
point.
"""

from ..analysis.wrappers import WrapperStatus
from ..duplication.models import Verdict
from ..report import QAReport
from .base import BaseFormatter


def _yaml_block(fields: dict) -> list[str]:
    lines = ["  ---"]
    for key, value in fields.items():
        lines.append(f"  {key}: {value}")
    lines.append("  ...")
    return lines


class TapFormatter(BaseFormatter):
    def render(self, report: QAReport) -> None:
        print(self.format(report))

    def format(self, report: QAReport) -> str:
        points: list[tuple[bool, str, dict]] = []

        for pair in report.duplicate_pairs:
            points.append(
                (
                    pair.verdict is not Verdict.FAIL,
                    pair.describe(),
                    {
                        "severity": pair.verdict.value,
                        "mode": pair.mode.value,
                        "score": f"{pair.score:.3f}",
                        "first": f"{pair.first.path}:{pair.first.start_line}",
                        "second": f"{pair.second.path}:{pair.second.start_line}",
                    },
                )
            )

        for verdict in report.wrapper_findings:
            fn = verdict.function
            points.append(
                (
                    verdict.status is not WrapperStatus.FAIL,
                    f"trivial wrapper {verdict.describe()}",
                    {
                        "severity": verdict.status.value,
                        "reason": verdict.reason.value,
                        "at": f"{fn.path}:{fn.start_line}",
                    },
                )
            )

        lines = ["TAP version 13"]
        if not points:
            lines.append("1..1")
            summary = "nothing to check" if report.is_empty else "no findings"
            lines.append(f"ok 1 - {summary}")
            return "\n".join(lines)

        lines.append(f"1..{len(points)}")
        for number, (passed, description, details) in enumerate(points, start=1):
            status = "ok" if passed else "not ok"
            lines.append(f"{status} {number} - {description}")
            lines.extend(_yaml_block(details))
        return "\n".join(lines)
