"""Aggregated result of one QA run.

The run fails when any full-name pair reaches the fail threshold or any
function is classified as a failing trivial wrapper. Stripped-name
warnings and token-complexity warnings never fail a run on their own, and
recoverable diagnostics (unreadable files, unterminated functions) do not
affect the exit code.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .analysis.wrappers import WrapperStatus, WrapperVerdict
from .duplication.models import ComparisonMode, DuplicationResult, SimilarityPair, Verdict
from .exceptions import Diagnostic

EXIT_OK = 0
EXIT_FAILED = 1


@dataclass
class QAReport:
    """Findings, counts and diagnostics for one run.

    Attributes:
        root: Directory that was scanned
        files_scanned: Source files successfully read
        functions_scanned: Function records extracted
        duplication: Duplicate-name result (None if the check was disabled)
        wrapper_verdicts: Every wrapper verdict, PASS included (empty if disabled)
        diagnostics: Recoverable problems met along the way
    """

    root: str
    files_scanned: int = 0
    functions_scanned: int = 0
    duplication: DuplicationResult | None = None
    wrapper_verdicts: list[WrapperVerdict] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    wrappers_checked: bool = False

    # ── Duplicate findings ─────────────────────────────────────

    @property
    def duplicate_pairs(self) -> list[SimilarityPair]:
        return self.duplication.pairs if self.duplication else []

    def pairs_for(self, mode: ComparisonMode, verdict: Verdict | None = None) -> list[SimilarityPair]:
        if self.duplication is None:
            return []
        pairs = self.duplication.by_mode(mode)
        return pairs if verdict is None else [p for p in pairs if p.verdict is verdict]

    @property
    def comparisons(self) -> int:
        return self.duplication.comparisons if self.duplication else 0

    # ── Wrapper findings ───────────────────────────────────────

    @property
    def wrapper_findings(self) -> list[WrapperVerdict]:
        """WARN and FAIL verdicts only, in file order."""
        return [v for v in self.wrapper_verdicts if v.status is not WrapperStatus.PASS]

    def wrappers_with(self, status: WrapperStatus) -> list[WrapperVerdict]:
        return [v for v in self.wrapper_verdicts if v.status is status]

    @property
    def wrapper_reasons(self) -> Counter:
        return Counter(v.reason.value for v in self.wrapper_verdicts)

    @property
    def checks(self) -> dict[str, bool]:
        """Which checks actually ran."""
        return {
            "duplication": self.duplication is not None,
            "trivial_wrappers": self.wrappers_checked,
        }

    # ── Aggregates ─────────────────────────────────────────────

    @property
    def counts(self) -> dict[str, int]:
        return {
            "files": self.files_scanned,
            "functions": self.functions_scanned,
            "comparisons": self.comparisons,
            "duplicate_fail": len(self.pairs_for(ComparisonMode.FULL_NAME, Verdict.FAIL)),
            "duplicate_warn": len(self.pairs_for(ComparisonMode.FULL_NAME, Verdict.WARN)),
            "stripped_warn": len(self.pairs_for(ComparisonMode.STRIPPED_NAME, Verdict.WARN)),
            "wrapper_pass": len(self.wrappers_with(WrapperStatus.PASS)),
            "wrapper_warn": len(self.wrappers_with(WrapperStatus.WARN)),
            "wrapper_fail": len(self.wrappers_with(WrapperStatus.FAIL)),
            "diagnostics": len(self.diagnostics),
        }

    @property
    def is_empty(self) -> bool:
        """No files matched, so there was nothing to check."""
        return self.files_scanned == 0

    @property
    def should_fail(self) -> bool:
        if self.pairs_for(ComparisonMode.FULL_NAME, Verdict.FAIL):
            return True
        return bool(self.wrappers_with(WrapperStatus.FAIL))

    @property
    def has_warnings(self) -> bool:
        return any(p.verdict is Verdict.WARN for p in self.duplicate_pairs) or bool(
            self.wrappers_with(WrapperStatus.WARN)
        )

    @property
    def exit_code(self) -> int:
        return EXIT_FAILED if self.should_fail else EXIT_OK

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "counts": self.counts,
            "should_fail": self.should_fail,
            "checks": self.checks,
            "wrapper_reasons": dict(sorted(self.wrapper_reasons.items())),
            "duplicates": [p.to_dict() for p in self.duplicate_pairs],
            "wrappers": [v.to_dict() for v in self.wrapper_findings],
            "diagnostics": [d.to_json() for d in self.diagnostics],
        }
