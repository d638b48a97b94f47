"""Tests for shellqa.report."""

from conftest import make_source
from shellqa.analysis import WrapperReason, WrapperStatus, WrapperVerdict
from shellqa.duplication import (
    ComparisonMode,
    DuplicationResult,
    SimilarityPair,
    Verdict,
)
from shellqa.exceptions import Diagnostic, ErrorCode
from shellqa.report import QAReport
from shellqa.scanning import FunctionExtractor, Metrics


def _record(name, path):
    source = make_source(f"{name}() {{\n  echo {name}\n}}\n", path)
    return FunctionExtractor().extract(source)[0][0]


def _pair(verdict, mode=ComparisonMode.FULL_NAME):
    a, b = _record("fetch_remote", "a.sh"), _record("fetch_remotes", "b.sh")
    return SimilarityPair(
        first=a,
        second=b,
        mode=mode,
        score=0.95,
        verdict=verdict,
        first_compared=a.name,
        second_compared=b.name,
    )


def _verdict(status, reason):
    metrics = Metrics(1, 0, 2, 0, 0)
    return WrapperVerdict(_record("show", "c.sh"), metrics, status, reason)


class TestShouldFail:
    def test_empty_report_passes(self):
        report = QAReport(root="/tmp/x")
        assert report.is_empty
        assert not report.should_fail
        assert report.exit_code == 0

    def test_full_name_fail(self):
        report = QAReport(
            root=".",
            files_scanned=2,
            duplication=DuplicationResult(pairs=[_pair(Verdict.FAIL)]),
        )
        assert report.should_fail
        assert report.exit_code == 1

    def test_warnings_alone_pass(self):
        report = QAReport(
            root=".",
            files_scanned=2,
            duplication=DuplicationResult(
                pairs=[
                    _pair(Verdict.WARN),
                    _pair(Verdict.WARN, ComparisonMode.STRIPPED_NAME),
                ]
            ),
            wrapper_verdicts=[_verdict(WrapperStatus.WARN, WrapperReason.TOKEN_WARN)],
        )
        assert not report.should_fail
        assert report.has_warnings
        assert report.exit_code == 0

    def test_wrapper_fail(self):
        report = QAReport(
            root=".",
            files_scanned=1,
            wrapper_verdicts=[_verdict(WrapperStatus.FAIL, WrapperReason.TOKEN_FAIL)],
        )
        assert report.should_fail

    def test_diagnostics_do_not_fail(self):
        report = QAReport(
            root=".",
            files_scanned=1,
            diagnostics=[Diagnostic(ErrorCode.SQ200, "No closing brace", path="x.sh", line=3)],
        )
        assert not report.should_fail


class TestCounts:
    def test_buckets(self):
        report = QAReport(
            root=".",
            files_scanned=3,
            functions_scanned=7,
            duplication=DuplicationResult(
                pairs=[
                    _pair(Verdict.FAIL),
                    _pair(Verdict.WARN),
                    _pair(Verdict.WARN, ComparisonMode.STRIPPED_NAME),
                ]
            ),
            wrapper_verdicts=[
                _verdict(WrapperStatus.PASS, WrapperReason.COMPLEX),
                _verdict(WrapperStatus.WARN, WrapperReason.TOKEN_WARN),
                _verdict(WrapperStatus.FAIL, WrapperReason.TOKEN_FAIL),
            ],
        )
        counts = report.counts
        assert counts["files"] == 3
        assert counts["functions"] == 7
        assert counts["duplicate_fail"] == 1
        assert counts["duplicate_warn"] == 1
        assert counts["stripped_warn"] == 1
        assert counts["wrapper_pass"] == 1
        assert counts["wrapper_warn"] == 1
        assert counts["wrapper_fail"] == 1
        assert len(report.wrapper_findings) == 2
        assert report.wrapper_reasons["token_fail"] == 1

    def test_to_dict(self):
        report = QAReport(
            root=".",
            files_scanned=1,
            wrapper_verdicts=[
                _verdict(WrapperStatus.PASS, WrapperReason.COMPLEX),
                _verdict(WrapperStatus.FAIL, WrapperReason.TOKEN_FAIL),
            ],
        )
        data = report.to_dict()
        assert data["should_fail"] is True
        assert data["duplicates"] == []
        assert [w["status"] for w in data["wrappers"]] == ["fail"]
        assert data["counts"]["comparisons"] == 0

    def test_to_dict_records_checks_and_reasons(self):
        report = QAReport(
            root=".",
            files_scanned=1,
            wrapper_verdicts=[
                _verdict(WrapperStatus.PASS, WrapperReason.COMPLEX),
                _verdict(WrapperStatus.PASS, WrapperReason.COMPLEX),
                _verdict(WrapperStatus.FAIL, WrapperReason.TOKEN_FAIL),
            ],
            wrappers_checked=True,
        )
        data = report.to_dict()
        assert data["checks"] == {"duplication": False, "trivial_wrappers": True}
        assert data["wrapper_reasons"] == {"complex": 2, "token_fail": 1}
