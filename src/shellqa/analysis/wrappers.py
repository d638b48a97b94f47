"""Trivial-wrapper detection.

A short function is only worth flagging when it adds nothing beyond
renaming a call. Frequent reuse, several variables or enough tokens each
justify the wrapper on their own; an exemption marker above the definition
does too.

Rules are evaluated in order and the first match decides:

    1. more than max_lines meaningful lines      PASS  not_trivial
    2. exemption marker present                  PASS  annotated
    3. local usages  >= local_usage_threshold    PASS  local_usage
    4. global usages >= global_usage_threshold   PASS  global_usage
    5. variables >= min_vars_for_ergonomic       PASS  ergonomic_vars
    6. tokens >= token_complexity_pass           PASS  complex
    7. tokens >= token_complexity_warn           WARN  token_warn
    8. otherwise                                 FAIL  token_fail
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ..config import ThresholdConfig
from ..logging_config import get_logger
from ..scanning.models import FunctionRecord, Metrics
from .annotations import AnnotationChecker
from .metrics import MetricCalculator

logger = get_logger(__name__)


class WrapperStatus(Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class WrapperReason(Enum):
    NOT_TRIVIAL = "not_trivial"
    ANNOTATED = "annotated"
    LOCAL_USAGE = "local_usage"
    GLOBAL_USAGE = "global_usage"
    ERGONOMIC_VARS = "ergonomic_vars"
    COMPLEX = "complex"
    TOKEN_WARN = "token_warn"
    TOKEN_FAIL = "token_fail"


@dataclass(frozen=True)
class WrapperVerdict:
    """Outcome of the wrapper check for one function."""

    function: FunctionRecord
    metrics: Metrics
    status: WrapperStatus
    reason: WrapperReason

    @property
    def preview(self) -> str:
        return self.function.preview

    def describe(self) -> str:
        m = self.metrics
        return (
            f"{self.function.name}() - {m.meaningful_line_count} line(s), "
            f"{m.local_usage_count} local / {m.global_usage_count} global usages, "
            f"{m.variable_count} vars, {m.token_count} tokens"
        )

    def to_dict(self) -> dict:
        return {
            "function": self.function.name,
            "file": self.function.path,
            "line": self.function.start_line,
            "status": self.status.value,
            "reason": self.reason.value,
            "metrics": self.metrics.to_dict(),
            "preview": self.preview,
        }


def classify(
    metrics: Metrics, annotated: bool, thresholds: ThresholdConfig
) -> tuple[WrapperStatus, WrapperReason]:
    """Apply the ordered wrapper rules to one function's metrics."""
    if metrics.meaningful_line_count > thresholds.max_lines:
        return WrapperStatus.PASS, WrapperReason.NOT_TRIVIAL
    if annotated:
        return WrapperStatus.PASS, WrapperReason.ANNOTATED
    if metrics.local_usage_count >= thresholds.local_usage_threshold:
        return WrapperStatus.PASS, WrapperReason.LOCAL_USAGE
    if metrics.global_usage_count >= thresholds.global_usage_threshold:
        return WrapperStatus.PASS, WrapperReason.GLOBAL_USAGE
    if metrics.variable_count >= thresholds.min_vars_for_ergonomic:
        return WrapperStatus.PASS, WrapperReason.ERGONOMIC_VARS
    if metrics.token_count >= thresholds.token_complexity_pass:
        return WrapperStatus.PASS, WrapperReason.COMPLEX
    if metrics.token_count >= thresholds.token_complexity_warn:
        return WrapperStatus.WARN, WrapperReason.TOKEN_WARN
    return WrapperStatus.FAIL, WrapperReason.TOKEN_FAIL


class TrivialWrapperClassifier:
    """Run the wrapper rules over a batch of functions."""

    def __init__(
        self,
        calculator: MetricCalculator,
        annotations: AnnotationChecker,
        thresholds: ThresholdConfig,
    ):
        self.calculator = calculator
        self.annotations = annotations
        self.thresholds = thresholds

    def evaluate(self, record: FunctionRecord) -> WrapperVerdict:
        metrics = self.calculator.compute(record)
        # Long functions pass before the annotation lookup is needed
        annotated = (
            metrics.meaningful_line_count <= self.thresholds.max_lines
            and self.annotations.is_exempt(record)
        )
        status, reason = classify(metrics, annotated, self.thresholds)
        return WrapperVerdict(function=record, metrics=metrics, status=status, reason=reason)

    def evaluate_all(self, records: Iterable[FunctionRecord]) -> list[WrapperVerdict]:
        verdicts = [self.evaluate(record) for record in records]
        flagged = sum(1 for v in verdicts if v.status is not WrapperStatus.PASS)
        logger.info(f"Wrapper check: {len(verdicts)} functions, {flagged} flagged")
        return verdicts
