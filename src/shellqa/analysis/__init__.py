"""Per-function metrics, annotation lookup and the trivial-wrapper check."""

from .annotations import AnnotationChecker
from .metrics import MetricCalculator, UsageIndex, count_tokens, count_variables
from .wrappers import (
    TrivialWrapperClassifier,
    WrapperReason,
    WrapperStatus,
    WrapperVerdict,
    classify,
)

__all__ = [
    "AnnotationChecker",
    "MetricCalculator",
    "UsageIndex",
    "count_tokens",
    "count_variables",
    "TrivialWrapperClassifier",
    "WrapperReason",
    "WrapperStatus",
    "WrapperVerdict",
    "classify",
]
