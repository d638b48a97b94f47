"""Function-name duplication detection."""

from .detector import DuplicateDetector, compare_entries
from .models import (
    ComparisonMode,
    ComparisonStats,
    DuplicationResult,
    SimilarityPair,
    Verdict,
)
from .similarity import (
    can_meet_threshold,
    length_bound,
    levenshtein,
    similarity,
    strip_prefix,
)

__all__ = [
    "DuplicateDetector",
    "compare_entries",
    "ComparisonMode",
    "ComparisonStats",
    "DuplicationResult",
    "SimilarityPair",
    "Verdict",
    "can_meet_threshold",
    "length_bound",
    "levenshtein",
    "similarity",
    "strip_prefix",
]
