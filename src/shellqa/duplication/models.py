"""Duplicate-name findings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..scanning.models import FunctionRecord


class ComparisonMode(Enum):
    FULL_NAME = "full_name"
    STRIPPED_NAME = "stripped_name"


class Verdict(Enum):
    FAIL = "fail"
    WARN = "warn"


@dataclass(frozen=True)
class SimilarityPair:
    """Two functions from different files with similar names.

    ``first`` sorts before ``second`` by (path, name). ``first_compared`` and
    ``second_compared`` are the strings actually scored: the full names, or
    the stripped names in STRIPPED_NAME mode.
    """

    first: FunctionRecord
    second: FunctionRecord
    mode: ComparisonMode
    score: float
    verdict: Verdict
    first_compared: str
    second_compared: str

    def __post_init__(self) -> None:
        if self.first.path == self.second.path:
            raise ValueError(f"same-file pair in {self.first.path}")

    @property
    def sort_key(self) -> tuple:
        return (
            self.mode.value,
            self.first.path,
            self.first.name,
            self.second.path,
            self.second.name,
        )

    def describe(self) -> str:
        if self.mode is ComparisonMode.STRIPPED_NAME:
            return (
                f"Similar core names ({self.score:.3f}): "
                f"'{self.first.name}' ['{self.first_compared}'] <-> "
                f"'{self.second.name}' ['{self.second_compared}']"
            )
        return f"Similar functions ({self.score:.3f}): '{self.first.name}' <-> '{self.second.name}'"

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "verdict": self.verdict.value,
            "score": round(self.score, 3),
            "first": {
                "name": self.first.name,
                "compared": self.first_compared,
                "file": self.first.path,
                "line": self.first.start_line,
            },
            "second": {
                "name": self.second.name,
                "compared": self.second_compared,
                "file": self.second.path,
                "line": self.second.start_line,
            },
        }


@dataclass
class ComparisonStats:
    """Work done by one comparison pass.

    Attributes:
        entries: Names taking part in the pass
        candidate_pairs: Cross-file pairs examined
        pruned: Pairs skipped by the length bound
        scored: Pairs whose edit distance was computed
    """

    entries: int = 0
    candidate_pairs: int = 0
    pruned: int = 0
    scored: int = 0

    def merge(self, other: "ComparisonStats") -> None:
        self.candidate_pairs += other.candidate_pairs
        self.pruned += other.pruned
        self.scored += other.scored


@dataclass
class DuplicationResult:
    """All pairs from both passes plus per-pass statistics."""

    pairs: list[SimilarityPair] = field(default_factory=list)
    full_stats: ComparisonStats = field(default_factory=ComparisonStats)
    stripped_stats: ComparisonStats = field(default_factory=ComparisonStats)

    @property
    def comparisons(self) -> int:
        return self.full_stats.candidate_pairs + self.stripped_stats.candidate_pairs

    def by_mode(self, mode: ComparisonMode) -> list[SimilarityPair]:
        return [p for p in self.pairs if p.mode is mode]
