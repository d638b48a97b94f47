"""Cross-file duplicate detection over function names.

Two independent passes run over every (name, file) entry:

1. Full names: score >= full_fail_threshold fails, score >=
   similarity_threshold warns.
2. Stripped names (module prefix removed, see ``strip_prefix``): score >=
   strip_warn_threshold warns. This pass never fails, since shared suffixes
   like ``*_init`` or ``*_debug`` are a normal cross-module idiom.

Pairs defined in the same file are never compared. Names shorter than
min_name_length (after stripping, for pass 2) are left out.

The pairwise loop is O(n²) in the number of functions. Outer indices are
dealt round-robin to worker threads; each worker fills its own list and
the lists are merged after all workers finish.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from ..config import ThresholdConfig, DEFAULT_THRESHOLDS
from ..logging_config import get_logger
from ..scanning.models import FunctionRecord
from .models import (
    ComparisonMode,
    ComparisonStats,
    DuplicationResult,
    SimilarityPair,
    Verdict,
)
from .similarity import can_meet_threshold, similarity, strip_prefix

logger = get_logger(__name__)

# Below this many entries a single thread finishes before a pool spins up
_PARALLEL_MIN_ENTRIES = 200

Entry = tuple[str, FunctionRecord]


class DuplicateDetector:
    """Fuzzy-match function names across files."""

    def __init__(
        self,
        thresholds: Optional[ThresholdConfig] = None,
        ignore_name_patterns: Iterable[str] = (),
        workers: int = 1,
    ):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.ignore_patterns = [re.compile(p) for p in ignore_name_patterns]
        self.workers = max(1, workers)

    # ── Entry selection ────────────────────────────────────────

    def is_ignored(self, name: str) -> bool:
        return any(p.search(name) for p in self.ignore_patterns)

    def _unique(self, records: Iterable[FunctionRecord]) -> list[FunctionRecord]:
        """One record per (file, name), first definition wins, ignored names dropped."""
        seen: dict[tuple[str, str], FunctionRecord] = {}
        for record in records:
            if record.key in seen or self.is_ignored(record.name):
                continue
            seen[record.key] = record
        return sorted(seen.values(), key=lambda r: r.key)

    def full_name_entries(self, records: Iterable[FunctionRecord]) -> list[Entry]:
        min_len = self.thresholds.min_name_length
        return [(r.name, r) for r in self._unique(records) if len(r.name) >= min_len]

    def stripped_name_entries(self, records: Iterable[FunctionRecord]) -> list[Entry]:
        min_len = self.thresholds.min_name_length
        entries = []
        for record in self._unique(records):
            stripped = strip_prefix(record.name)
            if len(stripped) >= min_len:
                entries.append((stripped, record))
        return entries

    # ── Passes ─────────────────────────────────────────────────

    def detect(self, records: Iterable[FunctionRecord]) -> DuplicationResult:
        """Run both passes and return every WARN/FAIL pair, sorted."""
        records = list(records)
        t = self.thresholds
        result = DuplicationResult()

        full_entries = self.full_name_entries(records)
        full_pairs, result.full_stats = self._run_pass(
            full_entries,
            ComparisonMode.FULL_NAME,
            warn=t.similarity_threshold,
            fail=t.full_fail_threshold,
        )

        stripped_entries = self.stripped_name_entries(records)
        stripped_pairs, result.stripped_stats = self._run_pass(
            stripped_entries,
            ComparisonMode.STRIPPED_NAME,
            warn=t.strip_warn_threshold,
            fail=None,
        )

        result.pairs = sorted(full_pairs + stripped_pairs, key=lambda p: p.sort_key)
        logger.info(
            f"Duplication check: {len(full_entries)} full / {len(stripped_entries)} stripped "
            f"names, {result.comparisons} comparisons, {len(result.pairs)} findings"
        )
        return result

    def _run_pass(
        self,
        entries: list[Entry],
        mode: ComparisonMode,
        warn: float,
        fail: Optional[float],
    ) -> tuple[list[SimilarityPair], ComparisonStats]:
        stats = ComparisonStats(entries=len(entries))
        workers = self.workers if len(entries) >= _PARALLEL_MIN_ENTRIES else 1

        if workers == 1:
            pairs, partial = compare_entries(entries, range(len(entries)), mode, warn, fail)
            stats.merge(partial)
            return pairs, stats

        pairs: list[SimilarityPair] = []
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    compare_entries,
                    entries,
                    range(offset, len(entries), workers),
                    mode,
                    warn,
                    fail,
                )
                for offset in range(workers)
            ]
            for future in futures:
                chunk, partial = future.result()
                pairs.extend(chunk)
                stats.merge(partial)

        return pairs, stats


def compare_entries(
    entries: list[Entry],
    outer: Iterable[int],
    mode: ComparisonMode,
    warn: float,
    fail: Optional[float],
) -> tuple[list[SimilarityPair], ComparisonStats]:
    """Compare ``entries[i]`` with every later entry for each ``i`` in ``outer``.

    Pure function of its arguments, so disjoint ``outer`` ranges can run
    concurrently.
    """
    pairs: list[SimilarityPair] = []
    stats = ComparisonStats()
    count = len(entries)

    for i in outer:
        name_a, record_a = entries[i]
        for j in range(i + 1, count):
            name_b, record_b = entries[j]
            if record_a.path == record_b.path:
                continue

            stats.candidate_pairs += 1
            # The lowest tier bounds every tier above it
            if not can_meet_threshold(name_a, name_b, warn):
                stats.pruned += 1
                continue

            score = similarity(name_a, name_b)
            stats.scored += 1

            if fail is not None and score >= fail:
                verdict = Verdict.FAIL
            elif score >= warn:
                verdict = Verdict.WARN
            else:
                continue

            first, second = (record_a, record_b)
            first_name, second_name = (name_a, name_b)
            if record_b.key < record_a.key:
                first, second = second, first
                first_name, second_name = second_name, first_name

            pairs.append(
                SimilarityPair(
                    first=first,
                    second=second,
                    mode=mode,
                    score=score,
                    verdict=verdict,
                    first_compared=first_name,
                    second_compared=second_name,
                )
            )

    return pairs, stats
