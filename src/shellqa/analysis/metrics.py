"""Per-function complexity and usage metrics.

Counting rules (thresholds in ThresholdConfig were tuned against them):

* variables: distinct ``$name``, ``${name}``, ``$1``..``$9`` and the
  specials ``$@ $* $# $? $$`` in the meaningful lines
* tokens: whitespace-delimited words in the meaningful lines
* usages: whole-word occurrences of the function name, minus one for the
  definition itself, never below zero
"""

import re
from collections import Counter
from typing import Iterable

from ..logging_config import get_logger
from ..scanning.models import FunctionRecord, Metrics, SourceFile

logger = get_logger(__name__)

VARIABLE_RE = re.compile(r"\$\{?([A-Za-z_][A-Za-z0-9_]*|[0-9]|[@*#?$])")

# Maximal runs of word characters; a name occurs as a whole word exactly
# when one of these runs equals it.
_WORD_RE = re.compile(r"[A-Za-z0-9_]+")


def count_variables(lines: Iterable[str]) -> int:
    """Count distinct variable references across ``lines``."""
    seen: set[str] = set()
    for line in lines:
        seen.update(VARIABLE_RE.findall(line))
    return len(seen)


def count_tokens(lines: Iterable[str]) -> int:
    """Count whitespace-delimited tokens across ``lines``."""
    return sum(len(line.split()) for line in lines)


class UsageIndex:
    """Whole-word occurrence counts per file and across the corpus.

    Built once per run so usage lookups don't rescan every file for every
    function.
    """

    def __init__(self, sources: Iterable[SourceFile], names: Iterable[str]):
        wanted = set(names)
        self._per_file: dict[str, Counter] = {}
        self._total: Counter = Counter()

        for source in sources:
            counts: Counter = Counter()
            for line in source.lines:
                counts.update(w for w in _WORD_RE.findall(line) if w in wanted)
            self._per_file[source.path] = counts
            self._total.update(counts)

        logger.debug(
            f"Usage index: {len(self._per_file)} files, {len(self._total)} distinct names seen"
        )

    def occurrences(self, name: str, path: "str | None" = None) -> int:
        """Raw whole-word occurrences in one file, or everywhere if ``path`` is None."""
        if path is None:
            return self._total.get(name, 0)
        return self._per_file.get(path, Counter()).get(name, 0)

    def local_usages(self, name: str, path: str) -> int:
        return max(0, self.occurrences(name, path) - 1)

    def global_usages(self, name: str) -> int:
        return max(0, self.occurrences(name) - 1)


class MetricCalculator:
    """Compute Metrics for functions against a shared UsageIndex."""

    def __init__(self, usage_index: UsageIndex):
        self.usage_index = usage_index

    @classmethod
    def for_corpus(
        cls, sources: Iterable[SourceFile], records: Iterable[FunctionRecord]
    ) -> "MetricCalculator":
        return cls(UsageIndex(sources, (r.name for r in records)))

    def compute(self, record: FunctionRecord) -> Metrics:
        body = record.meaningful_body
        return Metrics(
            meaningful_line_count=len(body),
            variable_count=count_variables(body),
            token_count=count_tokens(body),
            local_usage_count=self.usage_index.local_usages(record.name, record.path),
            global_usage_count=self.usage_index.global_usages(record.name),
        )
