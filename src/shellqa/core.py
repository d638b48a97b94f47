"""Pipeline orchestrator for shellqa.

Stages, in order:

    scan  ->  extract (per file, parallel)  ->  barrier
          ->  usage index + wrapper check
          ->  duplicate detection (pairwise, parallel)
          ->  QAReport

Everything after the barrier needs the complete corpus: global usage counts
and cross-file similarity both look at every file.
"""

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from .analysis import AnnotationChecker, MetricCalculator, TrivialWrapperClassifier
from .config import AnalysisConfig, default_config
from .duplication import DuplicateDetector
from .exceptions import Diagnostic, InvalidPathError
from .logging_config import get_logger
from .report import QAReport
from .scanning import FunctionExtractor, FunctionRecord, SourceFile, SourceScanner

logger = get_logger(__name__)

# Fewer files than this are read sequentially (pool overhead not worth it)
_PARALLEL_MIN_FILES = 10


def validate_root_directory(path: Path) -> Path:
    """Resolve ``path`` and make sure it is a readable directory.

    Raises:
        InvalidPathError: If path is invalid
    """
    try:
        resolved = path.resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidPathError(path, f"Cannot resolve path: {e}")

    if not resolved.exists():
        raise InvalidPathError(resolved, "Directory does not exist")
    if not resolved.is_dir():
        raise InvalidPathError(resolved, "Path is not a directory")
    if not os.access(resolved, os.R_OK):
        raise InvalidPathError(resolved, "Directory is not readable")

    return resolved


def effective_workers(config: AnalysisConfig, file_count: int) -> int:
    """Worker count for parallel stages.

    Strategy:
    1. If config.workers is set: use that value
    2. If small codebase (<100 files): use 1
    3. Otherwise: use system cores, capped at 8
    """
    if config.workers is not None:
        return config.workers
    if file_count < 100:
        return 1
    return min(os.cpu_count() or 1, 8)


class ShellQA:
    """Run the QA checks over one directory tree."""

    def __init__(self, root_dir: "Path | str", config: Optional[AnalysisConfig] = None):
        self.root_dir = validate_root_directory(Path(root_dir))
        self.config = config or default_config
        self.scanner = SourceScanner(self.root_dir, self.config)
        self.extractor = FunctionExtractor()
        logger.info(f"Checking shell sources under: {self.root_dir}")

    # ------------------------------------------------------------------
    # Extraction stage
    # ------------------------------------------------------------------

    def _process_file(
        self, rel_path: str
    ) -> tuple[Optional[SourceFile], list[FunctionRecord], list[Diagnostic]]:
        """Read and extract one file. Touches no shared state."""
        source, diagnostic = self.scanner.load(rel_path)
        if source is None:
            return None, [], [diagnostic] if diagnostic else []
        records, diagnostics = self.extractor.extract(source)
        return source, records, diagnostics

    def collect(self) -> tuple[list[SourceFile], list[FunctionRecord], list[Diagnostic]]:
        """Scan and extract every candidate file.

        Returns:
            Tuple of (sources, records, diagnostics), all in path order
            regardless of worker scheduling.
        """
        paths = self.scanner.discover()
        workers = effective_workers(self.config, len(paths))
        results: dict[str, tuple] = {}

        if workers == 1 or len(paths) < _PARALLEL_MIN_FILES:
            for rel_path in paths:
                results[rel_path] = self._process_file(rel_path)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {executor.submit(self._process_file, p): p for p in paths}
                for future in as_completed(futures):
                    results[futures[future]] = future.result()

        sources: list[SourceFile] = []
        records: list[FunctionRecord] = []
        diagnostics: list[Diagnostic] = []
        for rel_path in paths:
            source, file_records, file_diagnostics = results[rel_path]
            if source is not None:
                sources.append(source)
            records.extend(file_records)
            diagnostics.extend(file_diagnostics)

        logger.info(
            f"Extracted {len(records)} functions from {len(sources)} files "
            f"({len(diagnostics)} diagnostics)"
        )
        return sources, records, diagnostics

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def run(self) -> QAReport:
        """Run every enabled check and aggregate the findings."""
        cfg = self.config
        sources, records, diagnostics = self.collect()

        report = QAReport(
            root=str(self.root_dir),
            files_scanned=len(sources),
            functions_scanned=len(records),
            diagnostics=diagnostics,
        )

        if not sources:
            logger.info("No shell files matched, nothing to check")
            return report

        if cfg.check_trivial_wrappers:
            classifier = TrivialWrapperClassifier(
                calculator=MetricCalculator.for_corpus(sources, records),
                annotations=AnnotationChecker(cfg.annotation_markers, cfg.annotation_window),
                thresholds=cfg.thresholds,
            )
            report.wrapper_verdicts = classifier.evaluate_all(records)
            report.wrappers_checked = True

        if cfg.check_duplication:
            detector = DuplicateDetector(
                thresholds=cfg.thresholds,
                ignore_name_patterns=cfg.ignore_name_patterns,
                workers=effective_workers(cfg, len(sources)),
            )
            report.duplication = detector.detect(records)

        logger.info(
            f"Run complete: should_fail={report.should_fail}, counts={report.counts}"
        )
        return report
