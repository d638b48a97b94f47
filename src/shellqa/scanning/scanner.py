"""Source file discovery and loading.

The scanner walks a root directory once, keeps files whose *name* matches an
include glob and whose root-relative path contains no exclude substring, and
reads each match fully into a SourceFile.
"""

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig, default_config
from ..exceptions import Diagnostic, ErrorCode, FileAccessError
from ..logging_config import get_logger
from .models import SourceFile

logger = get_logger(__name__)


class SourceScanner:
    """Enumerate and read shell sources under a root directory."""

    def __init__(self, root_dir: "Path | str", config: Optional[AnalysisConfig] = None):
        self.root_dir = Path(root_dir)
        self.config = config or default_config
        self.diagnostics: list[Diagnostic] = []
        logger.debug(f"Initialized {self.__class__.__name__} for {self.root_dir}")

    # ── Selection ──────────────────────────────────────────────

    def matches(self, rel_path: str) -> bool:
        """Whether a root-relative POSIX path is selected by the config."""
        name = rel_path.rsplit("/", 1)[-1]
        if not any(fnmatchcase(name, pattern) for pattern in self.config.include_patterns):
            return False
        return not any(excl in rel_path for excl in self.config.exclude_patterns)

    def discover(self) -> list[str]:
        """Return the sorted, de-duplicated relative paths of candidate files.

        Symlinked directories are not descended into, so symlink loops
        cannot recur. Hidden directories and files are skipped unless
        ``allow_hidden_files`` is set.
        """
        found: dict[str, None] = {}
        allow_hidden = self.config.allow_hidden_files

        def _on_error(err: OSError) -> None:
            logger.warning(f"Cannot list {err.filename}: {err.strerror}")

        for dirpath, dirnames, filenames in os.walk(
            self.root_dir, followlinks=False, onerror=_on_error
        ):
            if not allow_hidden:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            dirnames.sort()

            rel_dir = Path(dirpath).relative_to(self.root_dir)
            for filename in sorted(filenames):
                if not allow_hidden and filename.startswith("."):
                    continue
                rel_path = (rel_dir / filename).as_posix()
                if self.matches(rel_path):
                    found.setdefault(rel_path, None)

        paths = sorted(found)
        logger.info(f"Discovered {len(paths)} candidate files under {self.root_dir}")
        return paths

    # ── Loading ────────────────────────────────────────────────

    def read(self, rel_path: str) -> SourceFile:
        """Read one file into a SourceFile.

        Raises:
            FileAccessError: If the file cannot be read or looks binary
        """
        filepath = self.root_dir / rel_path
        try:
            raw = filepath.read_bytes()
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot read file: {e.strerror or e}")

        if b"\x00" in raw[:8192]:
            raise FileAccessError(filepath, "File looks binary")

        content = raw.decode("utf-8", errors="replace")
        return SourceFile(
            path=rel_path,
            abs_path=filepath.resolve(),
            lines=tuple(content.splitlines()),
        )

    def load(self, rel_path: str) -> tuple[Optional[SourceFile], Optional[Diagnostic]]:
        """Size-check and read one file, turning failures into diagnostics."""
        filepath = self.root_dir / rel_path
        try:
            size = filepath.stat().st_size
        except OSError as e:
            logger.warning(f"Cannot stat {filepath}: {e}")
            return None, Diagnostic(ErrorCode.SQ100, f"Cannot stat file: {e}", path=rel_path)

        if size > self.config.max_file_size_bytes:
            logger.debug(f"Skipped (size): {filepath} ({size} bytes)")
            return None, Diagnostic(
                ErrorCode.SQ101,
                f"Skipped: {size} bytes exceeds size limit",
                path=rel_path,
                context={"size": size},
            )

        try:
            return self.read(rel_path), None
        except FileAccessError as e:
            logger.warning(f"Access error for {filepath}: {e.reason}")
            return None, Diagnostic(ErrorCode.SQ100, e.reason, path=rel_path)

    def scan(self) -> list[SourceFile]:
        """Discover and read every candidate file sequentially.

        Unreadable files are skipped; their diagnostics accumulate on
        ``self.diagnostics``.
        """
        sources: list[SourceFile] = []
        for rel_path in self.discover():
            source, diagnostic = self.load(rel_path)
            if diagnostic is not None:
                self.diagnostics.append(diagnostic)
            if source is not None:
                sources.append(source)

        logger.info(
            f"Scan complete: {len(sources)} read, {len(self.diagnostics)} skipped"
        )
        return sources
