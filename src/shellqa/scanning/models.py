"""Data models produced by scanning and extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class SourceFile:
    """A shell source file read fully into memory.

    Attributes:
        path: POSIX path relative to the scan root (used in every report)
        abs_path: Absolute path on disk
        lines: Raw lines with line terminators removed
    """

    path: str
    abs_path: Path
    lines: tuple[str, ...]


@dataclass(frozen=True)
class FunctionRecord:
    """One brace-delimited shell function.

    ``body`` holds the text strictly inside the outer braces, one entry per
    source line. ``meaningful_body`` drops blanks, comments, declarations,
    bare returns and lone closing braces.
    """

    name: str
    file: SourceFile = field(repr=False, compare=False)
    path: str
    start_line: int
    end_line: int
    body: tuple[str, ...] = field(repr=False)
    meaningful_body: tuple[str, ...] = field(repr=False)

    def __post_init__(self) -> None:
        if self.start_line > self.end_line:
            raise ValueError(
                f"{self.name}: start_line {self.start_line} after end_line {self.end_line}"
            )

    @property
    def key(self) -> tuple[str, str]:
        return (self.path, self.name)

    @property
    def preview(self) -> str:
        """First meaningful line, for display."""
        return self.meaningful_body[0].strip() if self.meaningful_body else ""


@dataclass(frozen=True)
class Metrics:
    """Complexity and usage numbers for one function.

    Attributes:
        meaningful_line_count: Lines of actual logic
        variable_count: Distinct variable references ($x, ${x}, $1, $@, ...)
        token_count: Whitespace-delimited tokens in the meaningful lines
        local_usage_count: Whole-word occurrences in the defining file, minus the definition
        global_usage_count: Whole-word occurrences across all files, minus the definition
    """

    meaningful_line_count: int
    variable_count: int
    token_count: int
    local_usage_count: int
    global_usage_count: int

    def to_dict(self) -> dict[str, int]:
        return {
            "lines": self.meaningful_line_count,
            "variables": self.variable_count,
            "tokens": self.token_count,
            "local_usages": self.local_usage_count,
            "global_usages": self.global_usage_count,
        }
