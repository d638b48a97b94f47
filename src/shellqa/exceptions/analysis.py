"""Analysis-related exceptions: file access and function extraction."""

from pathlib import Path

from .base import ShellQAError


class AnalysisError(ShellQAError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or decoded."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class MalformedFunctionError(AnalysisError):
    """Raised when a function opener has no matching closing brace."""

    def __init__(self, filepath: str, name: str, line: int):
        super().__init__(
            f"Unterminated function '{name}' in {filepath}",
            details={"filepath": filepath, "function": name, "line": str(line)},
        )
        self.filepath = filepath
        self.name = name
        self.line = line
