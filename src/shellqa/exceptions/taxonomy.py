"""Diagnostic codes for recoverable problems found during a run.

Error Code Convention:
    SQ1xx - Scanning errors
    SQ2xx - Extraction errors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for diagnostics and logging."""

    # Scanning errors (SQ1xx)
    SQ100 = "SQ100"  # File read error
    SQ101 = "SQ101"  # File skipped (too large)

    # Extraction errors (SQ2xx)
    SQ200 = "SQ200"  # Function has no matching closing brace


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem reported alongside the findings.

    Attributes:
        code: Structured error code for categorization
        message: Human-readable description
        path: File the problem was found in, if any
        line: 1-based line number, if any
        context: Additional context for machine-readable output
    """

    code: ErrorCode
    message: str
    path: str | None = None
    line: int | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        location = ""
        if self.path:
            location = f" {self.path}" + (f":{self.line}" if self.line else "")
        return f"[{self.code.value}]{location} {self.message}"

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "code": self.code.value,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "context": self.context,
        }
