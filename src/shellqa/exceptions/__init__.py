"""Exception hierarchy for shellqa."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    MalformedFunctionError,
)
from .base import ShellQAError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)
from .taxonomy import Diagnostic, ErrorCode

__all__ = [
    "ShellQAError",
    "AnalysisError",
    "FileAccessError",
    "MalformedFunctionError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "Diagnostic",
    "ErrorCode",
]
