"""
shellqa - Quality checks for shell codebases

Extracts shell functions from a source tree and runs two checks over them:
near-duplicate function names across files, and short functions that only
wrap another command without adding anything.
"""

__version__ = "0.1.0"

from .api import check
from .core import ShellQA
from .report import QAReport

__all__ = [
    "check",  # Main entry point
    "ShellQA",  # Direct pipeline access
    "QAReport",
]
