"""Shell source discovery and function extraction."""

from .extractor import FunctionExtractor, is_meaningful, meaningful_lines
from .models import FunctionRecord, Metrics, SourceFile
from .scanner import SourceScanner

__all__ = [
    "FunctionExtractor",
    "FunctionRecord",
    "Metrics",
    "SourceFile",
    "SourceScanner",
    "is_meaningful",
    "meaningful_lines",
]
