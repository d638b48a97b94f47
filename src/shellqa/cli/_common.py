"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()

EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def resolve_config(
    config: Optional[Path] = None,
    only: Optional[str] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if only == "duplication":
        overrides["check_trivial_wrappers"] = False
    elif only == "wrappers":
        overrides["check_duplication"] = False
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)
