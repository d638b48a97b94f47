"""Public API for shellqa.

Example:
    >>> from shellqa import check
    >>>
    >>> report = check("/path/to/scripts")
    >>> report.should_fail
    False
    >>>
    >>> # With overrides
    >>> report = check("/path/to/scripts", max_lines=3, check_duplication=False)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_config
from .core import ShellQA
from .logging_config import get_logger
from .report import QAReport

logger = get_logger(__name__)


def check(
    path: str = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> QAReport:
    """Run both QA checks over a directory of shell sources.

    Args:
        path: Root directory to scan (default: current directory)
        config_file: Optional explicit TOML config file
        **overrides: Configuration overrides, e.g. ``workers=4`` or any
            threshold name such as ``similarity_threshold=0.9``

    Returns:
        QAReport with findings, counts and diagnostics

    Raises:
        ConfigurationError: If the configuration is invalid
        InvalidPathError: If ``path`` is not a readable directory
    """
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Resolved configuration: {config}")
    return ShellQA(path, config=config).run()
