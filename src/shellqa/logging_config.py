"""
Logging configuration for shellqa.

Log output goes to stderr through rich so it never mixes with report output
on stdout (JSON and TAP stay machine-readable). The level comes from the
resolved ``AnalysisConfig.verbosity``, so a config file, ``SHELLQA_VERBOSITY``
or the -v/-q flags all end up in the same place.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import AnalysisConfig, Verbosity

LOGGER_NAME = "shellqa"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: Verbosity = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the shellqa logger for one run.

    Args:
        verbosity: quiet (errors only), normal (warnings, e.g. skipped files
            and malformed functions) or verbose (per-file debug output)
        log_file: Optional path; every record is also appended there

    Returns:
        The ``shellqa`` logger
    """
    if verbosity not in LEVELS:
        raise ValueError(f"Unknown verbosity: {verbosity}")
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger


def configure_logging(config: AnalysisConfig) -> logging.Logger:
    """Set up logging from a resolved configuration."""
    return setup_logging(config.verbosity, config.log_file)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the shellqa namespace.

    ``get_logger("core")`` and ``get_logger("shellqa.core")`` return the same
    logger; ``get_logger()`` returns the package root.
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
