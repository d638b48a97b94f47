"""Output formatters for shellqa."""

from .base import BaseFormatter
from .github_formatter import GithubFormatter
from .json_formatter import JsonFormatter
from .quiet_formatter import QuietFormatter
from .rich_formatter import RichFormatter
from .tap_formatter import TapFormatter

FORMATTERS = {
    "rich": RichFormatter,
    "json": JsonFormatter,
    "tap": TapFormatter,
    "github": GithubFormatter,
    "quiet": QuietFormatter,
}


def get_formatter(name: str, **options) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "tap", "github", "quiet"
        **options: Passed to the rich formatter (console, thresholds,
            markers, show_help); ignored by the plain-text formatters

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    if cls is RichFormatter:
        return cls(**options)
    return cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "TapFormatter",
    "GithubFormatter",
    "QuietFormatter",
    "FORMATTERS",
    "get_formatter",
]
