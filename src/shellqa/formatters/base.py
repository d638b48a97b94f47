"""Base formatter interface for shellqa output rendering."""

from abc import ABC, abstractmethod

from ..report import QAReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: QAReport) -> None:
        """Write the report to the terminal."""

    @abstractmethod
    def format(self, report: QAReport) -> str:
        """Return formatted string representation of the report."""
