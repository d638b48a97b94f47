"""JSON formatter for shellqa."""

import json

from ..report import QAReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as JSON."""

    def render(self, report: QAReport) -> None:
        print(self.format(report))

    def format(self, report: QAReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
