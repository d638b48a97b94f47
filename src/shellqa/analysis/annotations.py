"""Exemption markers in the comments above a function definition."""

import re
from typing import Iterable, Optional

from ..config import MAX_ANNOTATION_WINDOW
from ..scanning.models import FunctionRecord

# A comment starts at a "#" that opens a word; $# and ${#x} are not comments
_COMMENT_START = re.compile(r"(?:^|\s)#")


class AnnotationChecker:
    """Look for marker strings in comments just above a definition.

    Only comment text counts: a ``#`` at the start of a line or after
    whitespace. A marker in code before the comment, or after the ``#`` of a
    parameter expansion such as ``$#`` or ``${#arr[@]}``, does not exempt
    anything.
    """

    def __init__(self, markers: Iterable[str], window: int = MAX_ANNOTATION_WINDOW):
        self.markers = tuple(m for m in markers if m)
        self.window = max(0, min(window, MAX_ANNOTATION_WINDOW))

    def find_marker(self, record: FunctionRecord) -> Optional[str]:
        """Return the first marker found above ``record``, if any."""
        if not self.markers or self.window == 0:
            return None

        definition = record.start_line - 1
        for line in record.file.lines[max(0, definition - self.window) : definition]:
            match = _COMMENT_START.search(line)
            if match is None:
                continue
            comment = line[match.end() - 1 :]
            for marker in self.markers:
                if marker in comment:
                    return marker
        return None

    def is_exempt(self, record: FunctionRecord) -> bool:
        return self.find_marker(record) is not None
