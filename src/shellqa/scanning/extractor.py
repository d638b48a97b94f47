"""Line-oriented extraction of shell function definitions.

A function opens on a line such as ``name() {`` or ``function name () {``
and closes when the running brace balance returns to zero. This is a
heuristic, not a shell grammar: braces inside quoted strings or
here-documents are counted like any other brace, and a definition nested
inside another function is just part of the outer body.
"""

import re
from typing import Optional

from ..exceptions import Diagnostic, ErrorCode, MalformedFunctionError
from ..logging_config import get_logger
from .models import FunctionRecord, SourceFile

logger = get_logger(__name__)

OPENER_RE = re.compile(r"^\s*(?:function\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*\(\s*\)\s*\{?")

_DECLARATION_RE = re.compile(r"^(?:local|readonly|export)(?:\s|$)")
_BARE_RETURN_RE = re.compile(r"^return(?:\s+(?:\d+|\$\?))?\s*;?$")


def is_meaningful(line: str) -> bool:
    """Whether a body line counts as logic.

    Blank lines, comments, local/readonly/export declarations, bare
    ``return``/``return N``/``return $?`` and lone closing braces do not.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return False
    if _DECLARATION_RE.match(stripped):
        return False
    if _BARE_RETURN_RE.match(stripped):
        return False
    return stripped != "}"


def meaningful_lines(body: "tuple[str, ...] | list[str]") -> tuple[str, ...]:
    return tuple(line for line in body if is_meaningful(line))


class FunctionExtractor:
    """Split a SourceFile into FunctionRecords."""

    def extract(self, source: SourceFile) -> tuple[list[FunctionRecord], list[Diagnostic]]:
        """Extract every top-level function in ``source``.

        Returns:
            Tuple of (records in file order, diagnostics for malformed functions)
        """
        records: list[FunctionRecord] = []
        diagnostics: list[Diagnostic] = []
        lines = source.lines
        index = 0

        while index < len(lines):
            match = OPENER_RE.match(lines[index])
            if match is None:
                index += 1
                continue

            name = match.group(1)
            try:
                record = self._consume(source, index, name)
            except MalformedFunctionError as e:
                logger.warning(f"{e.message} (line {e.line}), skipping")
                diagnostics.append(
                    Diagnostic(
                        ErrorCode.SQ200,
                        f"No closing brace for function '{name}'",
                        path=source.path,
                        line=e.line,
                        context={"function": name},
                    )
                )
                index += 1
                continue

            if record is None:
                index += 1
                continue

            records.append(record)
            index = record.end_line

        logger.debug(f"Extracted {len(records)} functions from {source.path}")
        return records, diagnostics

    def _consume(self, source: SourceFile, start: int, name: str) -> Optional[FunctionRecord]:
        """Follow braces from the opener at ``start`` to the matching close.

        Returns None when the definition does not have a brace body (for
        example ``name() ( subshell )``).

        Raises:
            MalformedFunctionError: If the file ends before the braces balance
        """
        lines = source.lines
        balance = 0
        seen_open = False
        body: list[str] = []

        for index in range(start, len(lines)):
            line = lines[index]
            segment_start = 0 if seen_open else None
            opened_here = False

            if not seen_open and index > start:
                stripped = line.strip()
                if stripped and not stripped.startswith("#") and not stripped.startswith("{"):
                    logger.debug(f"{source.path}:{start + 1}: '{name}' has no brace body")
                    return None

            for pos, char in enumerate(line):
                if char == "{":
                    balance += 1
                    if not seen_open:
                        seen_open = True
                        opened_here = True
                        segment_start = pos + 1
                elif char == "}" and seen_open:
                    balance -= 1
                    if balance == 0:
                        tail = line[segment_start:pos]
                        if tail.strip():
                            body.append(tail)
                        return FunctionRecord(
                            name=name,
                            file=source,
                            path=source.path,
                            start_line=start + 1,
                            end_line=index + 1,
                            body=tuple(body),
                            meaningful_body=meaningful_lines(body),
                        )

            if segment_start is None:
                continue
            segment = line[segment_start:]
            if opened_here and not segment.strip():
                continue
            body.append(segment)

        raise MalformedFunctionError(source.path, name, start + 1)
