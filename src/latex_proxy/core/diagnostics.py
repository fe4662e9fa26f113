"""Turn a raw LaTeX log into structured diagnostics.

Only the current line is inspected for an ``l.<n>`` marker: an error whose
marker sits on a following line gets line number 0.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from latex_proxy.models import DiagnosticRecord

_ERROR_PATTERN = re.compile(r"^! (.+)$")
_LINE_PATTERN = re.compile(r"l\.(\d+)")
_WARNING_PATTERN = re.compile(r"^LaTeX Warning: (.+)$")

DEFAULT_MESSAGE_CHARS = 200


def parse_latex_log(log: str, max_message_chars: int = DEFAULT_MESSAGE_CHARS) -> list[DiagnosticRecord]:
    records: list[DiagnosticRecord] = []
    for raw_line in log.split("\n"):
        line = raw_line.rstrip("\r")

        error_match = _ERROR_PATTERN.match(line)
        if error_match:
            line_match = _LINE_PATTERN.search(line)
            records.append(
                DiagnosticRecord(
                    line=int(line_match.group(1)) if line_match else 0,
                    message=error_match.group(1)[:max_message_chars],
                    type="error",
                )
            )

        warning_match = _WARNING_PATTERN.match(line)
        if warning_match:
            records.append(
                DiagnosticRecord(line=0, message=warning_match.group(1)[:max_message_chars], type="warning")
            )
    return records


def limit_diagnostics(records: Sequence[DiagnosticRecord], max_count: int) -> tuple[DiagnosticRecord, ...]:
    """Keep the first ``max_count`` records, earliest first."""
    return tuple(records[:max_count])
