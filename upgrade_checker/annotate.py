"""
Rewrite unified diff text so each changed line carries its line number.

Removed lines are tagged with their position in the old file and added
lines with their position in the new file. Context lines are dropped, so
the annotated text shows hunk headers and changed lines only.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

_HUNK_HEADER_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))?"
    r" \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))?"
    r" @@"
)

OLD_TAG = "<<<<<<OLD (line {lineno})>>>>>> {text}"
CHANGE_TAG = "<<<<<<CHANGE (line {lineno})>>>>>> {text}"


def annotate(raw_diff: str) -> str:
    """
    Return raw_diff with removed and added lines tagged by line number.

    Never raises: lines that are not understood are either copied through
    or dropped, and an unparseable hunk header resets both counters to
    zero.
    """

    emitted: List[str] = []
    old_line = 0
    new_line = 0
    in_hunk = False

    for line in raw_diff.split("\n"):
        if line.startswith("@@"):
            starts = _parse_hunk_header(line)
            if starts is None:
                old_line, new_line = 0, 0
            else:
                # Counters are bumped before tagging, so start one line early.
                old_line, new_line = starts[0] - 1, starts[1] - 1
            in_hunk = True
            emitted.append(line)
        elif line.startswith("diff --git "):
            in_hunk = False
            old_line += 1
            new_line += 1
            emitted.append(line)
        elif not in_hunk and (line.startswith("--- ") or line.startswith("+++ ")):
            emitted.append(line)
        elif line.startswith("-"):
            old_line += 1
            emitted.append(OLD_TAG.format(lineno=old_line, text=line[1:]))
        elif line.startswith("+"):
            new_line += 1
            emitted.append(CHANGE_TAG.format(lineno=new_line, text=line[1:]))
        elif line.startswith(" "):
            # Context is dropped and does not move the counters.
            continue
        elif line and not line.startswith("\\"):
            old_line += 1
            new_line += 1
            emitted.append(line)

    return "".join(f"{line}\n" for line in emitted)


def _parse_hunk_header(header: str) -> Optional[Tuple[int, int]]:
    match = _HUNK_HEADER_RE.match(header)
    if match is None:
        return None
    return int(match.group("old_start")), int(match.group("new_start"))
