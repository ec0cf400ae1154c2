"""
Rendering of check results for git-upgrade-checker.

Rows are rendered either as a box-drawn, fixed-width text table for the
terminal or as a CSV export. Terminal colour is a styling parameter of
the table renderer and never leaks into the export.
"""

from __future__ import annotations

import csv
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from .domain import RenderRow, split_path
from .errors import OutputWriteError

NUMBER_HEADER = "Number"
DIRECTORY_HEADER = "File Path"
NAME_HEADER = "File Name"
CHANGES_HEADER = "Changes"

EXPORT_HEADER = ("number", "file_path", "file_name", "changes")

RESET = "\033[0m"


class Highlight(Enum):
    """
    Terminal colour applied to the data rows of a table.
    """

    NONE = ""
    RED = "\033[31m"
    YELLOW = "\033[33m"


@dataclass(frozen=True)
class ColumnWidths:
    number: int
    directory: int
    name: int


def compute_column_widths(paths: Sequence[str]) -> ColumnWidths:
    """
    Return the width of the number, directory and name columns.

    Each column is as wide as its header label or its longest rendered
    value, whichever is larger.
    """

    number_width = len(NUMBER_HEADER)
    directory_width = len(DIRECTORY_HEADER)
    name_width = len(NAME_HEADER)

    for position, path in enumerate(paths, start=1):
        directory, name = split_path(path)
        number_width = max(number_width, len(str(position)))
        directory_width = max(directory_width, len(directory))
        name_width = max(name_width, len(name))

    return ColumnWidths(number=number_width, directory=directory_width, name=name_width)


def render_table(
    rows: Sequence[RenderRow],
    widths: ColumnWidths,
    highlight: Highlight = Highlight.NONE,
    out: Optional[TextIO] = None,
) -> None:
    """
    Write rows as a box-drawn table, each row followed by its annotated diff.
    """

    if out is None:
        out = sys.stdout

    changes_width = max([len(CHANGES_HEADER)] + [len(str(row.change_size)) for row in rows])
    spans = [widths.number, widths.directory, widths.name, changes_width]

    out.write(_border("┌", "┬", "┐", spans))
    out.write(
        _cells(spans, [NUMBER_HEADER, DIRECTORY_HEADER, NAME_HEADER, CHANGES_HEADER]) + "\n"
    )
    out.write(_border("├", "┼", "┤", spans))

    for row in rows:
        line = _cells(
            spans,
            [str(row.number), row.directory, row.name, str(row.change_size)],
        )
        if highlight is not Highlight.NONE:
            line = f"{highlight.value}{line}{RESET}"
        out.write(line + "\n")
        if row.annotated_diff:
            out.write(row.annotated_diff)
            if not row.annotated_diff.endswith("\n"):
                out.write("\n")

    out.write(_border("└", "┴", "┘", spans))


def _border(left: str, middle: str, right: str, spans: Iterable[int]) -> str:
    return left + middle.join("─" * (span + 2) for span in spans) + right + "\n"


def _cells(spans: Sequence[int], values: Sequence[str]) -> str:
    padded = [value.ljust(span) for span, value in zip(spans, values)]
    return "│ " + " │ ".join(padded) + " │"


def write_tabular_export(rows: Iterable[RenderRow], stream: TextIO) -> None:
    """
    Write rows as CSV: a header record, then one record per row.

    The changes field carries the full annotated diff; csv quoting keeps
    embedded newlines, commas and quotes intact for readers.
    """

    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for row in rows:
        writer.writerow([str(row.number), row.directory, row.name, row.annotated_diff])


def read_tabular_export(stream: TextIO) -> List[Tuple[str, str, str, str]]:
    """
    Parse an export written by write_tabular_export back into records.

    Raises ValueError naming the offending line when a record does not
    have exactly one field per header column.
    """

    reader = csv.reader(stream)
    records: List[Tuple[str, str, str, str]] = []
    for i, record in enumerate(reader):
        if i == 0 and tuple(record) == EXPORT_HEADER:
            continue
        if len(record) != len(EXPORT_HEADER):
            raise ValueError(
                f"export line {reader.line_num}: expected {len(EXPORT_HEADER)} fields, "
                f"got {len(record)}"
            )
        number, file_path, file_name, changes = record
        records.append((number, file_path, file_name, changes))
    return records


def export_to_file(rows: Iterable[RenderRow], output_path: str) -> None:
    """
    Write the CSV export to output_path, replacing any existing file.
    """

    try:
        with open(output_path, "w", encoding="utf-8", newline="") as handle:
            write_tabular_export(rows, handle)
    except OSError as exc:
        raise OutputWriteError(f"cannot write {output_path}: {exc}") from exc
