"""
Core domain models for git-upgrade-checker.

These dataclasses describe the outcome of a reconciliation and the
per-file records rendered into tables or exports. They avoid any direct
git or terminal dependencies so every stage can be tested in isolation.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Changed paths split by whether they exist under the source tree.

    Every input path lands in exactly one of the two tuples, in the order
    git reported it.
    """

    found: Tuple[str, ...] = ()
    not_found: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DiffRecord:
    """
    One changed path together with its raw and annotated diff text.
    """

    path: str
    raw_diff: str = ""
    annotated_diff: str = ""


def split_path(path: str) -> Tuple[str, str]:
    """
    Split a git path into its directory (with trailing slash) and base name.

    Paths at the tree root render their directory as "./".
    """

    directory = posixpath.dirname(path) or "."
    return f"{directory}/", posixpath.basename(path)


@dataclass(frozen=True)
class RenderRow:
    """
    Display tuple for one line of a table or export.

    number is 1-based within the sequence being rendered. change_size is
    the character length of the raw diff, not a line count.
    """

    number: int
    directory: str
    name: str
    change_size: int
    annotated_diff: str

    @classmethod
    def from_record(cls, record: DiffRecord, position: int) -> "RenderRow":
        directory, name = split_path(record.path)
        return cls(
            number=position,
            directory=directory,
            name=name,
            change_size=len(record.raw_diff),
            annotated_diff=record.annotated_diff,
        )
