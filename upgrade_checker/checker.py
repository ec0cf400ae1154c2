"""
High-level orchestration for git-upgrade-checker.

The checker is responsible for:
  - obtaining the paths changed by the last update of the target tree,
  - reconciling them against the source tree,
  - fetching and annotating diffs for the rows being reported, and
  - rendering the result as a table or a CSV export.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence, TextIO

from .annotate import annotate
from .config import Config
from .domain import DiffRecord, ReconciliationResult, RenderRow
from .git_adapter import ChangeSource, GitChangeSource
from .reconcile import reconcile
from .render import Highlight, compute_column_widths, export_to_file, render_table

LOG = logging.getLogger(__name__)

FOUND_TITLE = "Files found in both projects:"
NOT_FOUND_TITLE = "Files not found in Updated Source Project:"


def run_check(
    config: Config,
    source: Optional[ChangeSource] = None,
    out: Optional[TextIO] = None,
) -> ReconciliationResult:
    """
    Run a full check for config and return the reconciliation result.

    Raises ConfigurationError for missing inputs, ExternalToolError when
    the changed paths cannot be listed and OutputWriteError when the
    export file cannot be written.
    """

    config.validate()
    if source is None:
        source = GitChangeSource(timeout=config.timeout)
    if out is None:
        out = sys.stdout

    changed = [path for path in source.list_changed_paths(config.target) if path]
    LOG.info("%d path(s) changed in %s", len(changed), config.target)

    result = reconcile(changed, config.source)

    if config.debug:
        _print_debug_tables(result, source, config, out)
    elif config.output:
        rows = _build_rows(result.found, source, config.target)
        export_to_file(rows, config.output)
        LOG.info("Wrote %d row(s) to %s", len(rows), config.output)
    else:
        rows = _build_rows(result.found, source, config.target)
        render_table(rows, compute_column_widths(result.found), out=out)

    return result


def _print_debug_tables(
    result: ReconciliationResult,
    source: ChangeSource,
    config: Config,
    out: TextIO,
) -> None:
    if result.found:
        out.write(f"\n{FOUND_TITLE}\n")
        rows = _build_rows(result.found, source, config.target)
        render_table(rows, compute_column_widths(result.found), Highlight.RED, out)

    if result.not_found:
        # Nothing to diff against, so no diffs are fetched for these.
        out.write(f"\n{NOT_FOUND_TITLE}\n")
        rows = _build_rows(result.not_found, None, config.target)
        render_table(rows, compute_column_widths(result.not_found), Highlight.YELLOW, out)


def _build_rows(
    paths: Sequence[str],
    source: Optional[ChangeSource],
    root_dir: str,
) -> List[RenderRow]:
    """
    Build render rows for paths, fetching diffs only when source is given.
    """

    rows: List[RenderRow] = []
    for position, path in enumerate(paths, start=1):
        if source is None:
            record = DiffRecord(path=path)
        else:
            raw_diff = source.fetch_diff(root_dir, path)
            record = DiffRecord(path=path, raw_diff=raw_diff, annotated_diff=annotate(raw_diff))
        rows.append(RenderRow.from_record(record, position))
    return rows
