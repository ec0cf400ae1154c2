"""
Classify changed paths by whether they exist under a second tree.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List

from .domain import ReconciliationResult

LOG = logging.getLogger(__name__)


def reconcile(paths: Iterable[str], target_root: str) -> ReconciliationResult:
    """
    Partition paths into those present under target_root and those absent.

    Files and directories both count as present. Only existence is
    checked; no content is read. A path whose existence cannot be
    determined (permission denied, invalid name) is reported as absent
    rather than raising.
    """

    found: List[str] = []
    not_found: List[str] = []

    for path in paths:
        if _exists(os.path.join(target_root, path)):
            found.append(path)
        else:
            not_found.append(path)

    LOG.info("%d changed path(s) found, %d not found", len(found), len(not_found))
    return ReconciliationResult(found=tuple(found), not_found=tuple(not_found))


def _exists(full_path: str) -> bool:
    try:
        os.stat(full_path)
    except (OSError, ValueError) as exc:
        LOG.debug("Treating %s as not found: %s", full_path, exc)
        return False
    return True
