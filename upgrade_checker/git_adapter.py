"""
Git integration for git-upgrade-checker.

The checker only needs two questions answered by version control: which
paths changed in the last update of a tree, and what the diff of one of
those paths looks like. ChangeSource captures that capability so the
reconciliation and rendering logic can run against a fake in tests;
GitChangeSource answers it by shelling out to the git CLI.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from .errors import ExternalToolError

LOG = logging.getLogger(__name__)

# Reflog entry for where HEAD pointed before the most recent update
# (pull, merge, checkout, commit).
PREVIOUS_UPDATE_REF = "HEAD@{1}"

# Print non-ASCII paths verbatim instead of C-quoted, so they can be joined
# onto another tree and passed back to git.
UNQUOTED_PATHS = ["-c", "core.quotePath=false"]


def _run_git(
    args: list[str],
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command and return the completed process.

    All git invocations go through this helper so error handling and
    logging are centralized.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise ExternalToolError(
            f"git command timed out after {timeout}s: {' '.join(cmd)}"
        ) from exc
    except OSError as exc:
        raise ExternalToolError(f"failed to execute git: {exc}") from exc

    if completed.returncode != 0:
        LOG.debug("git stderr: %s", completed.stderr)
        detail = (completed.stderr or "").strip()
        message = f"git command failed: {' '.join(cmd)}"
        if detail:
            message = f"{message}: {detail}"
        raise ExternalToolError(message)

    return completed


class ChangeSource(ABC):
    """
    Abstract interface for the version-control queries the checker needs.
    """

    @abstractmethod
    def list_changed_paths(self, root_dir: str) -> List[str]:
        """
        Return the paths changed by the most recent update of root_dir.

        Raises ExternalToolError when the query cannot be answered, e.g.
        because root_dir is not a git working tree.
        """

    @abstractmethod
    def fetch_diff(self, root_dir: str, path: str) -> str:
        """
        Return the raw unified diff of path between the previous and the
        current update point, or an empty string if it is unavailable.

        Implementations must not raise: one unreadable file never blocks
        reporting on the rest.
        """


class GitChangeSource(ChangeSource):
    """
    ChangeSource backed by the git command-line interface.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def list_changed_paths(self, root_dir: str) -> List[str]:
        completed = _run_git(
            [*UNQUOTED_PATHS, "-C", root_dir, "diff", "--name-only", PREVIOUS_UPDATE_REF],
            timeout=self.timeout,
        )
        # Splitting empty output yields a single blank entry; drop blanks so
        # "no changes" is simply an empty list.
        return [line for line in completed.stdout.strip().split("\n") if line.strip()]

    def fetch_diff(self, root_dir: str, path: str) -> str:
        try:
            completed = _run_git(
                [*UNQUOTED_PATHS, "-C", root_dir, "diff", PREVIOUS_UPDATE_REF, "--", path],
                timeout=self.timeout,
            )
        except ExternalToolError as exc:
            LOG.debug("No diff available for %s: %s", path, exc)
            return ""
        return completed.stdout
