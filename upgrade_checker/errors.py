"""
Custom exception types used across git-upgrade-checker.

The CLI maps each of these to a user-facing message and exit code;
anything else escaping the checker is treated as a bug.
"""

from __future__ import annotations


class UpgradeCheckerError(Exception):
    """Base class for all git-upgrade-checker specific errors."""


class ConfigurationError(UpgradeCheckerError):
    """Raised when required run inputs are missing or invalid."""


class ExternalToolError(UpgradeCheckerError):
    """Raised when a git invocation cannot be started or fails."""


class OutputWriteError(UpgradeCheckerError):
    """Raised when the tabular export cannot be written."""
