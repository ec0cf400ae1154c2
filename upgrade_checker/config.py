"""
Configuration model for git-upgrade-checker.

The CLI constructs a Config instance and passes it down into the checker
so behavior can be adjusted without relying on global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_GIT_TIMEOUT = 60.0


@dataclass
class Config:
    """
    Top-level configuration for a single check run.

    target is the git working tree whose last update supplies the changed
    paths; source is the second tree probed for those paths.
    """

    target: Optional[str] = None
    source: Optional[str] = None
    debug: bool = False
    output: Optional[str] = None
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT
    verbosity: int = 0

    def validate(self) -> None:
        if not self.target or not self.source:
            raise ConfigurationError("both target and source must be specified")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be a positive number of seconds")
