"""
Logging helpers for git-upgrade-checker.

Report output goes to stdout; log records go to stderr so they never mix
with a table or an export piped elsewhere. The handler is attached to the
package logger rather than the root logger, so embedding applications keep
their own root configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "upgrade_checker"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def verbosity_to_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route package log records at the level implied by verbosity to stderr.

    Calling this again replaces the previously installed handler instead of
    stacking a second one.
    """

    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(verbosity_to_level(verbosity))
    return logger
