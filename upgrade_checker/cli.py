"""
Command-line interface for git-upgrade-checker.

This module is responsible for argument parsing and delegating to the
orchestration in the checker module.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from . import __version__
from .checker import run_check
from .config import DEFAULT_GIT_TIMEOUT, Config
from .errors import ConfigurationError, ExternalToolError, OutputWriteError
from .logging_utils import configure_logging

PROG = "git-upgrade-checker"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Check which files changed by the last update of a git project "
            "also exist in another directory, perfect for upgrading an "
            "ongoing live project."
        ),
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=["version", "help"],
        help="Print the version number or this help and exit.",
    )
    parser.add_argument(
        "-t",
        "--target",
        help="Directory of the original target project with git.",
    )
    parser.add_argument(
        "-s",
        "--source",
        help="Directory of the second project, that has the updated source code.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Print both the found and the not-found files, highlighted.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the found files and their diffs to this CSV file.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_GIT_TIMEOUT,
        help=f"Seconds to wait for each git command (default: {DEFAULT_GIT_TIMEOUT:g}).",
    )
    parser.add_argument(
        "-v",
        "--version",
        dest="show_version",
        action="store_true",
        help="Print the version number and exit.",
    )
    parser.add_argument(
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be specified multiple times).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse exits 2 on usage errors; every failure of this tool is 1.
        return 0 if exc.code == 0 else 1

    if args.show_version or args.command == "version":
        print(f"{PROG} version {__version__}")
        return 0
    if args.command == "help":
        parser.print_help()
        return 0

    config = Config(
        target=args.target,
        source=args.source,
        debug=args.debug,
        output=args.output,
        timeout=args.timeout,
        verbosity=args.verbose,
    )

    configure_logging(verbosity=config.verbosity)

    try:
        run_check(config)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130
    except ConfigurationError as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        parser.print_help()
        return 1
    except ExternalToolError as exc:
        print(f"{PROG}: error getting changed files: {exc}", file=sys.stderr)
        return 1
    except OutputWriteError as exc:
        print(f"{PROG}: error writing to file: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
