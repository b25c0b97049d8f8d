"""CLI entry point for gitsearch."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from typing import Optional, Sequence

from rich.console import Console

from gitsearch.config import ScanOptions
from gitsearch.errors import InvalidArgument
from gitsearch.log import setup_logging
from gitsearch.paths import normalize_root
from gitsearch.scanner import ScanStats, scan

logger = logging.getLogger(__name__)

ERROR_STYLE = "bold #f85149"

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitsearch",
        description="List git repositories under a directory that have uncommitted changes or untracked files.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to search (default: current directory)",
    )
    return parser


def _error(message: str) -> None:
    Console(stderr=True, highlight=False).print(message, style=ERROR_STYLE, markup=False)


def _emit(path: str) -> None:
    """Write path as the raw filesystem bytes, so undecodable names survive."""
    out = sys.stdout.buffer
    out.write(os.fsencode(path) + b"\n")
    out.flush()


def run(path: Optional[str], options: ScanOptions) -> ScanStats:
    """Normalize path, scan it and print each dirty repository as it is found."""
    root = normalize_root(path)
    stats = ScanStats()
    stop_event = threading.Event()
    logger.debug("scanning %s", root)

    try:
        for repo in scan(root, options=options, stop_event=stop_event, stats=stats):
            _emit(repo)
    except KeyboardInterrupt:
        stop_event.set()
        raise

    logger.debug(
        "visited %d directories: %d repositories, %d dirty, %d skipped, %d failed",
        stats.directories, stats.repositories, stats.dirty, stats.skipped, stats.failed,
    )
    return stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the gitsearch CLI."""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        options = ScanOptions.from_env()
        run(args.path, options)
    except InvalidArgument as exc:
        _error(str(exc))
        return EXIT_INVALID
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except BrokenPipeError:
        # Reader went away (e.g. piped into `head`); silence the flush at exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_OK

    return EXIT_OK
