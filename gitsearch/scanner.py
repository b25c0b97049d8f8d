"""Repo discovery: walk a directory tree and report repositories with uncommitted work."""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Callable, Deque, Iterator, Optional

from gitsearch.config import MARKER, ScanOptions
from gitsearch.errors import InspectionFailure, UnreadableDirectory
from gitsearch.git import is_dirty
from gitsearch.paths import with_trailing_sep

logger = logging.getLogger(__name__)

Inspector = Callable[[str], bool]


@dataclass
class ScanStats:
    directories: int = 0
    repositories: int = 0
    dirty: int = 0
    skipped: int = 0
    failed: int = 0


def is_repository(path: str, marker: str = MARKER) -> bool:
    """True when path holds the marker directory (a symlink to one counts)."""
    return os.path.isdir(os.path.join(path, marker))


def list_subdirectories(path: str, *, follow_symlinks: bool = False) -> list[str]:
    """Sorted names of the directories directly inside path, hidden ones included.

    Symlinks to directories are listed only when follow_symlinks is set.
    Raises UnreadableDirectory when path cannot be listed.
    """
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as exc:
        raise UnreadableDirectory(path, exc.strerror or str(exc)) from exc

    names: list[str] = []
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=follow_symlinks):
                names.append(entry.name)
        except OSError:
            # Entry vanished between listing and stat.
            continue
    names.sort()
    return names


def find_repositories(
    root: str,
    *,
    options: Optional[ScanOptions] = None,
    stop_event: Optional[threading.Event] = None,
    stats: Optional[ScanStats] = None,
) -> Iterator[str]:
    """Yield every repository root under root, depth-first with sorted siblings.

    root itself is yielded if it is a repository. A repository is never
    descended into, so nested repositories and submodules are not reported.
    Every yielded path ends with a separator.
    """
    options = options or ScanOptions()
    stats = stats if stats is not None else ScanStats()
    seen: set[tuple[int, int]] = set()
    stack = [with_trailing_sep(root)]

    while stack:
        if stop_event is not None and stop_event.is_set():
            logger.debug("scan cancelled with %d directories pending", len(stack))
            return

        path = stack.pop()

        if options.follow_symlinks:
            try:
                st = os.stat(path)
            except OSError as exc:
                logger.debug("skipping %s: %s", path, exc.strerror or exc)
                stats.skipped += 1
                continue
            key = (st.st_dev, st.st_ino)
            if key in seen:
                logger.debug("skipping %s: already visited through another link", path)
                continue
            seen.add(key)

        stats.directories += 1

        if is_repository(path, options.marker):
            stats.repositories += 1
            yield path
            continue

        try:
            names = list_subdirectories(path, follow_symlinks=options.follow_symlinks)
        except UnreadableDirectory as exc:
            logger.debug("skipping unreadable directory %s", exc)
            stats.skipped += 1
            continue

        # Reversed so the smallest name is popped first.
        stack.extend(path + name + os.sep for name in reversed(names))


def _stopped(stop_event: Optional[threading.Event]) -> bool:
    return stop_event is not None and stop_event.is_set()


def _default_inspector(options: ScanOptions) -> Inspector:
    return partial(is_dirty, git=options.git, timeout=options.timeout)


def _resolve(call: Callable[[], bool], stats: ScanStats) -> bool:
    """Run an inspection, turning an InspectionFailure into a clean result."""
    try:
        dirty = call()
    except InspectionFailure as exc:
        logger.warning("cannot inspect %s: %s", exc.path, exc.reason)
        stats.failed += 1
        return False
    if dirty:
        stats.dirty += 1
    return bool(dirty)


def scan(
    root: str,
    *,
    options: Optional[ScanOptions] = None,
    inspect: Optional[Inspector] = None,
    stop_event: Optional[threading.Event] = None,
    stats: Optional[ScanStats] = None,
) -> Iterator[str]:
    """Yield the repositories under root whose `git status` output is non-empty.

    Order is the traversal order of find_repositories. With options.workers
    above one, inspections run in a bounded thread pool but results are still
    yielded in traversal order.
    """
    options = options or ScanOptions()
    stats = stats if stats is not None else ScanStats()
    inspect = inspect or _default_inspector(options)
    repos = find_repositories(root, options=options, stop_event=stop_event, stats=stats)

    if options.workers <= 1:
        for repo in repos:
            if _resolve(partial(inspect, repo), stats):
                yield repo
            if _stopped(stop_event):
                return
        return

    yield from _scan_pooled(repos, inspect, options.workers, stop_event, stats)


def _scan_pooled(
    repos: Iterator[str],
    inspect: Inspector,
    workers: int,
    stop_event: Optional[threading.Event],
    stats: ScanStats,
) -> Iterator[str]:
    """Resolve inspections in submission order; a stop ends the scan after the head result."""
    pending: Deque[tuple[str, Future]] = deque()
    limit = workers * 2

    with ThreadPoolExecutor(max_workers=workers) as executor:
        try:
            for repo in repos:
                pending.append((repo, executor.submit(inspect, repo)))
                if len(pending) < limit:
                    continue
                path, future = pending.popleft()
                if _resolve(future.result, stats):
                    yield path
                if _stopped(stop_event):
                    return
            while pending:
                path, future = pending.popleft()
                if _resolve(future.result, stats):
                    yield path
                if _stopped(stop_event):
                    return
        finally:
            for _, future in pending:
                future.cancel()
