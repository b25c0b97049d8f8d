"""Repository inspection: run `git status` and report whether it printed anything."""

from __future__ import annotations

import subprocess

from gitsearch.config import GIT, TIMEOUT
from gitsearch.errors import InspectionFailure

STATUS_ARGS = ["status", "--porcelain=v1"]


def _run_git(repo_path: str, args: list[str], *, git: str = GIT, timeout: float = TIMEOUT) -> bytes:
    """Run a git command inside repo_path and return raw stdout."""
    try:
        result = subprocess.run(
            [git] + args,
            cwd=repo_path,
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise InspectionFailure(repo_path, f"{git} timed out after {timeout:g}s") from None
    except FileNotFoundError as exc:
        # Raised for a missing executable and for a cwd removed mid-scan alike.
        raise InspectionFailure(repo_path, f"cannot run {git}: {exc.strerror or exc}") from exc
    except OSError as exc:
        raise InspectionFailure(repo_path, f"cannot run {git}: {exc}") from exc

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        first_line = stderr.splitlines()[0] if stderr else f"exit status {result.returncode}"
        raise InspectionFailure(repo_path, first_line)
    return result.stdout


def status_porcelain(repo_path: str, *, git: str = GIT, timeout: float = TIMEOUT) -> bytes:
    """Short-format status of repo_path; empty when the working tree is clean."""
    return _run_git(repo_path, STATUS_ARGS, git=git, timeout=timeout)


def is_dirty(repo_path: str, *, git: str = GIT, timeout: float = TIMEOUT) -> bool:
    """True when `git status` lists anything: changes, untracked files, conflicts."""
    return len(status_porcelain(repo_path, git=git, timeout=timeout)) > 0
