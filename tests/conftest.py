import os
import shutil
import subprocess

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def make_tree(root: str, *dirs: str) -> None:
    """Create each relative directory under root."""
    for d in dirs:
        os.makedirs(os.path.join(root, d), exist_ok=True)


def init_repo(path: str, *, commit: bool = True) -> str:
    """Create a real git repo at path, optionally with one committed file."""
    subprocess.run(["git", "init", "-q", path], capture_output=True, check=True)
    subprocess.run(["git", "-C", path, "config", "user.email", "test@test.com"], capture_output=True)
    subprocess.run(["git", "-C", path, "config", "user.name", "Test User"], capture_output=True)
    subprocess.run(["git", "-C", path, "config", "commit.gpgsign", "false"], capture_output=True)
    if commit:
        with open(os.path.join(path, "README.md"), "w") as f:
            f.write("# Test\n")
        subprocess.run(["git", "-C", path, "add", "."], capture_output=True, check=True)
        subprocess.run(["git", "-C", path, "commit", "-q", "-m", "Initial commit"], capture_output=True, check=True)
    return path


def make_dirty(path: str) -> str:
    with open(os.path.join(path, "untracked.txt"), "w") as f:
        f.write("uncommitted\n")
    return path
