"""Tests for scan options and environment overrides."""

import pytest

from gitsearch.config import GIT, MARKER, TIMEOUT, WORKERS, ScanOptions
from gitsearch.errors import InvalidArgument


def test_defaults():
    opts = ScanOptions()
    assert opts.marker == MARKER == ".git"
    assert opts.follow_symlinks is False
    assert opts.timeout == TIMEOUT
    assert opts.workers == WORKERS == 1
    assert opts.git == GIT


def test_from_env_empty():
    assert ScanOptions.from_env({}) == ScanOptions()


def test_from_env_overrides():
    opts = ScanOptions.from_env({
        "GITSEARCH_GIT": "/usr/local/bin/git",
        "GITSEARCH_TIMEOUT": "2.5",
        "GITSEARCH_WORKERS": "4",
        "GITSEARCH_FOLLOW_SYMLINKS": "Yes",
    })
    assert opts.git == "/usr/local/bin/git"
    assert opts.timeout == 2.5
    assert opts.workers == 4
    assert opts.follow_symlinks is True


def test_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("GITSEARCH_WORKERS", "3")
    assert ScanOptions.from_env().workers == 3


@pytest.mark.parametrize("name, value", [
    ("GITSEARCH_WORKERS", "many"),
    ("GITSEARCH_WORKERS", "0"),
    ("GITSEARCH_TIMEOUT", "soon"),
    ("GITSEARCH_TIMEOUT", "-1"),
    ("GITSEARCH_FOLLOW_SYMLINKS", "maybe"),
])
def test_from_env_rejects_bad_values(name, value):
    with pytest.raises(InvalidArgument, match=name):
        ScanOptions.from_env({name: value})
