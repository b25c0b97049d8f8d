"""Scan tunables with defaults and GITSEARCH_* environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from gitsearch.errors import InvalidArgument

MARKER = ".git"
GIT = "git"
TIMEOUT = 60.0
WORKERS = 1

ENV_PREFIX = "GITSEARCH_"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class ScanOptions:
    marker: str = MARKER
    follow_symlinks: bool = False
    timeout: float = TIMEOUT
    workers: int = WORKERS
    git: str = GIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScanOptions":
        """Build options from GITSEARCH_GIT, _TIMEOUT, _WORKERS and _FOLLOW_SYMLINKS."""
        env = os.environ if environ is None else environ
        return cls(
            git=env.get(ENV_PREFIX + "GIT") or GIT,
            timeout=_float(env, "TIMEOUT", TIMEOUT),
            workers=_int(env, "WORKERS", WORKERS),
            follow_symlinks=_bool(env, "FOLLOW_SYMLINKS", False),
        )


def _raw(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(ENV_PREFIX + name)
    return value.strip() if value is not None else None


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _raw(env, name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise InvalidArgument(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise InvalidArgument(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _raw(env, name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidArgument(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise InvalidArgument(f"{ENV_PREFIX}{name} must be at least 1, got {raw!r}")
    return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _raw(env, name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise InvalidArgument(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
