"""Diagnostic logging to stderr through rich, keeping stdout for results."""

from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LEVEL_ENV = "GITSEARCH_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stderr RichHandler to the package logger."""
    name = (level or os.environ.get(LEVEL_ENV) or DEFAULT_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    logger = logging.getLogger("gitsearch")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger
