"""Logging setup for applications embedding apimdx."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbosity: int = 0,
    level_name: str | None = None,
    console: Console | None = None,
) -> int:
    """Configure root logging through rich and return the chosen level.

    ``level_name`` (e.g. a config ``log_level``) wins over ``verbosity``:
    0 → WARNING, 1 → INFO, 2 or more → DEBUG.
    """
    level = logging.WARNING
    if level_name:
        level = level_from_name(level_name)
    elif verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=console or Console(stderr=True),
                show_time=False,
                show_path=False,
            )
        ],
        force=True,
    )
    return level


def level_from_name(name: str) -> int:
    """Map a level name to a logging level; unknown names give WARNING."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING
