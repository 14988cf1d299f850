"""
Logging configuration for treeframe.

Centralized logging setup. Users configure externally via standard logging config.
Structural operations log one INFO line per edit; the merge engine logs
DEBUG lines per tree level it rebuilds.

Usage:
    from treeframe._logging import get_logger, format_paths

    logger = get_logger(__name__)
    logger.debug(f"Merging {format_paths(paths)}")
"""

import logging
from collections.abc import Iterable
from typing import Optional

DEFAULT_FORMAT = "%(levelname)s [%(name)s] %(message)s"

MAX_LOGGED_PATHS = 5
"""Paths listed by format_paths() before the rest are summarized."""


def get_logger(name: str) -> logging.Logger:
    """Get logger for treeframe module."""
    # Ensure treeframe namespace
    if not name.startswith("treeframe"):
        name = "treeframe" if name == "__main__" else f"treeframe.{name}"

    return logging.getLogger(name)


def format_paths(paths: Iterable, limit: int = MAX_LOGGED_PATHS) -> str:
    """
    Render column paths for log and error messages.

    Examples:
        >>> format_paths([ColumnPath(["a"]), ColumnPath(["b", "c"])])
        "['a', 'b.c']"
        >>> format_paths(paths_of_seven_columns)
        "['a', 'b', 'c', 'd', 'e', ... (+2 more)]"
    """
    rendered = [str(path) for path in paths]
    if len(rendered) <= limit:
        return repr(rendered)

    shown = ", ".join(repr(p) for p in rendered[:limit])
    return f"[{shown}, ... (+{len(rendered) - limit} more)]"


def setup_basic_logging(
    level: int = logging.INFO, format: Optional[str] = None
) -> None:
    """
    Setup basic logging for treeframe.

    Convenience function - advanced users should configure via logging.basicConfig().
    """
    if format is None:
        format = DEFAULT_FORMAT

    logger = logging.getLogger("treeframe")
    logger.setLevel(level)

    # Add console handler if none exists
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    # Prevent propagation (avoid duplicate logs)
    logger.propagate = False


def enable_debug_logging() -> None:
    """Enable debug logging for all treeframe modules."""
    setup_basic_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all treeframe logging."""
    logging.getLogger("treeframe").setLevel(logging.CRITICAL + 1)
