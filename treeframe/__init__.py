import importlib.metadata as _metadata
import logging

from treeframe._constants import DEFAULT_DATAFRAME_BACKEND, DataFrameBackend
from treeframe._exceptions import (
    ColumnNotFoundError,
    CyclicMoveError,
    DuplicateInsertionError,
    NonGroupDescentError,
    PathCollisionError,
    TreeFrameBackendError,
    TreeFrameError,
    TreeFrameSchemaError,
    TreeFrameStructureError,
)
from treeframe._logging import disable_logging, enable_debug_logging, setup_basic_logging
from treeframe._naming import ColumnNameGenerator
from treeframe._path import ColumnPath
from treeframe.columns import Column, FrameColumn, GroupColumn, ValueColumn, make_column
from treeframe.restructure import (
    flatten,
    group,
    insert,
    move_after,
    move_before,
    move_into,
    move_to,
    move_to_end,
    move_to_start,
    move_under,
    remove,
    rename,
    reorder,
    split,
    ungroup,
)
from treeframe.table import Table

__version__ = _metadata.version("treeframe")

# Global DataFrame backend configuration
_DATAFRAME_BACKEND: DataFrameBackend = DEFAULT_DATAFRAME_BACKEND


def use(backend: str):
    """
    Set the global DataFrame backend used by Table.to_dataframe().

    Available backends:
        - 'pyarrow': Default, no extra dependencies
        - 'polars': Requires polars package
        - 'pandas': Requires pandas package

    Args:
        backend: Backend name to use

    Raises:
        TreeFrameBackendError: If backend is unknown or its package is missing

    Warning - Thread/Fork Safety:
        This function modifies a global variable and is NOT thread-safe.
        Set the backend once at startup, or pass it explicitly:
            table.to_dataframe(backend='polars')

    Examples:
        >>> import treeframe
        >>> treeframe.use('pandas')
        >>> df = table.to_dataframe()  # pandas.DataFrame, groups as dotted columns
    """
    global _DATAFRAME_BACKEND

    from treeframe.dataframe import get_available_backends

    available = get_available_backends()

    if backend not in available:
        raise TreeFrameBackendError(
            f"Unknown backend: '{backend}'\n"
            f"Available backends: {available}\n"
            f"\n"
            f"To use additional backends, install required packages:\n"
            f"  pip install polars  # For Polars backend\n"
            f"  pip install pandas  # For Pandas backend"
        )

    _DATAFRAME_BACKEND = backend  # type: ignore[assignment]


def get_backend() -> DataFrameBackend:
    """
    Get the current global DataFrame backend.

    Example:
        >>> import treeframe
        >>> treeframe.get_backend()
        'pyarrow'
    """
    return _DATAFRAME_BACKEND


def verbose(level=True):
    """
    Enable/disable verbose logging for treeframe operations.

    Args:
        level: Logging level to enable:
            - True or "info": one line per structural operation (default)
            - "debug": also every tree level rebuilt by the merge engine
            - False: Disable all logging

    Example:
        >>> import treeframe
        >>> treeframe.verbose()
        >>> table.move_after("city", "name")
        INFO [treeframe.restructure._move] Moved ['city'] after 'name'
    """
    if level is False:
        disable_logging()
    elif level is True or level == "info":
        setup_basic_logging(level=logging.INFO)
    elif level == "debug":
        enable_debug_logging()
    else:
        raise ValueError(
            f"Invalid verbose level: {level}. " "Use True, 'info', 'debug', or False."
        )


__all__ = [
    "Column",
    "ColumnNameGenerator",
    "ColumnNotFoundError",
    "ColumnPath",
    "CyclicMoveError",
    "DuplicateInsertionError",
    "FrameColumn",
    "GroupColumn",
    "NonGroupDescentError",
    "PathCollisionError",
    "Table",
    "TreeFrameBackendError",
    "TreeFrameError",
    "TreeFrameSchemaError",
    "TreeFrameStructureError",
    "ValueColumn",
    "flatten",
    "get_backend",
    "group",
    "insert",
    "make_column",
    "move_after",
    "move_before",
    "move_into",
    "move_to",
    "move_to_end",
    "move_to_start",
    "move_under",
    "remove",
    "rename",
    "reorder",
    "split",
    "ungroup",
    "use",
    "verbose",
]
