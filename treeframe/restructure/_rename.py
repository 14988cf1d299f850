"""
Rename columns anywhere in the tree.

Only name metadata changes: the tree is rebuilt bottom-up along the renamed
paths, row data and untouched sub-trees are shared with the source table.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Optional, Union

from treeframe._logging import get_logger
from treeframe._path import ColumnPath
from treeframe._selection import Selector, resolve_paths
from treeframe.columns import Column, GroupColumn
from treeframe.table import PathLike, Table

logger = get_logger(__name__)

NameMapping = Union[Mapping[PathLike, str], Callable[[ColumnPath, Column], str]]


def rename(table: Table, names: NameMapping, columns: Optional[Selector] = None) -> Table:
    """
    Rename columns.

    Args:
        table: Source table
        names: {path: new_name} (paths as names, dotted strings or ColumnPath),
            or callable(path, column) -> new_name
        columns: With a callable, the columns to rename (default: all columns)

    Returns:
        New table with renamed columns

    Raises:
        ColumnNotFoundError: If a mapped column does not exist
        TreeFrameSchemaError: If a new name is empty or clashes with a sibling

    Examples:
        >>> rename(table, {"person.name": "full_name"})
        >>> rename(table, lambda path, col: col.name.upper(), columns=["id", "age"])
    """
    if callable(names):
        paths = resolve_paths(table, columns) if columns is not None else table.paths()
        renames = {path: names(path, table.get_column(path)) for path in paths}
    else:
        renames = {}
        for key, new_name in names.items():
            path = ColumnPath.of(key)
            table.get_column(path)
            renames[path] = new_name

    renames = {path: new for path, new in renames.items() if new != path.name}
    if not renames:
        return table

    touched = {tuple(path[:i]) for path in renames for i in range(1, len(path))}

    def rebuild(cols: Sequence[Column], prefix: tuple[str, ...]) -> list[Column]:
        out = []
        for column in cols:
            path = ColumnPath.under(prefix, column.name)
            if isinstance(column, GroupColumn) and tuple(path) in touched:
                column = column.with_columns(rebuild(column.columns, tuple(path)))
            new_name = renames.get(path)
            if new_name is not None:
                column = column.renamed(new_name)
            out.append(column)
        return out

    result = Table(rebuild(table.columns, ()), nrow=table.nrow)
    logger.info(
        "Renamed "
        + ", ".join(f"'{path}' -> '{new}'" for path, new in list(renames.items())[:5])
        + (f" (+{len(renames) - 5} more)" if len(renames) > 5 else "")
    )
    return result
