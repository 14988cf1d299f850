"""Reorder columns within their own level."""

from collections.abc import Callable
from typing import Any, Optional

from treeframe._logging import format_paths, get_logger
from treeframe._path import ColumnPath
from treeframe._selection import Selector
from treeframe.columns import Column
from treeframe.restructure._merge import insert_impl
from treeframe.restructure._remove import RemovedColumn, remove_columns
from treeframe.table import Table

logger = get_logger(__name__)


def reorder(
    table: Table,
    columns: Selector,
    key: Optional[Callable[[Column], Any]] = None,
    desc: bool = False,
) -> Table:
    """
    Sort selected columns among the slots they occupy.

    Columns are sorted per parent group; the sorted columns fill the slots
    of the selected ones, unselected siblings do not move. Ties keep table
    order.

    Args:
        table: Source table
        columns: Columns to sort
        key: callable(column) -> sort key (default: column name)
        desc: Sort descending

    Examples:
        >>> table.column_names
        ['c', 'id', 'a', 'b']
        >>> reorder(table, ["c", "a", "b"]).column_names
        ['a', 'id', 'b', 'c']
    """
    key = key or (lambda column: column.name)
    result = remove_columns(table, columns)
    if not result.removed:
        return table

    by_parent: dict[tuple[str, ...], list[RemovedColumn]] = {}
    for removed in result.removed:
        by_parent.setdefault(removed.path.parent, []).append(removed)

    requests = []
    for parent, slots in by_parent.items():
        ordered = sorted(slots, key=lambda removed: key(removed.column), reverse=desc)
        requests.extend(
            moved.to_insert(ColumnPath.under(parent, moved.name), reference=slot.node)
            for slot, moved in zip(slots, ordered)
        )

    logger.info(
        f"Reordered {format_paths(r.path for r in requests)}"
        + (" (descending)" if desc else "")
    )
    return insert_impl(result.table, requests)
