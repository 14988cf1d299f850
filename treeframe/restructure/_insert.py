"""Insert new columns into a table."""

from typing import Optional

from treeframe._logging import format_paths, get_logger
from treeframe._path import ColumnPath
from treeframe._tree import ReferenceTree
from treeframe.columns import Column
from treeframe.restructure._merge import insert_impl
from treeframe.restructure._move import move_to, preceding_sibling
from treeframe.restructure._request import InsertionRequest
from treeframe.table import PathLike, Table

logger = get_logger(__name__)


def insert(
    table: Table,
    *columns: Column,
    under: Optional[PathLike] = None,
    after: Optional[PathLike] = None,
    before: Optional[PathLike] = None,
    at: Optional[int] = None,
) -> Table:
    """
    Insert columns into a table.

    Without a position, columns are appended inside their parent (the root
    level, or `under`, which is created as a group if missing).

    Args:
        table: Source table
        *columns: Columns to insert, placed under their own names
        under: Parent group path
        after: Place the columns right after this column, at its level
        before: Place the columns right before this column, at its level
        at: Sibling index inside the parent

    Returns:
        New table with the columns inserted

    Raises:
        ValueError: If `after` or `before` is combined with another position
        PathCollisionError: If a column with the same path exists
        NonGroupDescentError: If `under` goes through a non-group column

    Examples:
        >>> insert(table, ValueColumn("score", [1, 2]))
        >>> insert(table, ValueColumn("zip", ["a", "b"]), under="person.address")
        >>> insert(table, ValueColumn("score", [1, 2]), after="name")
        >>> insert(table, ValueColumn("rank", [1, 2]), before="person.name")
    """
    for name, value in (("after", after), ("before", before)):
        if value is not None and (under is not None or at is not None):
            raise ValueError(f"insert(): '{name}' cannot be combined with 'under' or 'at'")
    if after is not None and before is not None:
        raise ValueError("insert(): 'after' cannot be combined with 'before'")

    if not columns:
        return table

    anchor = None
    parent = tuple(ColumnPath.of(under)) if under is not None else ()
    if after is not None or before is not None:
        target = ColumnPath.of(after if after is not None else before)
        table.get_column(target)
        anchor = ReferenceTree.snapshot(table.columns).find(target)
        if before is not None:
            anchor = preceding_sibling(anchor)
        parent = tuple(target.parent)
        if anchor is None:
            at = 0

    requests = [
        InsertionRequest(
            path=ColumnPath.under(parent, column.name), column=column, reference=anchor
        )
        for column in columns
    ]

    result = insert_impl(table, requests)
    logger.info(f"Inserted {format_paths(r.path for r in requests)}")

    if at is not None:
        result = move_to(result, [r.path for r in requests], at, inside_group=bool(parent))

    return result
