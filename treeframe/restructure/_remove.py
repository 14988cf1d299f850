"""
Selection/removal of columns.

Excises selected columns from a table and returns, next to the remaining
table, one descriptor per removed column anchored in a reference snapshot of
the original tree. Groups left without children by the removal are dropped
as well and flagged removed in the snapshot, so columns moved out of them
can take their place.
"""

from collections.abc import Sequence
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from treeframe._logging import format_paths, get_logger
from treeframe._path import ColumnPath
from treeframe._selection import Selector, outermost, resolve_paths
from treeframe._tree import ReferenceNode, ReferenceTree
from treeframe.columns import Column, FrameColumn, GroupColumn, ValueColumn
from treeframe.restructure._request import InsertionRequest
from treeframe.table import Table

logger = get_logger(__name__)


class RemovedColumn(BaseModel):
    """A column taken out of a table plus its node in the removal snapshot."""

    column: Union[ValueColumn, GroupColumn, FrameColumn]
    node: ReferenceNode

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def path(self) -> ColumnPath:
        return self.node.path

    @property
    def name(self) -> str:
        return self.column.name

    def to_insert(
        self,
        path: Optional[Sequence[str]] = None,
        reference: Optional[ReferenceNode] = None,
    ) -> InsertionRequest:
        """
        Insertion request putting this column back.

        Args:
            path: Destination path (default: where it was removed from)
            reference: Anchor node (default: its own node, i.e. its old slot)
        """
        return InsertionRequest(
            path=self.path if path is None else path,
            column=self.column,
            reference=self.node if reference is None else reference,
        )


class RemoveResult(BaseModel):
    """Remaining table, removed columns (table pre-order) and the snapshot."""

    table: Table
    removed: tuple[RemovedColumn, ...]
    reference: ReferenceTree

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


def remove_columns(table: Table, columns: Selector) -> RemoveResult:
    """
    Remove selected columns from a table.

    Selecting a column and one of its descendants removes the ancestor only.

    Args:
        table: Source table (not modified)
        columns: Column selector

    Returns:
        RemoveResult with the remaining table, removal descriptors and the
        reference snapshot of the original tree

    Raises:
        ColumnNotFoundError: If a selected column does not exist
    """
    selected = outermost(resolve_paths(table, columns))
    removed_paths = set(selected)
    emptied: set[ColumnPath] = set()

    def prune(cols: Sequence[Column], prefix: tuple[str, ...]) -> list[Column]:
        kept = []
        for column in cols:
            path = ColumnPath.under(prefix, column.name)
            if path in removed_paths:
                continue
            if isinstance(column, GroupColumn) and any(path.is_prefix_of(p) for p in selected):
                children = prune(column.columns, path)
                if not children:
                    emptied.add(path)
                    continue
                column = column.with_columns(children)
            kept.append(column)
        return kept

    remaining = Table(prune(table.columns, ()), nrow=table.nrow)
    reference = ReferenceTree.snapshot(table.columns, removed=removed_paths | emptied)

    removed = tuple(
        RemovedColumn(column=column, node=reference.find(path))
        for path, column in table.walk()
        if path in removed_paths
    )

    if emptied:
        logger.debug(f"Dropped emptied groups {format_paths(sorted(emptied))}")
    logger.debug(f"Removed {format_paths(p.path for p in removed)}")

    return RemoveResult(table=remaining, removed=removed, reference=reference)


def remove(table: Table, columns: Selector) -> Table:
    """
    Drop columns from a table.

    Groups left without children are dropped too.

    Examples:
        >>> remove(table, ["age", "address.zip"]).column_names
        ['id', 'name', 'address']
    """
    result = remove_columns(table, columns)
    logger.info(f"Removed {format_paths(p.path for p in result.removed)}")
    return result.table
