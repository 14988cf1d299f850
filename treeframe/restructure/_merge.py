"""
Tree merge engine.

Rebuilds one level of a column tree from its existing columns plus a batch
of path-addressed insertions, recursing into groups for deeper paths.

Per level:
1. Partition insertions by the name at path[depth]
2. Existing columns keep their order; those targeted by a partition must be
   groups and are rebuilt recursively in place
3. Partitions naming new columns get a target position from their reference
   anchors (old slot if the anchor was removed, right after it otherwise)
4. Partitions are stably sorted by target, unanchored ones append last
5. A running offset converts original indices into indices of the list being
   built: removed siblings before the target shift it left, every placed
   column shifts later ones right
6. Each partition becomes one column (supplied, supplied group merged with
   deeper insertions, or a new group) placed at target + offset

Pure: inputs are never modified and untouched columns are shared.
"""

from collections.abc import Iterable, Sequence
from functools import reduce
from typing import NamedTuple, Optional

from treeframe._constants import APPEND_POSITION
from treeframe._exceptions import (
    DuplicateInsertionError,
    NonGroupDescentError,
    PathCollisionError,
)
from treeframe._logging import format_paths, get_logger
from treeframe._path import ColumnPath
from treeframe._tree import ReferenceNode
from treeframe.columns import Column, GroupColumn
from treeframe.restructure._request import InsertionRequest
from treeframe.table import Table

logger = get_logger(__name__)


class _Placement(NamedTuple):
    """Accumulator of the placement fold."""

    columns: tuple[Column, ...]
    offset: int
    cursor: int  # reference siblings already accounted for


def insert_impl(table: Table, requests: Iterable[InsertionRequest]) -> Table:
    """
    Merge a batch of insertions into a whole table.

    The reference root is taken from the first anchored request. The result
    keeps the table's row count (a table without columns adopts the row
    count of what is inserted).

    Raises:
        PathCollisionError: Insertion ends at an existing column
        NonGroupDescentError: Insertion goes through a value or frame column
        DuplicateInsertionError: Two insertions end at the same path
        TreeFrameSchemaError: Inserted columns have a different row count
    """
    requests = list(requests)
    if not requests:
        return table

    anchor = next((r.reference for r in requests if r.reference is not None), None)
    root = anchor.root if anchor is not None else None

    logger.debug(f"Inserting {format_paths(r.path for r in requests)}")
    columns = merge_columns(table.columns, requests, root, 0)

    nrow = table.nrow if table.ncol or table.nrow else None
    return Table(columns, nrow=nrow)


def merge_columns(
    existing: Optional[Sequence[Column]],
    insertions: Sequence[InsertionRequest],
    reference: Optional[ReferenceNode],
    depth: int,
) -> list[Column]:
    """
    Rebuild one tree level.

    Args:
        existing: Columns currently at this level (None or empty for a new group)
        insertions: Requests whose path passes through this level
        reference: Snapshot node mirroring this level, if any
        depth: Index into request paths addressing this level (0 = root)

    Returns:
        New ordered list of columns for this level
    """
    existing = tuple(existing or ())
    if not insertions:
        return list(existing)

    partitions = _partition(insertions, depth)
    existing_names = {column.name for column in existing}

    merged = tuple(
        _merge_existing(column, partitions[column.name], reference, depth)
        if column.name in partitions
        else column
        for column in existing
    )

    pending = sorted(
        (
            (_target_position(batch, reference, depth), name, batch)
            for name, batch in partitions.items()
            if name not in existing_names
        ),
        key=lambda item: item[0],
    )

    if pending:
        logger.debug(
            f"Level {depth}: placing {[name for _, name, _ in pending]} "
            f"into {len(merged)} existing columns"
        )

    built = [
        (position, _build_column(name, batch, reference, depth))
        for position, name, batch in pending
    ]

    siblings = reference.children if reference is not None else ()
    placed = reduce(
        lambda state, item: _place(state, item, siblings),
        built,
        _Placement(columns=merged, offset=0, cursor=0),
    )
    return list(placed.columns)


def _partition(
    insertions: Sequence[InsertionRequest], depth: int
) -> dict[str, list[InsertionRequest]]:
    """Group requests by the name at path[depth], in first-seen order."""
    partitions: dict[str, list[InsertionRequest]] = {}
    for request in insertions:
        partitions.setdefault(request.path[depth], []).append(request)
    return partitions


def _merge_existing(
    column: Column,
    batch: list[InsertionRequest],
    reference: Optional[ReferenceNode],
    depth: int,
) -> Column:
    child_depth = depth + 1

    occupied = next((r for r in batch if len(r.path) == child_depth), None)
    if occupied is not None:
        raise PathCollisionError(
            f"Cannot insert column '{occupied.path}' because a column with "
            f"this path already exists",
            path=occupied.path,
        )

    if not isinstance(column, GroupColumn):
        path = ColumnPath(batch[0].path[:child_depth])
        raise NonGroupDescentError(
            f"Cannot insert columns under '{path}', because it is not a column group "
            f"(it is a {column.kind} column)",
            path=path,
        )

    sub_reference = reference.get(column.name) if reference is not None else None
    children = merge_columns(column.columns, batch, sub_reference, child_depth)
    return column.with_columns(children)


def _target_position(
    batch: list[InsertionRequest], reference: Optional[ReferenceNode], depth: int
) -> int:
    """Minimum anchored position over a partition, APPEND_POSITION if none."""
    return min(
        (_anchor_position(request.reference, reference, depth) for request in batch),
        default=APPEND_POSITION,
    )


def _anchor_position(
    anchor: Optional[ReferenceNode], reference: Optional[ReferenceNode], depth: int
) -> int:
    if anchor is None or reference is None or anchor.depth <= depth:
        return APPEND_POSITION

    node = anchor.get_ancestor(depth + 1)
    if node.parent != reference:
        return APPEND_POSITION

    return node.original_index if node.was_removed else node.original_index + 1


def _build_column(
    name: str,
    batch: list[InsertionRequest],
    reference: Optional[ReferenceNode],
    depth: int,
) -> Column:
    child_depth = depth + 1
    terminal = [r for r in batch if len(r.path) == child_depth]
    deeper = [r for r in batch if len(r.path) > child_depth]

    if len(terminal) > 1:
        raise DuplicateInsertionError(
            f"Cannot insert more than one column into the path '{terminal[0].path}'",
            path=terminal[0].path,
        )

    sub_reference = reference.get(name) if reference is not None else None

    if not terminal:
        return GroupColumn(name, merge_columns((), deeper, sub_reference, child_depth))

    column = terminal[0].column
    if not deeper:
        return column.renamed(name)

    if not isinstance(column, GroupColumn):
        raise NonGroupDescentError(
            f"Cannot insert columns under '{terminal[0].path}', because the inserted "
            f"column is not a column group (it is a {column.kind} column)",
            path=terminal[0].path,
        )

    children = merge_columns(column.columns, deeper, sub_reference, child_depth)
    return column.with_columns(children).renamed(name)


def _place(
    state: _Placement, item: tuple[int, Column], siblings: Sequence[ReferenceNode]
) -> _Placement:
    """Fold step: put one built column at its target, advancing the offset."""
    position, column = item
    offset, cursor = state.offset, state.cursor

    while cursor < len(siblings) and siblings[cursor].original_index < position:
        if siblings[cursor].was_removed:
            offset -= 1
        cursor += 1

    if position == APPEND_POSITION:
        return _Placement(state.columns + (column,), offset, cursor)

    at = position + offset
    columns = state.columns[:at] + (column,) + state.columns[at:]
    return _Placement(columns, offset + 1, cursor)
