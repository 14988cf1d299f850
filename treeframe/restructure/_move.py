"""
Move columns within a table.

Every move removes the selected columns (keeping their reference anchors)
and merges them back at new paths:
    move_after: right after a target column, at the target's level
    move_before: right before a target column, at the target's level
    move_under: appended inside a (new or existing) group
    move_into: at paths computed per column
    move_to / move_to_start / move_to_end: at a sibling index
"""

from collections.abc import Callable, Sequence
from typing import Optional

from treeframe._constants import APPEND_POSITION
from treeframe._exceptions import CyclicMoveError, PathCollisionError, TreeFrameSchemaError
from treeframe._logging import format_paths, get_logger
from treeframe._path import ColumnPath
from treeframe._selection import Selector, resolve_paths
from treeframe._tree import ReferenceNode
from treeframe.columns import Column, GroupColumn
from treeframe.restructure._merge import insert_impl
from treeframe.restructure._remove import remove_columns
from treeframe.table import PathLike, Table

logger = get_logger(__name__)


def move_after(table: Table, columns: Selector, target: PathLike) -> Table:
    """
    Move columns right after `target`, at the target's level.

    Args:
        table: Source table
        columns: Columns to move (keep their relative table order)
        target: Column to place them after

    Raises:
        CyclicMoveError: If the target is a moved column or nested under one
        ColumnNotFoundError: If a column or the target does not exist
        PathCollisionError: If the target level already has a column with a moved name

    Examples:
        >>> table.column_names
        ['id', 'name', 'age', 'city']
        >>> move_after(table, "city", "name").column_names
        ['id', 'name', 'city', 'age']
    """
    target = ColumnPath.of(target)
    table.get_column(target)
    sources = resolve_paths(table, columns)
    check_cycles(sources, target, relation="after")

    result = remove_columns(table, sources)
    anchor = result.reference.find(target)
    requests = [
        removed.to_insert(ColumnPath.under(target.parent, removed.name), reference=anchor)
        for removed in result.removed
    ]

    logger.info(f"Moved {format_paths(sources)} after '{target}'")
    return insert_impl(result.table, requests)


def move_before(table: Table, columns: Selector, target: PathLike) -> Table:
    """
    Move columns right before `target`, at the target's level.

    Raises:
        CyclicMoveError: If the target is a moved column or nested under one
        ColumnNotFoundError: If a column or the target does not exist
        PathCollisionError: If the target level already has a column with a moved name

    Examples:
        >>> move_before(table, "city", "name").column_names
        ['id', 'city', 'name', 'age']
    """
    target = ColumnPath.of(target)
    table.get_column(target)
    sources = resolve_paths(table, columns)
    check_cycles(sources, target, relation="before")

    result = remove_columns(table, sources)
    anchor = preceding_sibling(result.reference.find(target))
    requests = [
        removed.to_insert(ColumnPath.under(target.parent, removed.name), reference=anchor)
        for removed in result.removed
    ]

    logger.info(f"Moved {format_paths(sources)} before '{target}'")
    merged = insert_impl(result.table, requests)
    if anchor is None:
        merged = move_to(merged, [r.path for r in requests], 0, inside_group=True)
    return merged


def move_under(table: Table, columns: Selector, group: PathLike) -> Table:
    """
    Move columns inside `group`, creating the group if it does not exist.

    A new group takes the place of the first moved column at its level.
    Columns moved within their own group keep their old slots.

    Raises:
        CyclicMoveError: If the group is a moved column or nested under one
        NonGroupDescentError: If `group` exists but is not a group
    """
    parent = ColumnPath.of(group)
    sources = resolve_paths(table, columns)
    check_cycles(sources, parent, relation="under")

    result = remove_columns(table, sources)
    requests = [removed.to_insert(parent.child(removed.name)) for removed in result.removed]

    logger.info(f"Moved {format_paths(sources)} under '{parent}'")
    return insert_impl(result.table, requests)


def move_into(
    table: Table,
    columns: Selector,
    new_path: Callable[[ColumnPath, Column], PathLike],
) -> Table:
    """
    Move every selected column to the path returned by `new_path(path, column)`.

    The last name of the returned path is the column's new name.

    Raises:
        CyclicMoveError: If a new path is nested under the column's own path

    Examples:
        >>> move_into(table, ["a", "b"], lambda path, col: ["info", path.name])
    """
    sources = resolve_paths(table, columns)
    destinations = {
        source: ColumnPath.of(new_path(source, table.get_column(source))) for source in sources
    }
    for source, destination in destinations.items():
        check_cycles([source], destination, relation="into", inclusive=False)

    result = remove_columns(table, sources)
    requests = [removed.to_insert(destinations[removed.path]) for removed in result.removed]

    logger.info(f"Moved {len(requests)} column(s) into new paths")
    return insert_impl(result.table, requests)


def move_to(table: Table, columns: Selector, index: int, inside_group: bool = False) -> Table:
    """
    Move columns to a sibling index.

    Args:
        table: Source table
        columns: Columns to move
        index: Position among the remaining columns (clamped to the end)
        inside_group: Keep the columns in their (common) parent group instead
            of moving them to the root level

    Raises:
        ValueError: If index is negative
        TreeFrameSchemaError: If inside_group and the columns have different parents
        PathCollisionError: If a moved name already exists at the destination level
    """
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")

    sources = resolve_paths(table, columns)
    if not sources:
        return table

    parent: tuple[str, ...] = ()
    if inside_group:
        parents = {source.parent for source in sources}
        if len(parents) > 1:
            raise TreeFrameSchemaError(
                f"Cannot move columns inside their group: they belong to different groups "
                f"{sorted(str(ColumnPath(p)) if p else '<root>' for p in parents)}"
            )
        parent = parents.pop()

    result = remove_columns(table, sources)

    if parent and not result.table.has_column(parent):
        # the group was emptied by the removal: put it back as it was
        return insert_impl(result.table, [removed.to_insert() for removed in result.removed])

    siblings = list(result.table.children_at(parent))
    moved = [removed.column for removed in result.removed]

    clashes = {c.name for c in siblings} & {c.name for c in moved}
    if clashes:
        name = sorted(clashes)[0]
        path = ColumnPath.under(parent, name)
        raise PathCollisionError(
            f"Cannot move column to '{path}' because a column with this path already exists",
            path=path,
        )

    index = min(index, len(siblings))
    children = siblings[:index] + moved + siblings[index:]

    logger.info(f"Moved {format_paths(sources)} to index {index}")
    return Table(
        replace_children(result.table.columns, parent, children), nrow=table.nrow
    )


def move_to_start(table: Table, columns: Selector, inside_group: bool = False) -> Table:
    return move_to(table, columns, 0, inside_group=inside_group)


def move_to_end(table: Table, columns: Selector, inside_group: bool = False) -> Table:
    return move_to(table, columns, APPEND_POSITION, inside_group=inside_group)


def check_cycles(
    sources: Sequence[ColumnPath],
    target: Sequence[str],
    relation: str,
    inclusive: bool = True,
) -> None:
    """
    Reject moves relative to a moved column's own subtree.

    Raises:
        CyclicMoveError: If `target` is nested under a source (or equal to
            one when `inclusive`)
    """
    for source in sources:
        if source.is_prefix_of(target) or (inclusive and tuple(source) == tuple(target)):
            target_path = ColumnPath(target)
            kind = "itself" if tuple(source) == tuple(target) else "its own child column"
            raise CyclicMoveError(
                f"Cannot move column '{source}' {relation} {kind} '{target_path}'",
                source=source,
                target=target_path,
            )


def preceding_sibling(node: ReferenceNode) -> Optional[ReferenceNode]:
    """
    Snapshot sibling right before `node`, None if `node` comes first.

    Anchoring on it resolves to the slot of `node` itself: a surviving
    sibling places after itself, a removed one takes its own old slot.
    """
    if node.original_index == 0:
        return None
    return node.parent.children[node.original_index - 1]


def replace_children(
    columns: Sequence[Column], parent: Sequence[str], children: Sequence[Column]
) -> list[Column]:
    """Columns of a tree level with the children under `parent` replaced."""
    if not parent:
        return list(children)

    head, rest = parent[0], parent[1:]
    rebuilt = []
    for column in columns:
        if column.name == head:
            if not isinstance(column, GroupColumn):
                raise TreeFrameSchemaError(f"Column '{head}' is not a group")
            column = column.with_columns(replace_children(column.columns, rest, children))
        rebuilt.append(column)
    return rebuilt
