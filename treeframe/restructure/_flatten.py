"""
Nesting operations: flatten, group and ungroup.

flatten lifts every leaf under the selected groups to the groups' parent
level; ungroup lifts direct children one level; group nests columns under a
group path. Lifted columns take the place of the group they came out of and
are renamed with a numeric suffix when their name is taken at the new level.
"""

from typing import Optional

from treeframe._constants import DEFAULT_FLATTEN_SEPARATOR
from treeframe._exceptions import TreeFrameSchemaError
from treeframe._logging import format_paths, get_logger
from treeframe._naming import ColumnNameGenerator
from treeframe._path import ColumnPath
from treeframe._selection import Selector, outermost, resolve_paths
from treeframe.columns import GroupColumn
from treeframe.restructure._merge import insert_impl
from treeframe.restructure._move import move_under
from treeframe.restructure._remove import remove_columns
from treeframe.table import PathLike, Table

logger = get_logger(__name__)


def flatten(
    table: Table,
    columns: Optional[Selector] = None,
    keep_parent_names: bool = False,
    separator: str = DEFAULT_FLATTEN_SEPARATOR,
) -> Table:
    """
    Remove nesting below the selected groups.

    Every leaf (value column, frame column or empty group) nested under a
    selected group moves to that group's parent level. The group disappears
    and its leaves take its place, in table order.

    Args:
        table: Source table
        columns: Groups to flatten (default: every root-level group).
            Selected non-group columns are ignored.
        keep_parent_names: Name lifted columns by their path below the new
            level, e.g. "address.city" instead of "city"
        separator: Joins path names when keep_parent_names is set

    Returns:
        New table

    Examples:
        >>> table.describe()
        Table: 2 rows x 2 columns
          id: int64
          address: group
            city: string
            geo: group
              lat: double
        >>> flatten(table).column_names
        ['id', 'city', 'lat']
        >>> flatten(table, keep_parent_names=True).column_names
        ['id', 'address.city', 'address.geo.lat']
    """
    if columns is None:
        roots = [
            ColumnPath([c.name]) for c in table.columns if isinstance(c, GroupColumn)
        ]
    else:
        roots = [
            path
            for path in outermost(resolve_paths(table, columns))
            if isinstance(table.get_column(path), GroupColumn)
        ]

    leaves = [
        path
        for path, column in table.walk()
        if (not isinstance(column, GroupColumn) or not column.columns)
        and any(root.is_prefix_of(path) for root in roots)
    ]
    if not leaves:
        return table

    result = remove_columns(table, leaves)
    generators: dict[tuple[str, ...], ColumnNameGenerator] = {}

    requests = []
    for removed in result.removed:
        root = next(r for r in roots if r.is_prefix_of(removed.path))
        level = root.parent
        if level not in generators:
            generators[level] = ColumnNameGenerator.for_level(table, level)

        if keep_parent_names:
            preferred = separator.join(removed.path[len(level):])
        else:
            preferred = removed.name
        name = generators[level].add_unique(preferred)
        requests.append(removed.to_insert(ColumnPath.under(level, name)))

    logger.info(f"Flattened {format_paths(roots)} ({len(requests)} column(s) lifted)")
    return insert_impl(result.table, requests)


def group(table: Table, columns: Selector, into: PathLike) -> Table:
    """
    Nest columns under the group `into` (created where the first column was).

    Same as move_under().

    Examples:
        >>> group(table, ["street", "city"], "address").column_names
        ['id', 'address']
    """
    return move_under(table, columns, into)


def ungroup(table: Table, columns: Selector) -> Table:
    """
    Replace groups by their children.

    The children move one level up, to the group's position, keeping their
    order. A child whose name is taken at the new level gets a numeric
    suffix. Ungrouping an empty group removes it.

    Raises:
        TreeFrameSchemaError: If a selected column is not a group
    """
    groups = outermost(resolve_paths(table, columns))
    for path in groups:
        if not isinstance(table.get_column(path), GroupColumn):
            raise TreeFrameSchemaError(
                f"Cannot ungroup '{path}' because it is not a column group"
            )
    if not groups:
        return table

    lifted = []
    for path in groups:
        children = table.get_column(path).columns
        if children:
            lifted.extend(path.child(c.name) for c in children)
        else:
            lifted.append(path)

    result = remove_columns(table, lifted)
    ungrouped = set(groups)

    generators: dict[tuple[str, ...], ColumnNameGenerator] = {}
    requests = []
    for removed in result.removed:
        if removed.path in ungrouped:
            continue
        level = removed.path.parent[:-1]
        if level not in generators:
            generators[level] = ColumnNameGenerator(
                c.name
                for c in table.children_at(level)
                if ColumnPath.under(level, c.name) not in ungrouped
            )
        name = generators[level].add_unique(removed.name)
        requests.append(removed.to_insert(ColumnPath.under(level, name)))

    logger.info(f"Ungrouped {format_paths(groups)}")
    return insert_impl(result.table, requests)
