"""
Column selection.

Selectors accepted by every structural operation:
    - "name" or "group.child": one column (dotted strings are parsed)
    - ColumnPath(["group", "child"]): one column, names taken literally
    - [selector, ...]: several columns, in the given order
    - callable(path, column) -> bool: every matching column, pre-order
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Union

from treeframe._path import ColumnPath

if TYPE_CHECKING:
    from treeframe.columns import Column
    from treeframe.table import Table

Predicate = Callable[[ColumnPath, "Column"], bool]
Selector = Union[str, ColumnPath, Predicate, Iterable[Union[str, ColumnPath]]]


def resolve_paths(table: Table, selector: Selector) -> list[ColumnPath]:
    """
    Resolve a selector to existing column paths.

    Returns:
        Paths in selection order, duplicates dropped

    Raises:
        ColumnNotFoundError: If a named column does not exist
    """
    if callable(selector):
        return [path for path, column in table.walk() if selector(path, column)]

    if isinstance(selector, (str, ColumnPath)):
        candidates: Iterable = [selector]
    else:
        candidates = selector

    paths: list[ColumnPath] = []
    seen: set[ColumnPath] = set()
    for candidate in candidates:
        path = ColumnPath.of(candidate)
        table.get_column(path)
        if path not in seen:
            seen.add(path)
            paths.append(path)
    return paths


def outermost(paths: Sequence[ColumnPath]) -> list[ColumnPath]:
    """Drop paths nested under another path of the same selection."""
    return [p for p in paths if not any(other.is_prefix_of(p) for other in paths)]
