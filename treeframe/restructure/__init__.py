"""
Structural operations on column trees.

Public API:
    insert(table, *columns, under, after, before, at) -> Table
    remove(table, columns) -> Table
    move_after / move_before / move_under / move_into / move_to / move_to_start / move_to_end
    rename(table, names, columns) -> Table
    split(table, column, by, names, default, mode, trim) -> Table
    reorder(table, columns, key, desc) -> Table
    flatten(table, columns, keep_parent_names, separator) -> Table
    group(table, columns, into) / ungroup(table, columns) -> Table

Engine (for building new operations):
    remove_columns(table, columns) -> RemoveResult
    insert_impl(table, requests) -> Table
    merge_columns(existing, insertions, reference, depth) -> list[Column]
    InsertionRequest(path, column, reference)

Internal modules:
    _request: InsertionRequest model
    _remove: Removal with reference snapshot (RemoveResult, RemovedColumn)
    _merge: Tree merge engine
    _insert, _move, _rename, _split, _reorder, _flatten: Operations

Architecture:
    Every operation except rename is a removal followed by one merge:
    1. remove_columns() excises the selection and snapshots the original tree
    2. The operation maps removed columns to InsertionRequests (new paths,
       anchors in the snapshot)
    3. insert_impl() merges the batch into the remaining table
"""

from treeframe.restructure._flatten import flatten, group, ungroup
from treeframe.restructure._insert import insert
from treeframe.restructure._merge import insert_impl, merge_columns
from treeframe.restructure._move import (
    move_after,
    move_before,
    move_into,
    move_to,
    move_to_end,
    move_to_start,
    move_under,
)
from treeframe.restructure._remove import (
    RemovedColumn,
    RemoveResult,
    remove,
    remove_columns,
)
from treeframe.restructure._rename import rename
from treeframe.restructure._reorder import reorder
from treeframe.restructure._request import InsertionRequest
from treeframe.restructure._split import split

__all__ = [
    "InsertionRequest",
    "RemoveResult",
    "RemovedColumn",
    "flatten",
    "group",
    "insert",
    "insert_impl",
    "merge_columns",
    "move_after",
    "move_before",
    "move_into",
    "move_to",
    "move_to_end",
    "move_to_start",
    "move_under",
    "remove",
    "remove_columns",
    "rename",
    "reorder",
    "split",
    "ungroup",
]
