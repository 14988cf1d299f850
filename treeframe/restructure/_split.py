"""
Split one column into several.

Every cell is expanded into a list of parts:
    None           -> []
    frame cell     -> its rows (as dicts)
    list           -> itself
    blank string   -> []
    anything else  -> str(value).split(delimiter), trimmed

The longest list decides how many columns are generated; shorter rows are
padded with `default`. The source column is removed and the generated
columns take its place (mode "into"), become children of a group named like
the source (mode "inward"), or the source becomes one list-valued column
(mode "inplace").
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Optional, Union

import pyarrow as pa

from treeframe._constants import (
    DEFAULT_SPLIT_DELIMITER,
    SPLIT_EXTRA_NAME_PREFIX,
    SPLIT_MODES,
    SplitMode,
)
from treeframe._exceptions import TreeFrameSchemaError
from treeframe._logging import get_logger
from treeframe._naming import ColumnNameGenerator
from treeframe._path import ColumnPath
from treeframe._selection import resolve_paths
from treeframe.columns import Column, FrameColumn, GroupColumn, ValueColumn
from treeframe.restructure._merge import insert_impl
from treeframe.restructure._remove import RemovedColumn, remove_columns
from treeframe.restructure._request import InsertionRequest
from treeframe.table import PathLike, Table

logger = get_logger(__name__)

Splitter = Union[str, Callable[[Any], Iterable[Any]]]
NamesProvider = Union[Sequence[str], Callable[[Column, int], Sequence[str]]]


def split(
    table: Table,
    column: PathLike,
    by: Splitter = DEFAULT_SPLIT_DELIMITER,
    names: Optional[NamesProvider] = None,
    default: Any = None,
    mode: SplitMode = "into",
    trim: bool = True,
) -> Table:
    """
    Split a value or frame column into several value columns.

    Args:
        table: Source table
        column: Column to split
        by: Delimiter for string cells, or callable(value) -> parts
        names: Names of the generated columns, or callable(column, count) -> names.
            Default: source name + 1, 2, ...; missing names become 'splitted1', ...
        default: Padding for rows with fewer parts
        mode: "into", "inward" or "inplace"
        trim: Strip whitespace around string parts

    Returns:
        New table; names are made unique among their new siblings

    Raises:
        ValueError: If mode is unknown or the selector matches several columns
        TreeFrameSchemaError: If the column is a group

    Examples:
        >>> table["tags"].to_pylist()
        ['a,b', 'c', '']
        >>> out = split(table, "tags")
        >>> out["tags1"].to_pylist(), out["tags2"].to_pylist()
        (['a', 'c', None], ['b', None, None])
    """
    if mode not in SPLIT_MODES:
        raise ValueError(f"Invalid split mode: '{mode}'. Use one of {list(SPLIT_MODES)}")

    paths = resolve_paths(table, column)
    if len(paths) != 1:
        raise ValueError(f"split() expects exactly one column, got {len(paths)}")
    source_path = paths[0]

    source = table.get_column(source_path)
    if isinstance(source, GroupColumn):
        raise TreeFrameSchemaError(
            f"Cannot split column group '{source_path}'. "
            f"Use ungroup() or flatten() to lift its children instead."
        )

    parts = [_to_parts(cell, by, trim) for cell in _cells(source)]
    removal = remove_columns(table, [source_path])
    (removed,) = removal.removed

    if mode == "inplace":
        replacement = ValueColumn(source.name, pa.array(parts))
        logger.info(f"Split '{source_path}' in place into a list column")
        return insert_impl(removal.table, [_request(removed, source_path, replacement)])

    width = max((len(row) for row in parts), default=0)
    preferred = _names_for(source, width, names)

    if mode == "inward":
        parent = tuple(source_path)
        generator = ColumnNameGenerator()
    else:
        parent = source_path.parent
        generator = ColumnNameGenerator.for_level(removal.table, parent)

    requests = []
    for j, wanted in enumerate(preferred):
        name = generator.add_unique(wanted)
        values = [row[j] if j < len(row) else default for row in parts]
        requests.append(
            _request(removed, ColumnPath.under(parent, name), ValueColumn(name, pa.array(values)))
        )

    if requests:
        logger.info(f"Split '{source_path}' into {width} column(s) ({mode})")
    else:
        logger.warning(f"Column '{source_path}' has no values to split, it was dropped")
    return insert_impl(removal.table, requests)


def _request(removed: RemovedColumn, path: Sequence[str], column: Column) -> InsertionRequest:
    return InsertionRequest(path=path, column=column, reference=removed.node)


def _cells(column: Column) -> list[Any]:
    if isinstance(column, FrameColumn):
        return [frame.to_pylist() for frame in column.frames]
    return column.to_pylist()


def _to_parts(value: Any, by: Splitter, trim: bool) -> list[Any]:
    if value is None:
        return []
    if callable(by):
        return list(by(value))
    if isinstance(value, (list, tuple)):
        return list(value)
    text = str(value)
    if not text.strip():
        return []
    pieces = text.split(by)
    return [piece.strip() for piece in pieces] if trim else pieces


def _names_for(source: Column, width: int, names: Optional[NamesProvider]) -> list[str]:
    if names is None:
        return [f"{source.name}{i}" for i in range(1, width + 1)]

    given = list(names(source, width) if callable(names) else names)[:width]
    extra = [f"{SPLIT_EXTRA_NAME_PREFIX}{i}" for i in range(1, width - len(given) + 1)]
    return given + extra
