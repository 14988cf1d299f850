"""
Conversion between treeframe Tables and pyarrow Tables.

Mapping:
    ValueColumn  <-> any non-nested arrow type (and lists of non-structs)
    GroupColumn  <-> struct
    FrameColumn  <-> list<struct>, one list per row
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import pyarrow as pa

from treeframe._exceptions import TreeFrameSchemaError
from treeframe._logging import get_logger
from treeframe.columns import Column, FrameColumn, GroupColumn, ValueColumn

if TYPE_CHECKING:
    from treeframe.table import Table

logger = get_logger(__name__)


def _is_frame_type(data_type: pa.DataType) -> bool:
    return (
        pa.types.is_list(data_type) or pa.types.is_large_list(data_type)
    ) and pa.types.is_struct(data_type.value_type)


# Arrow -> treeframe


def table_from_arrow(arrow_table: pa.Table) -> Table:
    """
    Build a Table from a pyarrow Table.

    Struct columns become groups, list<struct> columns become frames.

    Examples:
        >>> arrow = pa.table({"id": [1, 2], "person": [{"name": "Ann"}, {"name": "Bob"}]})
        >>> table_from_arrow(arrow).paths()
        [ColumnPath(['id']), ColumnPath(['person']), ColumnPath(['person', 'name'])]
    """
    from treeframe.table import Table

    columns = [
        column_from_arrow(name, arrow_table.column(i))
        for i, name in enumerate(arrow_table.column_names)
    ]
    logger.debug(f"Converted arrow table {arrow_table.num_rows}x{arrow_table.num_columns}")
    return Table(columns, nrow=arrow_table.num_rows)


def column_from_arrow(name: str, array: pa.Array | pa.ChunkedArray) -> Column:
    """Convert one arrow array to a column (recursively for structs)."""
    if isinstance(array, pa.ChunkedArray):
        array = array.combine_chunks()

    if pa.types.is_struct(array.type):
        return GroupColumn(name, _struct_children(array), nrow=len(array))

    if _is_frame_type(array.type):
        return FrameColumn(name, [_frame_from_cell(cell, array.type) for cell in array])

    return ValueColumn(name, array)


def _struct_children(array: pa.StructArray) -> list[Column]:
    # flatten() applies the struct's own offset and null bitmap to the children
    return [
        column_from_arrow(field.name, child) for field, child in zip(array.type, array.flatten())
    ]


def _frame_from_cell(cell: pa.Scalar, list_type: pa.DataType) -> Table:
    from treeframe.table import Table

    values = cell.values
    if values is None:
        values = pa.array([], type=list_type.value_type)
    return Table(_struct_children(values), nrow=len(values))


# treeframe -> Arrow


def table_to_arrow(table: Table) -> pa.Table:
    """
    Convert a Table to a pyarrow Table.

    Raises:
        TreeFrameSchemaError: If the frames of a frame column have
            incompatible schemas
    """
    arrays = [column_to_arrow(column) for column in table.columns]
    if not arrays:
        return pa.table({})
    return pa.Table.from_arrays(arrays, names=table.column_names)


def column_to_arrow(column: Column) -> pa.Array:
    if isinstance(column, ValueColumn):
        return column.values
    if isinstance(column, GroupColumn):
        return _struct_array(column.columns, column.nrow)
    return _frames_to_list_array(column)


def _struct_array(columns: Sequence[Column], nrow: int) -> pa.Array:
    if not columns:
        return pa.array([{}] * nrow, type=pa.struct([]))
    return pa.StructArray.from_arrays(
        [column_to_arrow(c) for c in columns], names=[c.name for c in columns]
    )


def _frames_to_list_array(column: FrameColumn) -> pa.Array:
    structs = [_struct_array(frame.columns, frame.nrow) for frame in column.frames]

    typed = [s.type for s in structs if s.type.num_fields]
    value_type = typed[0] if typed else pa.struct([])
    # column-less empty frames take the type of the others
    structs = [
        pa.array([], type=value_type) if not s.type.num_fields and not len(s) else s
        for s in structs
    ]

    offsets = [0]
    for s in structs:
        offsets.append(offsets[-1] + len(s))

    try:
        values = pa.concat_arrays(structs) if structs else pa.array([], type=value_type)
    except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
        raise TreeFrameSchemaError(
            f"Frame column '{column.name}' cannot be converted to arrow: "
            f"its frames have different schemas ({e})"
        ) from e

    return pa.ListArray.from_arrays(pa.array(offsets, type=pa.int32()), values)
