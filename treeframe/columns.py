"""
Column variants of a treeframe Table.

A column is one of three immutable kinds:
    ValueColumn: leaf holding one value per row (pyarrow.Array)
    GroupColumn: ordered child columns sharing the parent's row count
    FrameColumn: one independent nested Table per row

Only groups are descended into by structural operations. Values and frames
are opaque leaves beyond their name and row count.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Optional, Union

import pyarrow as pa

from treeframe._constants import KIND_FRAME, KIND_GROUP, KIND_VALUE, ColumnKind
from treeframe._exceptions import TreeFrameSchemaError

if TYPE_CHECKING:
    from treeframe.table import Table


def check_name(name: Any) -> str:
    """Validate a column name (non-empty string)."""
    if not isinstance(name, str) or not name:
        raise TreeFrameSchemaError(
            f"Invalid column name: {name!r}. Column names must be non-empty strings"
        )
    return name


def check_siblings(columns: Sequence[Column], nrow: Optional[int], owner: str) -> int:
    """
    Validate one tree level and return its row count.

    Sibling names must be unique and every column must have `nrow` rows.
    When `nrow` is None it is taken from the first column (0 if empty).
    """
    seen: set[str] = set()
    duplicates = []
    for column in columns:
        if not isinstance(column, (ValueColumn, GroupColumn, FrameColumn)):
            raise TreeFrameSchemaError(
                f"{owner}: expected a column, got {type(column).__name__}"
            )
        if column.name in seen:
            duplicates.append(column.name)
        seen.add(column.name)

    if duplicates:
        raise TreeFrameSchemaError(
            f"{owner}: duplicate column names {sorted(set(duplicates))}\n"
            f"Sibling columns must have unique names."
        )

    if nrow is None:
        nrow = len(columns[0]) if columns else 0

    mismatched = [f"'{c.name}' ({len(c)} rows)" for c in columns if len(c) != nrow]
    if mismatched:
        raise TreeFrameSchemaError(
            f"{owner}: columns must have {nrow} rows, got " + ", ".join(mismatched)
        )

    return nrow


def _to_array(values: Any) -> pa.Array:
    if isinstance(values, pa.ChunkedArray):
        return values.combine_chunks()
    if isinstance(values, pa.Array):
        return values
    return pa.array(values)


class ValueColumn:
    """
    Leaf column backed by a pyarrow Array.

    Accepts anything pyarrow.array() accepts; chunked arrays are combined.

    Examples:
        >>> col = ValueColumn("age", [31, 45, None])
        >>> col.nrow
        3
        >>> col.renamed("years").name
        'years'
    """

    kind: ClassVar[ColumnKind] = KIND_VALUE

    __slots__ = ("_name", "_values")

    def __init__(self, name: str, values: Any) -> None:
        self._name = check_name(name)
        self._values = _to_array(values)

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> pa.Array:
        return self._values

    @property
    def type(self) -> pa.DataType:
        return self._values.type

    @property
    def nrow(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def renamed(self, name: str) -> ValueColumn:
        if name == self._name:
            return self
        return ValueColumn(name, self._values)

    def to_pylist(self) -> list[Any]:
        return self._values.to_pylist()

    def equals(self, other: object) -> bool:
        return (
            isinstance(other, ValueColumn)
            and other.name == self._name
            and other.values.equals(self._values)
        )

    def __repr__(self) -> str:
        return f"ValueColumn({self._name!r}, {self.type}, {self.nrow} rows)"


class GroupColumn:
    """
    Column holding an ordered sequence of child columns.

    Children share the group's row count. An empty group keeps the row
    count it was created with.
    """

    kind: ClassVar[ColumnKind] = KIND_GROUP

    __slots__ = ("_name", "_columns", "_nrow")

    def __init__(
        self, name: str, columns: Iterable[Column] = (), nrow: Optional[int] = None
    ) -> None:
        self._name = check_name(name)
        self._columns = tuple(columns)
        self._nrow = check_siblings(self._columns, nrow, owner=f"Group '{name}'")

    @property
    def name(self) -> str:
        return self._name

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self._columns]

    @property
    def nrow(self) -> int:
        return self._nrow

    def __len__(self) -> int:
        return self._nrow

    def get(self, name: str) -> Optional[Column]:
        """Child column by name, None if missing."""
        for column in self._columns:
            if column.name == name:
                return column
        return None

    def with_columns(self, columns: Iterable[Column]) -> GroupColumn:
        """Same group with replaced children (row count kept if they are empty)."""
        columns = tuple(columns)
        return GroupColumn(self._name, columns, nrow=None if columns else self._nrow)

    def renamed(self, name: str) -> GroupColumn:
        if name == self._name:
            return self
        return GroupColumn(name, self._columns, nrow=self._nrow)

    def equals(self, other: object) -> bool:
        return (
            isinstance(other, GroupColumn)
            and other.name == self._name
            and other.nrow == self._nrow
            and len(other.columns) == len(self._columns)
            and all(a.equals(b) for a, b in zip(self._columns, other.columns))
        )

    def __repr__(self) -> str:
        return f"GroupColumn({self._name!r}, {self.column_names}, {self._nrow} rows)"


class FrameColumn:
    """
    Column holding one independent Table per row.

    Frames may have different schemas. None cells become empty tables.
    """

    kind: ClassVar[ColumnKind] = KIND_FRAME

    __slots__ = ("_name", "_frames")

    def __init__(self, name: str, frames: Iterable[Optional[Table]]) -> None:
        from treeframe.table import Table

        self._name = check_name(name)
        checked = []
        for i, frame in enumerate(frames):
            if frame is None:
                frame = Table()
            elif not isinstance(frame, Table):
                raise TreeFrameSchemaError(
                    f"Frame column '{name}': row {i} is {type(frame).__name__}, expected Table"
                )
            checked.append(frame)
        self._frames = tuple(checked)

    @property
    def name(self) -> str:
        return self._name

    @property
    def frames(self) -> tuple[Table, ...]:
        return self._frames

    @property
    def nrow(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def renamed(self, name: str) -> FrameColumn:
        if name == self._name:
            return self
        return FrameColumn(name, self._frames)

    def equals(self, other: object) -> bool:
        return (
            isinstance(other, FrameColumn)
            and other.name == self._name
            and len(other.frames) == len(self._frames)
            and all(a.equals(b) for a, b in zip(self._frames, other.frames))
        )

    def __repr__(self) -> str:
        return f"FrameColumn({self._name!r}, {self.nrow} rows)"


Column = Union[ValueColumn, GroupColumn, FrameColumn]
"""Any column kind."""


def make_column(name: str, data: Any) -> Column:
    """
    Build a column from plain Python data.

    - Column instance: renamed to `name`
    - dict: GroupColumn, one child per key (recursively)
    - sequence of Table (None allowed): FrameColumn
    - anything else: ValueColumn via pyarrow.array()

    Examples:
        >>> make_column("person", {"name": ["Ann", "Bob"], "age": [31, 45]})
        GroupColumn('person', ['name', 'age'], 2 rows)
    """
    from treeframe.table import Table

    if isinstance(data, (ValueColumn, GroupColumn, FrameColumn)):
        return data.renamed(name)

    if isinstance(data, dict):
        return GroupColumn(name, [make_column(k, v) for k, v in data.items()])

    if isinstance(data, (list, tuple)) and data:
        cells = [cell for cell in data if cell is not None]
        if cells and all(isinstance(cell, Table) for cell in cells):
            return FrameColumn(name, data)

    return ValueColumn(name, data)
