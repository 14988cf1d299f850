"""
Table: ordered tree of named columns sharing one row count.

A Table is structurally a nameless group. It is immutable: every
structural operation returns a new Table and shares untouched sub-trees
with the original.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

from treeframe._constants import DEFAULT_FLATTEN_SEPARATOR
from treeframe._exceptions import ColumnNotFoundError
from treeframe._path import ColumnPath
from treeframe.columns import (
    Column,
    FrameColumn,
    GroupColumn,
    ValueColumn,
    check_siblings,
    make_column,
)

if TYPE_CHECKING:
    import pyarrow as pa

PathLike = Union[str, Sequence[str], ColumnPath]


class Table:
    """
    Column tree with a declared row count.

    A table without columns is valid and keeps its row count.

    Examples:
        >>> table = Table.from_pydict({
        ...     "id": [1, 2],
        ...     "person": {"name": ["Ann", "Bob"], "age": [31, 45]},
        ... })
        >>> table.column_names
        ['id', 'person']
        >>> table["person.age"].to_pylist()
        [31, 45]
        >>> table.move_after("id", "person").column_names
        ['person', 'id']
    """

    __slots__ = ("_columns", "_nrow")

    def __init__(self, columns: Iterable[Column] = (), nrow: Optional[int] = None) -> None:
        columns = tuple(columns)
        self._nrow = check_siblings(columns, nrow, owner="Table")
        self._columns = columns

    # Construction

    @classmethod
    def from_pydict(cls, mapping: Mapping[str, Any], nrow: Optional[int] = None) -> Table:
        """Build from {name: data}; nested dicts become groups (see make_column)."""
        return cls([make_column(name, data) for name, data in mapping.items()], nrow=nrow)

    @classmethod
    def from_arrow(cls, arrow_table: pa.Table) -> Table:
        """Build from a pyarrow Table: structs become groups, list<struct> frames."""
        from treeframe._arrow import table_from_arrow

        return table_from_arrow(arrow_table)

    # Structure access

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self._columns]

    @property
    def nrow(self) -> int:
        return self._nrow

    @property
    def ncol(self) -> int:
        return len(self._columns)

    def __len__(self) -> int:
        return self._nrow

    def __getitem__(self, key: PathLike) -> Column:
        return self.get_column(key)

    def __contains__(self, key: PathLike) -> bool:
        return self.has_column(key)

    def get_column(self, path: PathLike) -> Column:
        """
        Column at `path` (name, dotted string, or ColumnPath).

        Raises:
            ColumnNotFoundError: If any segment of the path is missing
        """
        path = ColumnPath.of(path)
        siblings: Sequence[Column] = self._columns
        column: Optional[Column] = None

        for depth, name in enumerate(path):
            if column is not None:
                if not isinstance(column, GroupColumn):
                    raise ColumnNotFoundError(
                        f"Column '{path}' not found: "
                        f"'{ColumnPath(path[:depth])}' is a {column.kind} column, not a group"
                    )
                siblings = column.columns

            column = next((c for c in siblings if c.name == name), None)
            if column is None:
                where = str(ColumnPath(path[:depth])) if depth else "<root>"
                raise ColumnNotFoundError(
                    f"Column '{path}' not found. "
                    f"Available at '{where}': {[c.name for c in siblings]}"
                )

        return column

    def has_column(self, path: PathLike) -> bool:
        try:
            self.get_column(path)
        except ColumnNotFoundError:
            return False
        return True

    def children_at(self, parent: Sequence[str]) -> tuple[Column, ...]:
        """Columns directly under `parent` (empty sequence = root level)."""
        if not parent:
            return self._columns
        group = self.get_column(ColumnPath(parent))
        if not isinstance(group, GroupColumn):
            raise ColumnNotFoundError(f"Column '{ColumnPath(parent)}' is not a group")
        return group.columns

    def walk(self) -> Iterator[tuple[ColumnPath, Column]]:
        """Pre-order (path, column) pairs, descending into groups only."""

        def visit(columns: Sequence[Column], prefix: tuple[str, ...]):
            for column in columns:
                path = ColumnPath.under(prefix, column.name)
                yield path, column
                if isinstance(column, GroupColumn):
                    yield from visit(column.columns, path)

        return visit(self._columns, ())

    def paths(self, leaves_only: bool = False) -> list[ColumnPath]:
        return [
            path
            for path, column in self.walk()
            if not (leaves_only and isinstance(column, GroupColumn))
        ]

    def equals(self, other: object) -> bool:
        return (
            isinstance(other, Table)
            and other.nrow == self._nrow
            and len(other.columns) == len(self._columns)
            and all(a.equals(b) for a, b in zip(self._columns, other.columns))
        )

    # Export

    def to_arrow(self) -> pa.Table:
        from treeframe._arrow import table_to_arrow

        return table_to_arrow(self)

    def to_pydict(self) -> dict[str, Any]:
        """{name: list}; groups become nested dicts, frame cells lists of records."""
        return {c.name: _column_to_python(c) for c in self._columns}

    def to_pylist(self) -> list[dict[str, Any]]:
        """Row records; group cells are dicts, frame cells lists of records."""
        cells = {c.name: _column_cells(c) for c in self._columns}
        return [{name: values[i] for name, values in cells.items()} for i in range(self._nrow)]

    def to_dataframe(self, backend: Optional[str] = None):
        """
        Convert to a DataFrame of the given backend (default: treeframe.get_backend()).

        Examples:
            >>> treeframe.use("pandas")
            >>> df = table.to_dataframe()  # pandas.DataFrame
        """
        from treeframe.dataframe import create_dataframe

        if backend is None:
            import treeframe

            backend = treeframe.get_backend()

        return create_dataframe(backend, self)

    # Structural operations

    def insert(
        self, *columns: Column, under=None, after=None, before=None, at=None
    ) -> Table:
        from treeframe.restructure import insert

        return insert(self, *columns, under=under, after=after, before=before, at=at)

    def remove(self, columns) -> Table:
        from treeframe.restructure import remove

        return remove(self, columns)

    def move_after(self, columns, target: PathLike) -> Table:
        from treeframe.restructure import move_after

        return move_after(self, columns, target)

    def move_before(self, columns, target: PathLike) -> Table:
        from treeframe.restructure import move_before

        return move_before(self, columns, target)

    def move_under(self, columns, group: PathLike) -> Table:
        from treeframe.restructure import move_under

        return move_under(self, columns, group)

    def move_into(self, columns, new_path: Callable[[ColumnPath, Column], PathLike]) -> Table:
        from treeframe.restructure import move_into

        return move_into(self, columns, new_path)

    def move_to(self, columns, index: int, inside_group: bool = False) -> Table:
        from treeframe.restructure import move_to

        return move_to(self, columns, index, inside_group=inside_group)

    def move_to_start(self, columns, inside_group: bool = False) -> Table:
        from treeframe.restructure import move_to_start

        return move_to_start(self, columns, inside_group=inside_group)

    def move_to_end(self, columns, inside_group: bool = False) -> Table:
        from treeframe.restructure import move_to_end

        return move_to_end(self, columns, inside_group=inside_group)

    def rename(self, names, columns=None) -> Table:
        from treeframe.restructure import rename

        return rename(self, names, columns=columns)

    def split(self, column: PathLike, **kwargs) -> Table:
        from treeframe.restructure import split

        return split(self, column, **kwargs)

    def reorder(self, columns, key=None, desc: bool = False) -> Table:
        from treeframe.restructure import reorder

        return reorder(self, columns, key=key, desc=desc)

    def flatten(
        self,
        columns=None,
        keep_parent_names: bool = False,
        separator: str = DEFAULT_FLATTEN_SEPARATOR,
    ) -> Table:
        from treeframe.restructure import flatten

        return flatten(
            self, columns, keep_parent_names=keep_parent_names, separator=separator
        )

    def group(self, columns, into: PathLike) -> Table:
        from treeframe.restructure import group

        return group(self, columns, into)

    def ungroup(self, columns) -> Table:
        from treeframe.restructure import ungroup

        return ungroup(self, columns)

    # Display

    def describe(self) -> str:
        """Indented tree of column names and kinds."""
        lines = [f"Table: {self._nrow} rows x {self.ncol} columns"]
        for path, column in self.walk():
            indent = "  " * len(path)
            if isinstance(column, ValueColumn):
                lines.append(f"{indent}{column.name}: {column.type}")
            else:
                lines.append(f"{indent}{column.name}: {column.kind}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return self.describe()


def _column_to_python(column: Column) -> Any:
    if isinstance(column, ValueColumn):
        return column.to_pylist()
    if isinstance(column, GroupColumn):
        return {c.name: _column_to_python(c) for c in column.columns}
    return [frame.to_pylist() for frame in column.frames]


def _column_cells(column: Column) -> list[Any]:
    if isinstance(column, ValueColumn):
        return column.to_pylist()
    if isinstance(column, GroupColumn):
        children = {c.name: _column_cells(c) for c in column.columns}
        return [
            {name: cells[i] for name, cells in children.items()}
            for i in range(column.nrow)
        ]
    if isinstance(column, FrameColumn):
        return [frame.to_pylist() for frame in column.frames]
    raise TypeError(f"Unknown column type: {type(column).__name__}")
