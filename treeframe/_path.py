"""Column paths: name sequences locating a column from the table root."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from treeframe._constants import PATH_SEPARATOR


class ColumnPath(tuple):
    """
    Ordered, non-empty sequence of column names from the root to a column.

    Value type: equal name sequences are equal (and hash equal) paths.
    len(path) is the depth of the column, root-level columns have depth 1.

    Examples:
        >>> path = ColumnPath(["person", "address", "city"])
        >>> path.name
        'city'
        >>> path.parent
        ('person', 'address')
        >>> str(path)
        'person.address.city'
    """

    __slots__ = ()

    def __new__(cls, names: Iterable[str]) -> ColumnPath:
        if isinstance(names, str):
            names = (names,)
        names = tuple(names)
        if not names:
            raise ValueError("ColumnPath cannot be empty")
        for name in names:
            if not isinstance(name, str) or not name:
                raise ValueError(f"Invalid column name in path {names!r}: {name!r}")
        return super().__new__(cls, names)

    @classmethod
    def parse(cls, text: str) -> ColumnPath:
        """Parse dotted notation: 'person.address' -> ('person', 'address')."""
        return cls(text.split(PATH_SEPARATOR))

    @classmethod
    def of(cls, value: str | Sequence[str]) -> ColumnPath:
        """Coerce a name, a dotted string or a name sequence into a path."""
        if isinstance(value, ColumnPath):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls(value)

    @classmethod
    def under(cls, parent: Sequence[str], name: str) -> ColumnPath:
        """Path of a column called `name` inside `parent` (empty = root)."""
        return cls((*parent, name))

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        # pydantic fields typed ColumnPath accept anything ColumnPath.of() accepts
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls.of)

    @property
    def name(self) -> str:
        return self[-1]

    @property
    def parent(self) -> tuple[str, ...]:
        """Names of the ancestors; empty tuple for root-level columns."""
        return tuple(self[:-1])

    @property
    def depth(self) -> int:
        return len(self)

    def child(self, name: str) -> ColumnPath:
        return ColumnPath((*self, name))

    def is_prefix_of(self, other: Sequence[str]) -> bool:
        """True if `other` is strictly nested under this path."""
        return len(other) > len(self) and tuple(other[: len(self)]) == tuple(self)

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self)

    def __repr__(self) -> str:
        return f"ColumnPath({list(self)!r})"
