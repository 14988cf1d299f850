"""Unique column names for generated or relocated columns."""

from collections.abc import Iterable, Sequence

from treeframe.columns import check_name


class ColumnNameGenerator:
    """
    Hands out sibling names that do not collide.

    Seeded with the names already present at one tree level; every name it
    returns is recorded, so pending columns never collide with each other.

    Examples:
        >>> gen = ColumnNameGenerator(["a", "b"])
        >>> gen.add_unique("c")
        'c'
        >>> gen.add_unique("a")
        'a1'
        >>> gen.add_unique("a")
        'a2'
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = []
        self._used: set[str] = set()
        for name in names:
            self._add(name)

    @classmethod
    def for_level(cls, table, parent: Sequence[str] = ()) -> "ColumnNameGenerator":
        """Generator seeded with the names of the columns under `parent`."""
        if parent and not table.has_column(parent):
            return cls()
        return cls(c.name for c in table.children_at(parent))

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._used

    def add_unique(self, preferred: str) -> str:
        """Return `preferred`, or `preferred` + the smallest free number."""
        check_name(preferred)
        name = preferred
        k = 1
        while name in self._used:
            name = f"{preferred}{k}"
            k += 1
        self._add(name)
        return name

    def _add(self, name: str) -> None:
        if name not in self._used:
            self._used.add(name)
            self._names.append(name)
