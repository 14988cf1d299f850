"""
Reference tracking tree.

Immutable snapshot of a column tree taken when columns are selected for
removal. Every node remembers its original position among its siblings and
whether it was removed, so a later merge can put columns back where they
(or their anchors) used to be.

Nodes live in one arena (a tuple of records). Parents and children are
arena indices; a ReferenceNode is a handle (tree, index), so two handles
are equal only if they point into the same snapshot.

Lifetime: created by one removal, read by one merge, then discarded.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import NamedTuple, Optional

from treeframe._path import ColumnPath
from treeframe.columns import Column, GroupColumn

ROOT_INDEX = 0


class _NodeRecord(NamedTuple):
    name: Optional[str]
    original_index: int
    was_removed: bool
    depth: int
    parent: Optional[int]
    children: tuple[int, ...]


class ReferenceTree:
    """
    Arena of reference nodes for one table snapshot.

    Build with ReferenceTree.snapshot(); navigate from .root or find().
    """

    __slots__ = ("_records", "_lookup")

    def __init__(self, records: Sequence[_NodeRecord]) -> None:
        self._records = tuple(records)
        # (parent index, child name) -> child index
        self._lookup = {
            (record.parent, record.name): index
            for index, record in enumerate(self._records)
            if record.parent is not None
        }

    @classmethod
    def snapshot(
        cls, columns: Sequence[Column], removed: Collection[Sequence[str]] = ()
    ) -> ReferenceTree:
        """
        Record every column of a tree.

        Args:
            columns: Root-level columns of the table being snapshotted
            removed: Paths whose nodes are flagged was_removed

        Returns:
            ReferenceTree whose root mirrors the table (depth 0)
        """
        removed = {tuple(path) for path in removed}
        names: list[Optional[str]] = [None]
        positions = [-1]
        flags = [False]
        depths = [0]
        parents: list[Optional[int]] = [None]
        children: list[list[int]] = [[]]

        def visit(cols: Sequence[Column], parent: int, prefix: tuple[str, ...]) -> None:
            for position, column in enumerate(cols):
                path = (*prefix, column.name)
                index = len(names)
                names.append(column.name)
                positions.append(position)
                flags.append(path in removed)
                depths.append(len(path))
                parents.append(parent)
                children.append([])
                children[parent].append(index)
                if isinstance(column, GroupColumn):
                    visit(column.columns, index, path)

        visit(columns, ROOT_INDEX, ())

        return cls(
            _NodeRecord(n, p, f, d, parent, tuple(c))
            for n, p, f, d, parent, c in zip(names, positions, flags, depths, parents, children)
        )

    @property
    def root(self) -> ReferenceNode:
        return ReferenceNode(self, ROOT_INDEX)

    def find(self, path: Sequence[str]) -> Optional[ReferenceNode]:
        """Node at `path`, None if the snapshot has no such column."""
        index = ROOT_INDEX
        for name in path:
            index = self._lookup.get((index, name))
            if index is None:
                return None
        return ReferenceNode(self, index)

    def __len__(self) -> int:
        return len(self._records)

    def _record(self, index: int) -> _NodeRecord:
        return self._records[index]

    def _child(self, index: int, name: str) -> Optional[int]:
        return self._lookup.get((index, name))


class ReferenceNode:
    """
    Read-only handle to one node of a ReferenceTree.

    Attributes:
        name: Column name (None for the root)
        original_index: Position among siblings at snapshot time (-1 for the root)
        was_removed: Whether this column was taken out of the table
        depth: 0 for the root, 1 for root-level columns, ...
    """

    __slots__ = ("_tree", "_index")

    def __init__(self, tree: ReferenceTree, index: int) -> None:
        self._tree = tree
        self._index = index

    @property
    def name(self) -> Optional[str]:
        return self._tree._record(self._index).name

    @property
    def original_index(self) -> int:
        return self._tree._record(self._index).original_index

    @property
    def was_removed(self) -> bool:
        return self._tree._record(self._index).was_removed

    @property
    def depth(self) -> int:
        return self._tree._record(self._index).depth

    @property
    def tree(self) -> ReferenceTree:
        return self._tree

    @property
    def parent(self) -> Optional[ReferenceNode]:
        parent = self._tree._record(self._index).parent
        return None if parent is None else ReferenceNode(self._tree, parent)

    @property
    def children(self) -> tuple[ReferenceNode, ...]:
        """Child nodes in original sibling order."""
        return tuple(
            ReferenceNode(self._tree, i) for i in self._tree._record(self._index).children
        )

    @property
    def root(self) -> ReferenceNode:
        return self._tree.root

    @property
    def path(self) -> Optional[ColumnPath]:
        """Original path of the column (None for the root)."""
        names = []
        node: Optional[ReferenceNode] = self
        while node is not None and node.depth > 0:
            names.append(node.name)
            node = node.parent
        return ColumnPath(reversed(names)) if names else None

    def get(self, name: str) -> Optional[ReferenceNode]:
        index = self._tree._child(self._index, name)
        return None if index is None else ReferenceNode(self._tree, index)

    def get_ancestor(self, depth: int) -> ReferenceNode:
        """
        Ancestor at `depth` (the node itself at its own depth).

        Raises:
            ValueError: If depth is negative or deeper than this node
        """
        if depth < 0 or depth > self.depth:
            raise ValueError(
                f"No ancestor at depth {depth} for node '{self.path}' at depth {self.depth}"
            )

        node = self
        while node.depth > depth:
            node = node.parent
        return node

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ReferenceNode)
            and other._tree is self._tree
            and other._index == self._index
        )

    def __hash__(self) -> int:
        return hash((id(self._tree), self._index))

    def __repr__(self) -> str:
        flag = ", removed" if self.was_removed else ""
        label = str(self.path) if self.depth else "<root>"
        return f"ReferenceNode({label!r}, index={self.original_index}{flag})"
