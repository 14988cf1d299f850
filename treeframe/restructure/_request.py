"""Insertion requests consumed by the tree merge engine."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from treeframe._path import ColumnPath
from treeframe._tree import ReferenceNode
from treeframe.columns import FrameColumn, GroupColumn, ValueColumn


class InsertionRequest(BaseModel):
    """
    One column to place into a column tree.

    Attributes:
        path: Full destination path; the last name is the inserted column's name
        column: Column to insert (renamed to path.name on insertion)
        reference: Node of a removal snapshot anchoring the position; without
            it the column is appended inside its parent

    Examples:
        >>> InsertionRequest(path="person.age", column=ValueColumn("age", [31, 45]))
        >>> InsertionRequest(path=["person", "age"], column=col, reference=node)
    """

    path: ColumnPath
    column: Union[ValueColumn, GroupColumn, FrameColumn]
    reference: Optional[ReferenceNode] = None

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    def __repr__(self) -> str:
        anchor = f", reference={self.reference!r}" if self.reference is not None else ""
        return f"InsertionRequest('{self.path}', {self.column!r}{anchor})"
