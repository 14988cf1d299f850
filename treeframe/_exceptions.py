"""
Exception hierarchy for treeframe.

All treeframe exceptions inherit from TreeFrameError.
Structural conflicts found while merging columns into a tree inherit from
TreeFrameStructureError and carry the offending path.

Usage:
    from treeframe._exceptions import TreeFrameError, PathCollisionError

    try:
        table = table.insert(column, under="person")
    except PathCollisionError as e:
        logger.warning(f"Column already exists: {e.path}")
    except TreeFrameError:
        raise
"""


class TreeFrameError(Exception):
    """Base exception for all treeframe errors."""

    pass


class TreeFrameStructureError(TreeFrameError):
    """
    Structural conflict while rebuilding a column tree.

    Always fatal to the enclosing operation: no table is produced.
    """

    def __init__(self, message: str, path=None) -> None:
        super().__init__(message)
        self.path = path


class PathCollisionError(TreeFrameStructureError):
    """
    Insertion path ends exactly at a column that already exists.

    Examples:
        - "Cannot insert column 'person.age' because a column with this path already exists"
    """

    pass


class NonGroupDescentError(TreeFrameStructureError):
    """
    Insertion path goes through a value or frame column.

    Examples:
        - "Cannot insert columns under 'age', because it is not a column group"
    """

    pass


class DuplicateInsertionError(TreeFrameStructureError):
    """
    Two columns of one insertion batch end at the same path.

    Examples:
        - "Cannot insert more than one column into the path 'x'"
    """

    pass


class CyclicMoveError(TreeFrameError):
    """
    Column moved relative to itself or one of its own descendants.

    Raised before anything is removed from the table.

    Examples:
        - "Cannot move column 'person' after its own child column 'person.address'"
    """

    def __init__(self, message: str, source=None, target=None) -> None:
        super().__init__(message)
        self.source = source
        self.target = target


class ColumnNotFoundError(TreeFrameError, KeyError):
    """
    Selected column does not exist.

    Examples:
        - "Column 'person.zip' not found. Available at 'person': ['name', 'address']"
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class TreeFrameSchemaError(TreeFrameError):
    """
    Invalid table structure.

    Raised when:
    - Sibling columns share a name
    - Columns of one table have different row counts
    - A column name is empty or not a string
    - An operation does not support the selected column kind
    """

    pass


class TreeFrameBackendError(TreeFrameError):
    """
    DataFrame backend error.

    Raised when:
    - Backend not registered or unavailable
    - Backend dependencies missing

    Examples:
        - "Polars backend requires polars package. Install with: pip install polars"
        - "Unknown backend: 'spark'. Available: ['pyarrow']"
    """

    pass
