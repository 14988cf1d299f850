"""
Global constants for treeframe.

Organized by: DataFrame Backend, Column Kinds, Paths, Merge, Split.
"""

import sys
from typing import Literal

# DataFrame Backend Configuration
DataFrameBackend = Literal["pyarrow", "polars", "pandas"]
"""Valid DataFrame backend types."""

DEFAULT_DATAFRAME_BACKEND: DataFrameBackend = "pyarrow"
"""Default DataFrame backend used by Table.to_dataframe()."""

AVAILABLE_BACKENDS: tuple[DataFrameBackend, ...] = ("pyarrow", "polars", "pandas")
"""All supported DataFrame backends (registered or not)."""


# Column Kinds
ColumnKind = Literal["value", "group", "frame"]
"""Tag of the three column variants."""

KIND_VALUE: ColumnKind = "value"
KIND_GROUP: ColumnKind = "group"
KIND_FRAME: ColumnKind = "frame"


# Paths
PATH_SEPARATOR = "."
"""Separator used by ColumnPath.parse() and str(ColumnPath)."""


# Merge
APPEND_POSITION = sys.maxsize
"""
Sentinel insertion position meaning "append at the end".

Sorts after every real sibling index. Groups of insertions that share it
keep the order in which they were first encountered.
"""


# Split
SplitMode = Literal["into", "inward", "inplace"]
"""
Where split() puts the generated columns.

- into: siblings at the source column's former position
- inward: children of a group named like the source, at its position
- inplace: a single list-valued column replacing the source
"""

SPLIT_MODES: tuple[SplitMode, ...] = ("into", "inward", "inplace")

DEFAULT_SPLIT_DELIMITER = ","
"""Delimiter used to split string cells."""

SPLIT_EXTRA_NAME_PREFIX = "splitted"
"""Prefix for generated names when a naming function returns too few names."""


# Flatten
DEFAULT_FLATTEN_SEPARATOR = "."
"""Joins ancestor names when flatten(keep_parent_names=True)."""
