"""PyArrow backend: Tables export as pyarrow.Table with nested struct columns."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pyarrow as pa

if TYPE_CHECKING:
    from treeframe.table import Table


def to_arrow_table(table: Table) -> pa.Table:
    """Called by factory when backend='pyarrow'."""
    return table.to_arrow()
