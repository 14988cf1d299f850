"""
Pandas backend.

Pandas has no nested columns: groups are flattened into dotted column names
("person.address.city"). Frame cells become lists of row dicts.
Requires pandas package: pip install pandas
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pyarrow as pa

from treeframe._exceptions import TreeFrameBackendError

if TYPE_CHECKING:
    import pandas as pd

    from treeframe.table import Table

# Check Pandas availability
try:
    import pandas as pd

    HAS_PANDAS = True
except ImportError:
    HAS_PANDAS = False


def _require_pandas() -> None:
    """Raise TreeFrameBackendError if Pandas is not available."""
    if not HAS_PANDAS:
        raise TreeFrameBackendError(
            "Pandas backend requires pandas package.\n"
            "Install with: pip install pandas"
        )


def _flatten_structs(arrow_table: pa.Table) -> pa.Table:
    # pa.Table.flatten() lifts one struct level per call
    while any(pa.types.is_struct(field.type) for field in arrow_table.schema):
        arrow_table = arrow_table.flatten()
    return arrow_table


def to_pandas(table: Table) -> pd.DataFrame:
    """Called by factory when backend='pandas'."""
    _require_pandas()
    return _flatten_structs(table.to_arrow()).to_pandas()
