"""
Polars backend.

Groups become struct columns, frames list-of-struct columns.
Requires polars package: pip install polars
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from treeframe._exceptions import TreeFrameBackendError

if TYPE_CHECKING:
    import polars as pl

    from treeframe.table import Table

# Check Polars availability
try:
    import polars as pl

    HAS_POLARS = True
except ImportError:
    HAS_POLARS = False


def _require_polars() -> None:
    """Raise TreeFrameBackendError if Polars is not available."""
    if not HAS_POLARS:
        raise TreeFrameBackendError(
            "Polars backend requires polars package.\n"
            "Install with: pip install polars"
        )


def to_polars(table: Table) -> pl.DataFrame:
    """Called by factory when backend='polars'."""
    _require_polars()
    return pl.from_arrow(table.to_arrow())
