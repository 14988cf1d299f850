"""
DataFrame backend registry and factory.

Provides backend registration and conversion of treeframe Tables into
DataFrames. Table.to_dataframe() uses create_dataframe() to remain
backend-agnostic.
"""

from typing import Any, Protocol

from treeframe._constants import AVAILABLE_BACKENDS, DataFrameBackend
from treeframe._exceptions import TreeFrameBackendError


class BackendFactory(Protocol):
    """Protocol for backend factory functions."""

    def __call__(self, table: Any) -> Any:
        """Create a DataFrame from a treeframe Table."""
        ...


# Backend registry: name -> factory function
_BACKENDS: dict[DataFrameBackend, BackendFactory] = {}


def register_backend(name: DataFrameBackend, factory_fn: BackendFactory) -> None:
    """
    Register a DataFrame backend.

    Args:
        name: Backend name from DataFrameBackend literal
        factory_fn: Factory function that takes a Table and returns a DataFrame

    Example:
        from .pyarrow import to_arrow_table
        register_backend('pyarrow', to_arrow_table)
    """
    _BACKENDS[name] = factory_fn


def create_dataframe(backend: str, table: Any):
    """
    Convert a treeframe Table into a backend DataFrame.

    Args:
        backend: Backend name ("pyarrow", "polars", "pandas")
        table: treeframe Table

    Returns:
        Backend-specific DataFrame (pyarrow.Table, polars.DataFrame or
        pandas.DataFrame)

    Raises:
        TreeFrameBackendError: If backend is not registered or unknown
    """
    if backend not in AVAILABLE_BACKENDS:
        raise TreeFrameBackendError(
            f"Unknown backend: '{backend}'\n"
            f"Available backends: {AVAILABLE_BACKENDS}\n"
            f"\n"
            f"To use additional backends, install required packages:\n"
            f"  pip install polars  # For Polars backend\n"
            f"  pip install pandas  # For Pandas backend"
        )

    if backend not in _BACKENDS:
        raise TreeFrameBackendError(
            f"Backend '{backend}' is not registered.\n"
            f"Registered backends: {list(_BACKENDS.keys())}\n"
            f"\n"
            f"The backend may require additional dependencies:\n"
            f"  pip install {backend}"
        )

    factory = _BACKENDS[backend]  # type: ignore[index]
    return factory(table)


def get_available_backends() -> list[DataFrameBackend]:
    """
    Get list of currently registered backends.

    Returns:
        List of registered backend names
    """
    return list(_BACKENDS.keys())


def _register_all_backends() -> None:
    """Register all available backends on module import."""
    # PyArrow (default, always available)
    from treeframe.dataframe.pyarrow import to_arrow_table

    register_backend("pyarrow", to_arrow_table)

    # Polars (optional)
    from treeframe.dataframe.polars import HAS_POLARS, to_polars

    if HAS_POLARS:
        register_backend("polars", to_polars)

    # Pandas (optional)
    from treeframe.dataframe.pandas import HAS_PANDAS, to_pandas

    if HAS_PANDAS:
        register_backend("pandas", to_pandas)


# Auto-register on module import
_register_all_backends()

__all__ = [
    "create_dataframe",
    "get_available_backends",
    "register_backend",
]
