"""school_console package

Request-lifecycle data layer of the school administration console.

Purpose:
    Every screen (admissions, fee vouchers, faculty payroll, student search)
    reads and writes backend records through a handful of units that own the
    ``{data, loading, error}`` state of one request stream each.

Public API (re-exported):
    - Version: ``__version__``
    - Units: :class:`FetchUnit`, :class:`MutationUnit`,
      :class:`PaginationUnit`, :class:`Debouncer`,
      :class:`OptimisticMutationUnit`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Errors: :class:`ApiError`, :class:`ErrorCode`
    - Backend client: :class:`ApiClient`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ApiError, ErrorCode
from .hooks import (
    Debouncer,
    FetchUnit,
    MutationUnit,
    OptimisticMutationUnit,
    PaginationUnit,
    ResultState,
)
from .services import ApiClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ApiClient",
    "ApiError",
    "CancellationToken",
    "CancelledError",
    "Debouncer",
    "ErrorCode",
    "FetchUnit",
    "MutationUnit",
    "OptimisticMutationUnit",
    "PaginationUnit",
    "ResultState",
]
