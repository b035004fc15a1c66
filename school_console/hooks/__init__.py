"""Request-lifecycle units used by every console screen.

Built bottom-up: the debouncer and :class:`FetchUnit` are leaves;
:class:`MutationUnit` and :class:`PaginationUnit` sit on top of them.
"""

from .async_task import AsyncTask, FormSubmitter
from .class_filter import ClassFilter
from .debounce import Debouncer
from .fetch import FetchUnit
from .mutation import MutationUnit
from .optimistic import OptimisticMutationUnit
from .pagination import PaginationUnit, page_items
from .state import MutationStatus, ResultState
from .unit import StatefulUnit

__all__ = [
    "AsyncTask",
    "ClassFilter",
    "Debouncer",
    "FetchUnit",
    "FormSubmitter",
    "MutationStatus",
    "MutationUnit",
    "OptimisticMutationUnit",
    "PaginationUnit",
    "ResultState",
    "StatefulUnit",
    "page_items",
]
