"""Pagination unit: page number and filters driving a fetch unit."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from ..base.cancellation import CancellationToken
from ..config import get_console_config
from .fetch import FetchUnit
from .state import ResultState
from .unit import Listener

PageFetchFn = Callable[[Dict[str, Any]], Awaitable[Any]]


def page_items(payload: Any) -> Optional[List[Any]]:
    """Items of a fetched page: the envelope's ``data`` list, or the list itself."""
    if isinstance(payload, Mapping):
        items = payload.get("data")
        return items if isinstance(items, list) else None
    if isinstance(payload, list):
        return payload
    return None


class PaginationUnit:
    """Drives a paged, filterable list view.

    ``fetch_fn`` receives ``{**filters, "page": page, "limit": page_size}``.
    Page moves are rejected while a page is loading. ``has_more`` starts true
    and afterwards reports whether the last page came back full; a short page
    is taken to mean the end of the collection.

    Until :meth:`mount` runs the first page the unit reports ``loading``, so
    page moves made before mounting are rejected. ``page_size`` and
    ``initial_page`` default to the configured values.
    """

    def __init__(
        self,
        fetch_fn: PageFetchFn,
        *,
        page_size: Optional[int] = None,
        initial_page: Optional[int] = None,
    ) -> None:
        if page_size is None or initial_page is None:
            settings = get_console_config()
            page_size = settings.page_size if page_size is None else page_size
            initial_page = settings.initial_page if initial_page is None else initial_page
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._fetch_fn = fetch_fn
        self._page_size = page_size
        self._page = initial_page
        self._filters: Dict[str, Any] = {}
        self._has_more = True
        self._fetch = FetchUnit(self._load_current_page, self._deps())
        self._fetch.subscribe(self._track_has_more)

    # ---------------------------------------------------------------- helpers
    def _deps(self) -> Tuple[Any, ...]:
        return (self._page, self._filters, self._page_size)

    def _load_current_page(self) -> Awaitable[Any]:
        params = {**self._filters, "page": self._page, "limit": self._page_size}
        return self._fetch_fn(params)

    def _track_has_more(self, state: ResultState) -> None:
        items = page_items(state.data)
        if items is not None:
            self._has_more = len(items) == self._page_size

    def _sync(self) -> Optional[asyncio.Task]:
        return self._fetch.update(deps=self._deps())

    # ------------------------------------------------------------ passthrough
    @property
    def state(self) -> ResultState:
        return self._fetch.state

    @property
    def data(self) -> Any:
        return self._fetch.data

    @property
    def loading(self) -> bool:
        return self._fetch.loading

    @property
    def error(self) -> Optional[str]:
        return self._fetch.error

    @property
    def token(self) -> Optional[CancellationToken]:
        return self._fetch.token

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    @property
    def has_more(self) -> bool:
        return self._has_more

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._fetch.subscribe(listener)

    def set_data(self, new_data: Any) -> None:
        self._fetch.set_data(new_data)

    async def refetch(self) -> Any:
        return await self._fetch.refetch()

    def mount(self) -> Optional[asyncio.Task]:
        return self._fetch.mount()

    def close(self) -> None:
        self._fetch.close()

    async def __aenter__(self) -> "PaginationUnit":
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------- page moves
    def load_page(self, page_num: int, filters: Optional[Mapping[str, Any]] = None) -> Optional[asyncio.Task]:
        """Replace page and filters in one step (e.g. after "Apply filters").

        Always refetches, even when page and filters are unchanged.
        """
        self._page = page_num
        self._filters = dict(filters or {})
        return self._sync() or self._fetch.rerun()

    def next_page(self) -> Optional[asyncio.Task]:
        if not self._has_more or self._fetch.loading:
            return None
        self._page += 1
        return self._sync()

    def prev_page(self) -> Optional[asyncio.Task]:
        if self._page <= 1 or self._fetch.loading:
            return None
        self._page -= 1
        return self._sync()

    def go_to_page(self, page_num: int) -> Optional[asyncio.Task]:
        if page_num < 1 or self._fetch.loading:
            return None
        self._page = page_num
        return self._sync()


__all__ = ["PaginationUnit", "PageFetchFn", "page_items"]
