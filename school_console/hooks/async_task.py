"""Minimal async helpers for one-off screens.

``AsyncTask`` wraps a single async function with loading/error/data
tracking and no overlap protection. ``FormSubmitter`` guards a submit button:
while a submission runs, further submits are ignored.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from ..base.errors import error_message
from ..config.defaults import FETCH_ERROR_FALLBACK, SUBMIT_ERROR_FALLBACK
from .state import ResultState
from .unit import StatefulUnit


class AsyncTask(StatefulUnit[ResultState]):
    kind = "async_task"

    def __init__(self, async_fn: Callable[..., Awaitable[Any]]) -> None:
        super().__init__(ResultState())
        self._async_fn = async_fn

    @property
    def data(self) -> Any:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        self._set_state(ResultState(data=self._state.data, loading=True, error=None))
        try:
            result = await self._async_fn(*args, **kwargs)
        except Exception as exc:
            self._set_state(
                ResultState(data=self._state.data, loading=False, error=error_message(exc, FETCH_ERROR_FALLBACK))
            )
            raise
        self._set_state(ResultState(data=result, loading=False, error=None))
        return result

    def reset(self) -> None:
        self._set_state(ResultState())


class FormSubmitter(StatefulUnit[ResultState]):
    """``state.loading`` doubles as the "submitting" flag."""

    kind = "form_submit"

    def __init__(self) -> None:
        super().__init__(ResultState())

    @property
    def submitting(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    async def submit(self, submit_fn: Callable[[], Awaitable[Any]]) -> Any:
        if self._state.loading:
            return None
        self._set_state(ResultState(loading=True, error=None))
        try:
            result = await submit_fn()
        except Exception as exc:
            self._set_state(ResultState(loading=False, error=error_message(exc, SUBMIT_ERROR_FALLBACK)))
            raise
        self._set_state(ResultState(loading=False, error=None))
        return result

    def reset(self) -> None:
        self._set_state(ResultState())


__all__ = ["AsyncTask", "FormSubmitter"]
