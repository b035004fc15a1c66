"""Fetch unit: read operations with latest-wins result application.

Every screen that lists or shows backend records goes through a
:class:`FetchUnit`. The unit runs a zero-argument async read operation,
re-runs it when its dependency tuple changes, and applies a result only when
it belongs to the most recent call.

Ordering
--------
Each :meth:`FetchUnit.execute` bumps a request identity counter and replaces
the cancellation token. A response is applied iff its identity still equals
the counter and the unit is still mounted. Cancelling the previous token is
a courtesy to the operation; correctness rests on the identity check alone,
so a late response from an operation that ignored its token is dropped.

Failure semantics
-----------------
``execute`` never raises for operation failures. ``CancelledError`` from the
operation is swallowed silently; any other exception becomes the ``error``
message of the state and is handed to ``on_error``.

Example
-------
```
unit = FetchUnit(lambda: students.list({"class_id": 3}, token=unit.token), deps=(3,))
async with unit:
    ...
```
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, Iterable, Optional, Tuple

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import classify_exception, error_message
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import FETCH_ERROR_FALLBACK
from .state import ResultState
from .unit import UNSET, StatefulUnit, operation_name

logger = get_logger(__name__)

FetchFn = Callable[[], Awaitable[Any]]


class FetchUnit(StatefulUnit[ResultState]):
    """Runs a read operation and exposes ``{data, loading, error}``.

    Parameters
    ----------
    fetch_fn:
        Zero-argument callable returning an awaitable. The latest reference
        passed via :meth:`update` is the one invoked.
    deps:
        Values whose change (by ``==``) re-runs the operation.
    enabled:
        Gates auto-run. Disabling keeps existing data.
    initial_data:
        Seed value before the first resolution; also what :meth:`reset`
        restores.
    on_success / on_error:
        Called with the applied result / the surfaced exception.
    """

    kind = "fetch"

    def __init__(
        self,
        fetch_fn: FetchFn,
        deps: Iterable[Any] = (),
        *,
        enabled: bool = True,
        initial_data: Any = None,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        super().__init__(ResultState(data=initial_data, loading=enabled, error=None))
        self._fetch_fn = fetch_fn
        self._deps: Tuple[Any, ...] = tuple(deps)
        self._enabled = bool(enabled)
        self._initial_data = initial_data
        self._on_success = on_success
        self._on_error = on_error
        self._request_id = 0
        self._token: Optional[CancellationToken] = None
        self._started = False

    # ------------------------------------------------------------------ state
    @property
    def data(self) -> Any:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def deps(self) -> Tuple[Any, ...]:
        return self._deps

    @property
    def request_id(self) -> int:
        """Identity of the most recently started call (0 before the first)."""
        return self._request_id

    @property
    def token(self) -> Optional[CancellationToken]:
        """Cancellation token of the in-flight call, ``None`` when idle."""
        return self._token

    @property
    def is_idle(self) -> bool:
        return not self._state.loading and self._state.error is None and self._state.data is self._initial_data

    # -------------------------------------------------------------- lifecycle
    def mount(self) -> Optional[asyncio.Task]:
        """Start the unit; schedules the first run when enabled."""
        if self._started or not self._mounted:
            return None
        self._started = True
        return self._auto_run()

    def update(
        self,
        *,
        fetch_fn: Any = UNSET,
        deps: Any = UNSET,
        enabled: Any = UNSET,
        on_success: Any = UNSET,
        on_error: Any = UNSET,
    ) -> Optional[asyncio.Task]:
        """Reconfigure the unit, re-running when ``enabled`` or ``deps`` changed.

        Replacing ``fetch_fn`` or the callbacks alone never triggers a run;
        the next run simply uses the newest references.

        Returns the scheduled task, or ``None`` when nothing was scheduled.
        """
        if fetch_fn is not UNSET:
            self._fetch_fn = fetch_fn
        if on_success is not UNSET:
            self._on_success = on_success
        if on_error is not UNSET:
            self._on_error = on_error
        changed = False
        if deps is not UNSET:
            new_deps = tuple(deps)
            if new_deps != self._deps:
                self._deps = new_deps
                changed = True
        if enabled is not UNSET and bool(enabled) != self._enabled:
            self._enabled = bool(enabled)
            changed = True
        if changed and self._started:
            return self._auto_run()
        return None

    def close(self) -> None:
        """Tear down: cancel the in-flight call and refuse further writes."""
        if self._token is not None:
            self._token.cancel("unit closed")
            self._token = None
        super().close()

    def _auto_run(self) -> Optional[asyncio.Task]:
        if not self._enabled or not self._mounted:
            return None
        return self._spawn(self.execute())

    def rerun(self) -> Optional[asyncio.Task]:
        """Schedule a run even though the deps are unchanged.

        Ignored before :meth:`mount`, while disabled and after close.
        """
        if not self._started:
            return None
        return self._auto_run()

    # ------------------------------------------------------------- operations
    def _is_current(self, request_id: int) -> bool:
        return request_id == self._request_id and self._mounted

    async def execute(self) -> Any:
        """Run the read operation once; see module docstring for semantics.

        Returns the result when it was applied, otherwise ``None``.
        """
        if not self._mounted:
            return None
        if self._token is not None:
            self._token.cancel("superseded")
        token = CancellationToken()
        self._token = token
        self._request_id += 1
        request_id = self._request_id
        fetch_fn = self._fetch_fn
        ctx = LogContext(unit=self.kind, request_id=request_id, operation=operation_name(fetch_fn))

        self._set_state(replace(self._state, loading=True, error=None))
        log_event(logger, "fetch.start", ctx, level=logging.DEBUG)

        try:
            result = await fetch_fn()
        except CancelledError as exc:
            if self._token is token:
                self._token = None
            log_event(logger, "fetch.cancelled", ctx, level=logging.DEBUG, reason=str(exc))
            return None
        except Exception as exc:  # surfaced via state, never re-raised
            return self._apply_failure(request_id, token, exc, ctx)

        if not self._is_current(request_id):
            log_event(logger, "fetch.stale", ctx, level=logging.DEBUG, current_request_id=self._request_id)
            return None
        self._token = None
        self._set_state(ResultState(data=result, loading=False, error=None))
        log_event(logger, "fetch.success", ctx, level=logging.DEBUG)
        if self._on_success is not None:
            self._on_success(result)
        return result

    def _apply_failure(self, request_id: int, token: CancellationToken, exc: Exception, ctx: LogContext) -> None:
        if not self._is_current(request_id):
            log_event(logger, "fetch.stale", ctx, level=logging.DEBUG, current_request_id=self._request_id)
            return None
        if self._token is token:
            self._token = None
        message = error_message(exc, FETCH_ERROR_FALLBACK)
        self._set_state(replace(self._state, loading=False, error=message))
        log_event(
            logger,
            "fetch.error",
            ctx,
            level=logging.WARNING,
            error_code=classify_exception(exc).value,
            error=message,
        )
        if self._on_error is not None:
            self._on_error(exc)
        return None

    async def refetch(self) -> Any:
        """Manual re-run (refresh button); same as :meth:`execute`."""
        return await self.execute()

    def reset(self) -> None:
        """Cancel any outstanding call and restore the initial state.

        The request identity is bumped as well, so an in-flight call whose
        operation ignores its token can no longer land.
        """
        if self._token is not None:
            self._token.cancel("reset")
            self._token = None
        self._request_id += 1
        self._set_state(ResultState(data=self._initial_data, loading=False, error=None))

    def set_data(self, new_data: Any) -> None:
        """Replace ``data`` directly, or via ``new_data(previous)`` when callable.

        ``loading`` and ``error`` are left untouched.
        """
        data = new_data(self._state.data) if callable(new_data) else new_data
        self._set_state(replace(self._state, data=data))


__all__ = ["FetchUnit", "FetchFn"]
