"""Mutation unit: one write operation at a time per unit.

Create/update/delete calls from forms go through a :class:`MutationUnit`.
While a call is in flight, further ``mutate`` calls on the same unit are
dropped with a warning log instead of being queued; a double-clicked "Save"
therefore produces exactly one backend write and no error for the user.

Unlike the fetch unit, failures are both recorded in the state and re-raised,
so the calling code can keep a dialog open or roll back local edits.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from ..base.errors import classify_exception, error_message
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import MUTATION_ERROR_FALLBACK
from .state import ResultState
from .unit import UNSET, StatefulUnit, operation_name

logger = get_logger(__name__)

MutationFn = Callable[..., Awaitable[Any]]


class MutationUnit(StatefulUnit[ResultState]):
    """Runs a write operation with explicit arguments, never concurrently.

    Callbacks receive the call's arguments after the result/error:
    ``on_success(result, *args, **kwargs)``, ``on_error(exc, *args, **kwargs)``
    and ``on_settled(result_or_None, exc_or_None, *args, **kwargs)``.
    """

    kind = "mutation"

    def __init__(
        self,
        mutation_fn: MutationFn,
        *,
        on_success: Optional[Callable[..., None]] = None,
        on_error: Optional[Callable[..., None]] = None,
        on_settled: Optional[Callable[..., None]] = None,
    ) -> None:
        super().__init__(ResultState())
        self._mutation_fn = mutation_fn
        self._on_success = on_success
        self._on_error = on_error
        self._on_settled = on_settled
        self._in_progress = False
        self._calls = 0

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
    def in_progress(self) -> bool:
        return self._in_progress

    @property
    def is_idle(self) -> bool:
        return not self._state.loading and self._state.error is None and self._state.data is None

    def update(
        self,
        *,
        mutation_fn: Any = UNSET,
        on_success: Any = UNSET,
        on_error: Any = UNSET,
        on_settled: Any = UNSET,
    ) -> None:
        """Swap in newer operation/callback references; in-flight calls keep theirs."""
        if mutation_fn is not UNSET:
            self._mutation_fn = mutation_fn
        if on_success is not UNSET:
            self._on_success = on_success
        if on_error is not UNSET:
            self._on_error = on_error
        if on_settled is not UNSET:
            self._on_settled = on_settled

    async def mutate(self, *args: Any, **kwargs: Any) -> Any:
        """Invoke the write operation unless one is already in flight.

        Returns the operation's result, or ``None`` when the call was
        rejected as a duplicate. Re-raises the operation's exception.
        """
        mutation_fn = self._mutation_fn
        ctx = LogContext(unit=self.kind, request_id=self._calls + 1, operation=operation_name(mutation_fn))
        if self._in_progress:
            log_event(logger, "mutation.rejected", ctx, level=logging.WARNING, reason="mutation already in progress")
            return None

        self._calls += 1
        self._in_progress = True
        self._set_state(ResultState(data=None, loading=True, error=None))
        log_event(logger, "mutation.start", ctx, level=logging.DEBUG)
        try:
            result = await mutation_fn(*args, **kwargs)
            if self._mounted:
                self._set_state(ResultState(data=result, loading=False, error=None))
                log_event(logger, "mutation.success", ctx, level=logging.DEBUG)
                if self._on_success is not None:
                    self._on_success(result, *args, **kwargs)
                if self._on_settled is not None:
                    self._on_settled(result, None, *args, **kwargs)
            return result
        except Exception as exc:
            message = error_message(exc, MUTATION_ERROR_FALLBACK)
            log_event(
                logger,
                "mutation.error",
                ctx,
                level=logging.WARNING,
                error_code=classify_exception(exc).value,
                error=message,
            )
            if self._mounted:
                self._set_state(ResultState(data=None, loading=False, error=message))
                if self._on_error is not None:
                    self._on_error(exc, *args, **kwargs)
                if self._on_settled is not None:
                    self._on_settled(None, exc, *args, **kwargs)
            raise
        finally:
            self._in_progress = False

    execute = mutate

    def reset(self) -> None:
        """Clear the state; an in-flight call is left running."""
        self._set_state(ResultState())


__all__ = ["MutationUnit", "MutationFn"]
