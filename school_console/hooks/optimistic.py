"""Optimistic mutation unit: apply a local edit first, roll back on failure.

Used for quick toggles (activate/deactivate a student, mark a voucher paid)
where the list should change immediately. ``optimistic_update(*args)`` edits
local data and returns a snapshot of what it replaced; if the write fails,
``rollback(snapshot)`` restores it before the error is recorded and re-raised.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from ..base.errors import classify_exception, error_message
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import MUTATION_ERROR_FALLBACK
from .state import MutationStatus
from .unit import UNSET, StatefulUnit, operation_name

logger = get_logger(__name__)


class OptimisticMutationUnit(StatefulUnit[MutationStatus]):
    kind = "optimistic_mutation"

    def __init__(
        self,
        mutation_fn: Callable[..., Awaitable[Any]],
        *,
        optimistic_update: Optional[Callable[..., Any]] = None,
        rollback: Optional[Callable[[Any], None]] = None,
        on_success: Optional[Callable[..., None]] = None,
        on_error: Optional[Callable[..., None]] = None,
    ) -> None:
        super().__init__(MutationStatus())
        self._mutation_fn = mutation_fn
        self._optimistic_update = optimistic_update
        self._rollback = rollback
        self._on_success = on_success
        self._on_error = on_error
        self._in_progress = False

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def update(
        self,
        *,
        mutation_fn: Any = UNSET,
        optimistic_update: Any = UNSET,
        rollback: Any = UNSET,
        on_success: Any = UNSET,
        on_error: Any = UNSET,
    ) -> None:
        if mutation_fn is not UNSET:
            self._mutation_fn = mutation_fn
        if optimistic_update is not UNSET:
            self._optimistic_update = optimistic_update
        if rollback is not UNSET:
            self._rollback = rollback
        if on_success is not UNSET:
            self._on_success = on_success
        if on_error is not UNSET:
            self._on_error = on_error

    async def mutate(self, *args: Any, **kwargs: Any) -> Any:
        """Apply the optimistic edit, run the write, roll back if it fails.

        Duplicate calls while one is in flight return ``None`` silently.
        """
        if self._in_progress:
            return None
        self._in_progress = True
        mutation_fn = self._mutation_fn
        ctx = LogContext(unit=self.kind, operation=operation_name(mutation_fn))
        snapshot = None
        try:
            if self._optimistic_update is not None:
                snapshot = self._optimistic_update(*args, **kwargs)
            self._set_state(MutationStatus(loading=True, error=None))
            result = await mutation_fn(*args, **kwargs)
            if self._mounted:
                self._set_state(MutationStatus(loading=False, error=None))
                if self._on_success is not None:
                    self._on_success(result, *args, **kwargs)
            return result
        except Exception as exc:
            if self._rollback is not None and snapshot is not None:
                self._rollback(snapshot)
            message = error_message(exc, MUTATION_ERROR_FALLBACK)
            log_event(
                logger,
                "mutation.rolled_back" if snapshot is not None else "mutation.error",
                ctx,
                level=logging.WARNING,
                error_code=classify_exception(exc).value,
                error=message,
            )
            if self._mounted:
                self._set_state(MutationStatus(loading=False, error=message))
                if self._on_error is not None:
                    self._on_error(exc, *args, **kwargs)
            raise
        finally:
            self._in_progress = False

    execute = mutate


__all__ = ["OptimisticMutationUnit"]
