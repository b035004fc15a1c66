"""Lifecycle plumbing shared by every data unit.

A unit is the Python counterpart of a UI hook instance: it owns its state,
a mount flag and the tasks it scheduled on the running event loop. Views
observe it through :meth:`StatefulUnit.subscribe`; every state change goes
through :meth:`StatefulUnit._set_state`, which becomes a no-op once the unit
is closed.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Generic, List, Optional, Set, TypeVar

S = TypeVar("S")

Listener = Callable[[Any], None]


class _Unset:
    """Marker for "argument not supplied" in ``update`` signatures."""

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return "UNSET"


UNSET: Any = _Unset()


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


def operation_name(fn: Any) -> str:
    """Best-effort readable name of an operation for log context."""
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or type(fn).__name__


class StatefulUnit(Generic[S]):
    """Base class: state holder with mount flag, listeners and owned tasks."""

    kind = "unit"

    def __init__(self, initial_state: S) -> None:
        self._state: S = initial_state
        self._listeners: List[Listener] = []
        self._mounted = True
        self._tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> S:
        return self._state

    @property
    def mounted(self) -> bool:
        """False once :meth:`close` ran; the flag never flips back."""
        return self._mounted

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(state)`` after every applied state change.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, new_state: S) -> bool:
        """Apply ``new_state`` and notify listeners; refused after close."""
        if not self._mounted:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return True

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        """Schedule ``coro`` on the running loop and track it until done."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending_tasks(self) -> List[asyncio.Task]:
        return [t for t in self._tasks if not t.done()]

    def close(self) -> None:
        """Tear down: refuse further state writes and cancel owned tasks."""
        if not self._mounted:
            return
        self._mounted = False
        current = _current_task()
        for task in list(self._tasks):
            if task is not current:
                task.cancel()

    async def __aenter__(self):
        mount: Optional[Callable[[], Any]] = getattr(self, "mount", None)
        if mount is not None:
            mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["StatefulUnit", "Listener", "UNSET", "operation_name"]
