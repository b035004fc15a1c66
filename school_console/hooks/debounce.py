"""Debounce utility for search-as-you-type inputs."""
from __future__ import annotations

import asyncio
from typing import Callable, Generic, List, Optional, TypeVar

from ..config import get_console_config

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Propagate a rapidly changing value only after ``delay`` seconds of quiet.

    Every :meth:`set` with a new value restarts the timer; intermediate values
    of a burst are never emitted. :meth:`close` cancels a pending timer so a
    torn-down consumer is never updated late. Timers live on the running event
    loop, so :meth:`set` must be called from within it.
    Without an explicit ``delay`` the configured ``debounce_seconds`` is used.
    """

    def __init__(self, value: T, delay: Optional[float] = None) -> None:
        if delay is None:
            delay = get_console_config().debounce_seconds
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._value = value
        self._pending = value
        self._delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._listeners: List[Callable[[T], None]] = []
        self._closed = False

    @property
    def value(self) -> T:
        """The debounced (settled) value."""
        return self._value

    @property
    def pending(self) -> T:
        """The most recent input, settled or not."""
        return self._pending

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Call ``listener(value)`` each time a settled value is emitted."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set(self, value: T) -> None:
        """Feed a new input value; unchanged input leaves the timer alone."""
        if self._closed or value == self._pending:
            return
        self._pending = value
        self._restart()

    def set_delay(self, delay: float) -> None:
        """Change the quiet period; restarts the timer like a value change."""
        if delay < 0:
            raise ValueError("delay must be >= 0")
        if self._closed or delay == self._delay:
            return
        self._delay = delay
        self._restart()

    def _restart(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = asyncio.get_running_loop().call_later(self._delay, self._emit)

    def _emit(self) -> None:
        self._handle = None
        if self._closed or self._pending == self._value:
            return
        self._value = self._pending
        for listener in list(self._listeners):
            listener(self._value)

    def close(self) -> None:
        self._closed = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


__all__ = ["Debouncer"]
