"""Cooperative cancellation token implementation.

One token is handed out per in-flight fetch. Superseding the fetch or tearing
down its unit cancels the token; operations poll it (or register a callback)
to abandon work early.
"""

from __future__ import annotations

import contextlib
from typing import Callable, List, Optional

from .cancelled_error import CancelledError
from .state import State


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Tokens live on a single event loop, so no locking is needed. Child tokens
    inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run callbacks once and cascade to children."""
        if self._state.cancelled:
            return
        self._state.cancelled = True
        self._state.reason = reason
        callbacks, self._state.callbacks = self._state.callbacks, []
        for callback in callbacks:
            # callbacks are isolated from one another
            with contextlib.suppress(Exception):
                callback(reason)
        for child in list(self._children):
            child.cancel(reason)

    def add_callback(self, callback: Callable[[Optional[str]], None]) -> None:
        """Register ``callback(reason)``; runs immediately if already cancelled."""
        if self._state.cancelled:
            callback(self._state.reason)
            return
        self._state.callbacks.append(callback)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        self._children.append(token)
        if self._state.cancelled:
            token.cancel(self._state.reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
