"""Cancellation error type.

Raised by read/write operations that observe a cancelled token. The data
units treat it as the "request was superseded" signal and never surface it
as a user-visible error.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from ``asyncio.CancelledError``: this one means "a newer request
    (or a teardown) made this result irrelevant", not "the task was killed".
    """


__all__ = ["CancelledError"]
