"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` plays the role an abort signal plays in a browser: the
fetch unit creates one per request and cancels it when the request is
superseded or its unit is closed. ``CancelledError`` is what an operation
raises once it notices; the units swallow it silently.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
