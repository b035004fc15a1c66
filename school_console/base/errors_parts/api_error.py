"""
Structured API error exception type.

Raised by the REST client for any non-2xx response or transport failure.
``str(exc)`` is the human-readable message so the data units can store it
directly in their ``error`` field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass
class ApiError(Exception):
    """Represents a failed backend call with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message (server ``message`` field when present).
        status: HTTP status code, ``0`` for network-level failures.
        data: Decoded response body, if any.
        endpoint: Endpoint path the request targeted.
    """

    code: ErrorCode
    message: str
    status: int = 0
    data: Optional[Any] = None
    endpoint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


__all__ = ["ApiError"]
