"""
Normalized error codes (taxonomy).

Values are lowercase snake_case and appear verbatim in structured log events
(``error_code`` field), so treat them as a stable contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    NETWORK = "network"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
