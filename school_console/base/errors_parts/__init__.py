"""Errors parts package public surface.

Prefer importing from ``school_console.base.errors`` for the stable surface.
"""

from .api_error import ApiError
from .classification import classify_exception, code_for_status, error_message
from .error_code import ErrorCode

__all__ = ["ApiError", "ErrorCode", "classify_exception", "code_for_status", "error_message"]
