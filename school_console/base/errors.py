"""Unified error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``school_console.base.errors_parts``.
"""

from .errors_parts.api_error import ApiError
from .errors_parts.classification import classify_exception, code_for_status, error_message
from .errors_parts.error_code import ErrorCode

__all__ = ["ApiError", "ErrorCode", "classify_exception", "code_for_status", "error_message"]
