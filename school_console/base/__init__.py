"""
Console Base Package

Cross-cutting building blocks shared by the data units and the services:
cooperative cancellation, the error taxonomy, structured logging, timeout
configuration and the pooled HTTP client.
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ApiError, ErrorCode, classify_exception, error_message
from .logging import LogContext, configure_logger, get_logger, log_event
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Errors
    "ApiError",
    "ErrorCode",
    "classify_exception",
    "error_message",
    # Logging
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
