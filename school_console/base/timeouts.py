"""Timeout configuration for outbound HTTP calls.

The data units themselves carry no timeout policy: a hung operation keeps
``loading`` true until it is superseded or its unit is closed. The only
timeout in the stack is the transport-level one applied by the pooled
``httpx.AsyncClient``.

Environment (optional):
    SCHOOL_CONSOLE_HTTP_TIMEOUT_SECONDS     per-request timeout
    SCHOOL_CONSOLE_CONNECT_TIMEOUT_SECONDS  connect-phase timeout
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import DEFAULT_CONNECT_TIMEOUT_SECONDS, DEFAULT_HTTP_TIMEOUT_SECONDS

HTTP_TIMEOUT_ENV = "SCHOOL_CONSOLE_HTTP_TIMEOUT_SECONDS"
CONNECT_TIMEOUT_ENV = "SCHOOL_CONSOLE_CONNECT_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds)."""

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is rebuilt whenever the relevant environment variables change,
    which keeps ``monkeypatch.setenv`` usable in tests.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join((os.getenv(HTTP_TIMEOUT_ENV, ""), os.getenv(CONNECT_TIMEOUT_ENV, "")))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float(HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV, DEFAULT_CONNECT_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
