"""Shared async HTTP client pool.

Purpose:
    Hand out reusable ``httpx.AsyncClient`` instances keyed by base URL and a
    short purpose string, so every service talking to the backend shares one
    connection pool instead of opening a client per call.

Timeout strategy:
    Timeouts come from :func:`get_timeout_config` at client creation time.

Lifecycle & cleanup:
    Async clients cannot be closed from an ``atexit`` hook, so owners call
    :func:`close_all_clients` (awaitable) during application shutdown or test
    teardown.
"""

from __future__ import annotations

import contextlib
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.AsyncClient] = {}


def get_httpx_client(
    base_url: Optional[str],
    purpose: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Parameters:
        base_url: Backend base URL; relative endpoint paths resolve against it.
        purpose: Discriminates separate pools (e.g. ``"api"``, ``"health"``).
        transport: Optional transport override. A client built with a custom
            transport is never pooled (used by tests with ``httpx.MockTransport``).

    Returns:
        A reusable ``httpx.AsyncClient``.
    """
    cfg = get_timeout_config()
    timeout = httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)
    if transport is not None:
        return httpx.AsyncClient(base_url=base_url or "", timeout=timeout, transport=transport)

    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client
    client = httpx.AsyncClient(base_url=base_url or "", timeout=timeout)
    _CLIENTS[key] = client
    return client


async def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    clients = list(_CLIENTS.values())
    _CLIENTS.clear()
    for c in clients:
        # best-effort teardown
        with contextlib.suppress(httpx.HTTPError, RuntimeError):
            await c.aclose()


__all__ = ["get_httpx_client", "close_all_clients"]
