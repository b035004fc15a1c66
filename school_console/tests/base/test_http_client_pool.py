"""Unit tests for the shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- A custom transport bypasses the pool.
- Timeouts come from the timeout config.
"""
from __future__ import annotations

import asyncio

import httpx

from school_console.base.http import close_all_clients, get_httpx_client


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("http://localhost:3000", purpose="api")
    c2 = get_httpx_client("http://localhost:3000", purpose="api")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_or_base_url_returns_different_instances():
    c1 = get_httpx_client("http://localhost:3000", purpose="api")
    c2 = get_httpx_client("http://localhost:3000", purpose="health")
    c3 = get_httpx_client("https://school.example.org", purpose="api")
    assert c1 is not c2 and c1 is not c3  # nosec B101


def test_custom_transport_is_never_pooled():
    transport = httpx.MockTransport(lambda request: httpx.Response(200))
    c1 = get_httpx_client("http://testserver", purpose="api", transport=transport)
    c2 = get_httpx_client("http://testserver", purpose="api", transport=transport)
    assert c1 is not c2  # nosec B101
    asyncio.run(c1.aclose())
    asyncio.run(c2.aclose())


def test_timeout_is_taken_from_env(monkeypatch):
    monkeypatch.setenv("SCHOOL_CONSOLE_HTTP_TIMEOUT_SECONDS", "7")
    client = get_httpx_client("http://localhost:3000", purpose="timeouts")
    assert client.timeout.read == 7  # nosec B101


def test_close_all_clients_replaces_closed_instances():
    c1 = get_httpx_client("http://localhost:3000", purpose="api")
    asyncio.run(close_all_clients())
    assert c1.is_closed  # nosec B101
    assert get_httpx_client("http://localhost:3000", purpose="api") is not c1  # nosec B101
