"""Pytest configuration for the console data-layer test suite.

Provides a fixture capturing structured log events from the shared
``school_console`` logger, and resets the pooled HTTP clients and timeout
cache between tests so environment overrides never leak.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Iterator, List

import pytest


class _EventCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        if isinstance(payload, dict):
            payload["_level"] = record.levelname
            self.events.append(payload)


@pytest.fixture()
def captured_events() -> Iterator[List[Dict[str, Any]]]:
    """Yield the list of JSON events logged while the test runs (DEBUG and up)."""
    from school_console.base.logging import BASE_LOGGER_NAME, get_logger

    logger = get_logger(BASE_LOGGER_NAME)
    previous_level = logger.level
    collector = _EventCollector()
    logger.addHandler(collector)
    logger.setLevel(logging.DEBUG)
    try:
        yield collector.events
    finally:
        logger.removeHandler(collector)
        logger.setLevel(previous_level)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear console env vars and drop pooled clients around every test."""
    for name in (
        "SCHOOL_CONSOLE_API_BASE_URL",
        "VITE_API_BASE_URL",
        "SCHOOL_CONSOLE_PAGE_SIZE",
        "SCHOOL_CONSOLE_DEBOUNCE_SECONDS",
        "SCHOOL_CONSOLE_CONFIG_FILE",
        "SCHOOL_CONSOLE_HTTP_TIMEOUT_SECONDS",
        "SCHOOL_CONSOLE_CONNECT_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    from school_console.base.http import close_all_clients

    asyncio.run(close_all_clients())
