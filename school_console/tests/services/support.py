"""Build an :class:`ApiClient` wired to an in-process ``httpx.MockTransport``."""
from __future__ import annotations

from typing import Any, Callable, List

import httpx

from school_console.config import ConsoleSettings
from school_console.services import ApiClient

BASE_URL = "http://testserver"


class Recorder:
    """Records requests and delegates to ``handler`` for the response."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        return self.handler(request)


def make_client(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> tuple[ApiClient, Recorder]:
    recorder = Recorder(handler)
    http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(recorder))
    return ApiClient(ConsoleSettings(api_base_url=BASE_URL), http_client=http, **kwargs), recorder
