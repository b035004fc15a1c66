"""Async REST client for the school backend.

Purpose
-------
Turn backend calls into awaitables the data units can run: JSON in, decoded
JSON out, any failure normalized to :class:`ApiError`.

External dependencies
---------------------
``httpx`` (pooled ``AsyncClient`` from ``school_console.base.http``).

Cancellation
------------
Each call accepts an optional :class:`CancellationToken`. The token is
checked before the request is sent and again once the response arrives; a
cancelled call raises :class:`CancelledError`, which the fetch unit swallows.
An HTTP exchange already on the wire is not interrupted.

Auth
----
When an auth token is set it is sent as ``Authorization: Bearer``. A 401 on
an authenticated call clears the token and fires ``on_unauthorized``; a 403
fires ``on_forbidden``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import ApiError, ErrorCode, code_for_status
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..config import ConsoleSettings, get_console_config
from ..config.defaults import NETWORK_ERROR_FALLBACK
from .endpoints import HttpStatus

logger = get_logger(__name__)

_BODYLESS_METHODS = frozenset(("GET", "HEAD"))


def _clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop ``None``/empty-string query values; render booleans as ``true``/``false``."""
    out: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        out[key] = str(value).lower() if isinstance(value, bool) else value
    return out


class ApiClient:
    """Thin async wrapper around the backend's JSON API."""

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        auth_token: Optional[str] = None,
    ) -> None:
        self.settings = settings or get_console_config()
        self.base_url = self.settings.api_base_url
        self._http = http_client
        self._owns_http = http_client is not None
        self.auth_token = auth_token
        self.on_unauthorized: Optional[Callable[[], None]] = None
        self.on_forbidden: Optional[Callable[[], None]] = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = get_httpx_client(self.base_url, "api")
        return self._http

    def set_auth_handlers(
        self,
        on_unauthorized: Optional[Callable[[], None]],
        on_forbidden: Optional[Callable[[], None]],
    ) -> None:
        self.on_unauthorized = on_unauthorized
        self.on_forbidden = on_forbidden

    def clear_auth(self) -> None:
        self.auth_token = None

    def _headers(self, extra: Optional[Mapping[str, str]], requires_auth: bool, response_type: str) -> Dict[str, str]:
        headers = dict(extra or {})
        if response_type != "bytes":
            headers.setdefault("Content-Type", "application/json")
        if requires_auth and self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        requires_auth: bool = True,
        token: Optional[CancellationToken] = None,
        response_type: str = "json",
    ) -> Any:
        """Perform one request and return the decoded body.

        ``response_type`` is ``"json"`` (default), ``"text"`` or ``"bytes"``.
        Raises :class:`ApiError` on non-2xx responses and transport failures,
        :class:`CancelledError` when ``token`` was cancelled.
        """
        method = method.upper()
        ctx = LogContext(unit="api", operation=f"{method} {endpoint}")
        if token is not None:
            token.raise_if_cancelled()

        send_body = body is not None and method not in _BODYLESS_METHODS
        try:
            response = await self.http.request(
                method,
                endpoint,
                params=_clean_params(params),
                headers=self._headers(headers, requires_auth, response_type),
                json=body if send_body else None,
            )
        except httpx.HTTPError as exc:
            log_event(logger, "api.error", ctx, level=logging.WARNING, error_code=ErrorCode.NETWORK.value, error=str(exc))
            raise ApiError(
                code=ErrorCode.NETWORK,
                message=str(exc) or NETWORK_ERROR_FALLBACK,
                status=0,
                endpoint=endpoint,
            ) from exc

        if token is not None:
            token.raise_if_cancelled()
        log_event(logger, "api.request", ctx, level=logging.DEBUG, status=response.status_code)
        return self._handle_response(response, endpoint, requires_auth, response_type, ctx)

    def _handle_response(
        self,
        response: httpx.Response,
        endpoint: str,
        requires_auth: bool,
        response_type: str,
        ctx: LogContext,
    ) -> Any:
        status = response.status_code
        if status == HttpStatus.UNAUTHORIZED:
            if requires_auth:
                self.clear_auth()
                if self.on_unauthorized is not None:
                    self.on_unauthorized()
            raise self._error(ErrorCode.AUTH, "Unauthorized", status, None, endpoint, ctx)
        if status == HttpStatus.FORBIDDEN:
            if self.on_forbidden is not None:
                self.on_forbidden()
            raise self._error(ErrorCode.FORBIDDEN, "Forbidden", status, None, endpoint, ctx)

        if response_type == "bytes":
            if response.is_success:
                return response.content
            raise self._error(
                code_for_status(status),
                response.text or f"Request failed with status {status}",
                status,
                None,
                endpoint,
                ctx,
            )

        data: Any = None
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type and response.content:
            try:
                data = response.json()
            except ValueError:
                data = response.text
        elif response_type == "text" or status not in (HttpStatus.OK, HttpStatus.CREATED):
            data = response.text or None

        if not response.is_success:
            message = None
            if isinstance(data, Mapping):
                message = data.get("message") or data.get("error")
            elif isinstance(data, str):
                message = data
            raise self._error(
                code_for_status(status),
                message or f"Request failed with status {status}",
                status,
                data,
                endpoint,
                ctx,
            )
        return data

    @staticmethod
    def _error(code: ErrorCode, message: str, status: int, data: Any, endpoint: str, ctx: LogContext) -> ApiError:
        log_event(logger, "api.error", ctx, level=logging.WARNING, error_code=code.value, status=status, error=message)
        return ApiError(code=code, message=str(message), status=status, data=data, endpoint=endpoint)

    async def get(self, endpoint: str, **options: Any) -> Any:
        return await self.request(endpoint, method="GET", **options)

    async def post(self, endpoint: str, body: Any = None, **options: Any) -> Any:
        return await self.request(endpoint, method="POST", body=body, **options)

    async def put(self, endpoint: str, body: Any = None, **options: Any) -> Any:
        return await self.request(endpoint, method="PUT", body=body, **options)

    async def delete(self, endpoint: str, **options: Any) -> Any:
        return await self.request(endpoint, method="DELETE", **options)

    async def aclose(self) -> None:
        """Close a client that was injected; pooled clients are closed centrally."""
        if self._owns_http and self._http is not None and not self._http.is_closed:
            await self._http.aclose()


__all__ = ["ApiClient"]
