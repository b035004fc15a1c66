"""REST client: headers, query cleaning, status handling and cancellation."""
from __future__ import annotations

import json

import httpx
import pytest

from school_console.base.cancellation import CancellationToken, CancelledError
from school_console.base.errors import ApiError, ErrorCode
from school_console.config import ConsoleSettings
from school_console.services import ApiClient
from school_console.tests.helpers import run

from .support import make_client


def test_bearer_token_and_cleaned_query():
    async def scenario():
        client, rec = make_client(lambda r: httpx.Response(200, json={"data": []}), auth_token="t0k")
        result = await client.get(
            "/api/students",
            params={"class_id": 3, "search": "", "section_id": None, "is_active": True},
        )
        await client.aclose()
        return result, rec.requests[0]

    result, request = run(scenario())
    assert result == {"data": []}
    assert request.headers["Authorization"] == "Bearer t0k"
    assert request.headers["Content-Type"] == "application/json"
    assert dict(request.url.params) == {"class_id": "3", "is_active": "true"}


def test_post_sends_json_body_and_get_never_does():
    async def scenario():
        client, rec = make_client(lambda r: httpx.Response(201, json={"id": 9}))
        created = await client.post("/api/fee-payments/record", {"voucher_id": 4, "amount": 1500})
        await client.get("/api/students", body={"ignored": True})
        await client.aclose()
        return created, rec.requests

    created, requests = run(scenario())
    assert created == {"id": 9}
    assert json.loads(requests[0].content) == {"voucher_id": 4, "amount": 1500}
    assert requests[1].content == b""
    assert "Authorization" not in requests[0].headers


def test_unauthorized_clears_token_and_notifies():
    events = []

    async def scenario():
        client, _ = make_client(lambda r: httpx.Response(401, json={"message": "jwt expired"}), auth_token="old")
        client.set_auth_handlers(lambda: events.append("logout"), lambda: events.append("forbidden"))
        with pytest.raises(ApiError) as info:
            await client.get("/api/auth/profile")
        await client.aclose()
        return client, info.value

    client, err = run(scenario())
    assert err.code is ErrorCode.AUTH
    assert err.status == 401
    assert str(err) == "Unauthorized"
    assert client.auth_token is None
    assert events == ["logout"]


def test_unauthorized_on_public_call_keeps_token():
    async def scenario():
        client, _ = make_client(lambda r: httpx.Response(401), auth_token="keep")
        with pytest.raises(ApiError):
            await client.get("/health", requires_auth=False)
        await client.aclose()
        return client

    assert run(scenario()).auth_token == "keep"


def test_forbidden_notifies_and_raises():
    events = []

    async def scenario():
        client, _ = make_client(lambda r: httpx.Response(403))
        client.set_auth_handlers(None, lambda: events.append("forbidden"))
        with pytest.raises(ApiError) as info:
            await client.delete("/api/fee-vouchers/3")
        await client.aclose()
        return info.value

    err = run(scenario())
    assert err.code is ErrorCode.FORBIDDEN
    assert events == ["forbidden"]


@pytest.mark.parametrize(
    "response, message, code",
    [
        (httpx.Response(422, json={"message": "amount required"}), "amount required", ErrorCode.VALIDATION),
        (httpx.Response(409, json={"error": "voucher exists"}), "voucher exists", ErrorCode.CONFLICT),
        (httpx.Response(404, text="no such student"), "no such student", ErrorCode.NOT_FOUND),
        (httpx.Response(500), "Request failed with status 500", ErrorCode.SERVER_ERROR),
    ],
)
def test_error_message_extraction(response, message, code):
    async def scenario():
        client, _ = make_client(lambda r: response)
        with pytest.raises(ApiError) as info:
            await client.get("/api/students/1")
        await client.aclose()
        return info.value

    err = run(scenario())
    assert str(err) == message
    assert err.code is code
    assert err.endpoint == "/api/students/1"


def test_transport_failure_becomes_network_error(captured_events):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        client, _ = make_client(refuse)
        with pytest.raises(ApiError) as info:
            await client.get("/api/classes")
        await client.aclose()
        return info.value

    err = run(scenario())
    assert err.status == 0
    assert err.code is ErrorCode.NETWORK
    assert str(err) == "connection refused"
    assert any(e["event"] == "api.error" and e["error_code"] == "network" for e in captured_events)


def test_cancelled_token_short_circuits_before_sending():
    async def scenario():
        client, rec = make_client(lambda r: httpx.Response(200, json=[]))
        token = CancellationToken()
        token.cancel("superseded")
        with pytest.raises(CancelledError):
            await client.get("/api/students", token=token)
        await client.aclose()
        return rec

    assert run(scenario()).requests == []


def test_text_bytes_and_empty_responses():
    def handler(request):
        if request.url.path == "/health":
            return httpx.Response(200, text="ok")
        if request.url.path.endswith("/pdf"):
            return httpx.Response(200, content=b"%PDF-1.7")
        return httpx.Response(204)

    async def scenario():
        client, rec = make_client(handler)
        text = await client.get("/health", response_type="text")
        pdf = await client.get("/api/fee-vouchers/3/pdf", response_type="bytes")
        empty = await client.delete("/api/fee-vouchers/3")
        await client.aclose()
        return text, pdf, empty, rec.requests

    text, pdf, empty, requests = run(scenario())
    assert text == "ok"
    assert pdf == b"%PDF-1.7"
    assert empty is None
    assert "Content-Type" not in requests[1].headers


def test_closing_one_client_leaves_the_shared_pool_open():
    settings = ConsoleSettings(api_base_url="http://pooled.example.org")

    async def scenario():
        first, second = ApiClient(settings), ApiClient(settings)
        assert first.http is second.http
        await first.aclose()
        return second.http

    assert run(scenario()).is_closed is False


def test_closing_client_with_injected_transport_closes_it():
    async def scenario():
        client, _ = make_client(lambda r: httpx.Response(200, json={}))
        http = client.http
        await client.aclose()
        return http

    assert run(scenario()).is_closed is True
