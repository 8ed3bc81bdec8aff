"""Tests for the Workers KV store client."""
from __future__ import annotations

import json

import httpx
import pytest

from vip_vanity.config import get_settings
from vip_vanity.store import ClaimError, KVStoreClient, TransientError


def _client(handler, token: str = "secret") -> KVStoreClient:
    transport = httpx.MockTransport(handler)
    return KVStoreClient(get_settings(), token, client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_resolve_owner_unclaimed_on_404():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(404, json={"success": False, "errors": [{"code": 10009}]})

    store = _client(handler)
    assert await store.resolve_owner("abc123") is None
    assert seen[0].method == "GET"
    assert str(seen[0].url) == get_settings().metadata_url + "abc123"
    assert seen[0].headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_resolve_owner_decodes_string_id():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": {"id": "999"}, "success": True})

    store = _client(handler)
    assert await store.resolve_owner("taken1") == 999


@pytest.mark.asyncio
async def test_resolve_owner_accepts_numeric_id():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": {"id": 123456789012345678}})

    store = _client(handler)
    assert await store.resolve_owner("taken1") == 123456789012345678


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"result": None},
        {"result": {}},
        {"result": {"id": "not-a-number"}},
        {"result": {"id": True}},
        {"result": {"id": "-5"}},
        ["unexpected"],
    ],
)
async def test_resolve_owner_bad_body_is_transient(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    store = _client(handler)
    with pytest.raises(TransientError):
        await store.resolve_owner("abc123")


@pytest.mark.asyncio
async def test_resolve_owner_non_json_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    store = _client(handler)
    with pytest.raises(TransientError):
        await store.resolve_owner("abc123")


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 401, 403, 429, 500, 503])
async def test_resolve_owner_unexpected_status_is_transient(status):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status)

    store = _client(handler)
    with pytest.raises(TransientError) as excinfo:
        await store.resolve_owner("abc123")
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_resolve_owner_transport_error_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = _client(handler)
    with pytest.raises(TransientError):
        await store.resolve_owner("abc123")


@pytest.mark.asyncio
async def test_write_claim_sends_multipart_value_and_metadata():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    store = _client(handler, token="Bearer already-prefixed")
    await store.write_claim("abc123", "deadbeef", 123456789)

    request = seen[0]
    assert request.method == "PUT"
    assert str(request.url) == get_settings().values_url + "abc123"
    assert request.headers["Authorization"] == "Bearer already-prefixed"
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    body = request.content
    assert b'name="value"\r\n\r\ndeadbeef\r\n' in body
    assert b'name="metadata"\r\n\r\n{"id":"123456789"}\r\n' in body
    metadata = body.split(b'name="metadata"\r\n\r\n', 1)[1].split(b"\r\n", 1)[0]
    assert json.loads(metadata) == {"id": "123456789"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [201, 400, 403, 500])
async def test_write_claim_non_ok_raises(status):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status)

    store = _client(handler)
    with pytest.raises(ClaimError) as excinfo:
        await store.write_claim("abc123", "deadbeef", 1)
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_write_claim_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    store = _client(handler)
    with pytest.raises(ClaimError):
        await store.write_claim("abc123", "deadbeef", 1)


@pytest.mark.asyncio
async def test_aclose_closes_underlying_client():
    inner = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    store = KVStoreClient(get_settings(), "secret", client=inner)
    await store.aclose()
    assert inner.is_closed
