import asyncio
import base64
import json

import httpx
import pytest

from intercom_client import ApiError, TransportError
from intercom_client.adapters.pipeline import build_request, error_from_body, resolve_url
from intercom_client.adapters.query import encode_query
from intercom_client.core.config import resolve_config

from conftest import ENDPOINT


def _run(client, method, path, params=None):
    async def _go():
        return await client.request(method, path, params)

    return asyncio.run(_go())


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_read_verbs_use_query_string(make_client, method):
    client, recorder = make_client(httpx.Response(200, json={"ok": True}))
    _run(client, method, "users", {"email": "ray@example.com", "page": 2})

    request = recorder.requests[0]
    assert request.method == method
    assert request.url.params["email"] == "ray@example.com"
    assert request.url.params["page"] == "2"
    assert request.content == b""
    assert "content-type" not in request.headers


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
def test_write_verbs_use_json_body(make_client, method):
    params = {"email": "ray@example.com", "custom_attributes": {"plan": "pro"}}
    client, recorder = make_client(httpx.Response(200, json={"id": "1"}))
    _run(client, method, "users", params)

    request = recorder.requests[0]
    assert request.method == method
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == params
    assert request.url.query == b""


def test_basic_auth_and_accept_header(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    _run(client, "GET", "users")

    request = recorder.requests[0]
    expected = base64.b64encode(b"app-id:secret-key").decode()
    assert request.headers["authorization"] == f"Basic {expected}"
    assert request.headers["accept"] == "application/json"


def test_empty_secret_sends_empty_password():
    config = resolve_config("app-only")
    descriptor = build_request(config, "get", "users")
    assert descriptor.auth == ("app-only", "")
    assert descriptor.method == "GET"


def test_timeout_comes_from_config(make_client):
    client, recorder = make_client(httpx.Response(200, json={}), options={"timeout": 1500})
    _run(client, "GET", "users")
    assert recorder.requests[0].extensions["timeout"]["read"] == 1.5


def test_resolve_url():
    assert resolve_url(ENDPOINT, "users") == ENDPOINT + "users"
    assert resolve_url(ENDPOINT, "/users") == ENDPOINT + "users"
    full = ENDPOINT + "companies?page=2"
    assert resolve_url(ENDPOINT, full) == full


def test_nested_query_encoding():
    pairs = encode_query({"user": {"email": "a@b.c"}, "ids": [1, 2], "flag": True, "empty": None})
    assert pairs == [
        ("user[email]", "a@b.c"),
        ("ids[0]", "1"),
        ("ids[1]", "2"),
        ("flag", "true"),
        ("empty", ""),
    ]


def test_errors_body_rejects_with_joined_codes(make_client):
    body = {"errors": [{"code": "rate_limited"}, {"code": "unauthorized"}]}
    client, _ = make_client(httpx.Response(429, json=body))

    with pytest.raises(ApiError) as info:
        _run(client, "GET", "users")

    assert info.value.message == '"rate_limited", "unauthorized" error(s) from Intercom'
    assert str(info.value) == info.value.message
    assert len(info.value.errors) == 2
    assert info.value.status_code == 429


def test_single_error_object_and_string():
    err = error_from_body({"error": {"type": "not_found"}})
    assert err is not None
    assert err.message == '"not_found" error(s) from Intercom'
    assert err.errors == [{"type": "not_found"}]

    err = error_from_body({"error": "boom"})
    assert err is not None and err.message == '"boom" error(s) from Intercom'

    err = error_from_body({"errors": []})
    assert err is not None and err.errors == []
    err = error_from_body({"error": {}})
    assert err is not None and err.errors == [{}]
    assert error_from_body({"error": None, "errors": None}) is None
    assert error_from_body({"type": "user"}) is None
    assert error_from_body(["errors"]) is None


@pytest.mark.parametrize("text", ["", "OK", "<html>"])
def test_non_json_body_passes_through(make_client, text):
    client, _ = make_client(httpx.Response(204 if not text else 200, text=text))
    envelope = _run(client, "DELETE", "users", {"email": "a@b.c"})
    assert envelope.body == text
    assert envelope.is_json is False


def test_rate_limit_headers_copied_to_meta(make_client):
    headers = {"x-ratelimit-limit": "500", "x-ratelimit-remaining": "42", "x-ratelimit-reset": "1700000000"}
    client, _ = make_client(httpx.Response(200, json={"type": "user.list"}, headers=headers))
    envelope = _run(client, "GET", "users")

    assert envelope.meta.ratelimit_limit == 500
    assert envelope.meta.ratelimit_remaining == 42
    assert envelope.meta.ratelimit_reset == 1700000000
    assert envelope["type"] == "user.list"
    assert envelope.get("missing", "x") == "x"


def test_missing_rate_limit_headers_default_to_none(make_client):
    client, _ = make_client(httpx.Response(200, json={}))
    envelope = _run(client, "GET", "users")
    assert envelope.meta.ratelimit_remaining is None
    assert envelope.meta.ratelimit_limit is None


def test_http_status_alone_does_not_fail(make_client):
    client, _ = make_client(httpx.Response(404, json={"type": "not_found_page"}))
    envelope = _run(client, "GET", "users/999")
    assert envelope.status_code == 404
    assert envelope["type"] == "not_found_page"


def test_connection_error_becomes_transport_error(make_client):
    def _boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(_boom)
    with pytest.raises(TransportError) as info:
        _run(client, "GET", "users")
    assert isinstance(info.value.cause, httpx.ConnectError)
    assert isinstance(info.value.__cause__, httpx.ConnectError)


def test_timeout_becomes_transport_error(make_client):
    def _slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client, _ = make_client(_slow, options={"timeout": 250})
    with pytest.raises(TransportError) as info:
        _run(client, "GET", "users")
    assert "timed out after 250ms" in info.value.message


def test_empty_errors_list_still_rejects(make_client):
    client, _ = make_client(httpx.Response(400, json={"type": "error.list", "errors": []}))
    with pytest.raises(ApiError) as info:
        _run(client, "GET", "users")
    assert info.value.message == '"" error(s) from Intercom'


def test_query_already_in_path_is_kept(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    _run(client, "GET", "users?email=ray@example.com", {"page": 2})

    params = recorder.requests[0].url.params
    assert params["email"] == "ray@example.com"
    assert params["page"] == "2"


def test_query_in_absolute_url_survives_empty_params(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    _run(client, "GET", ENDPOINT + "companies?page=2")
    assert recorder.requests[0].url.params["page"] == "2"


def test_decoding_error_becomes_transport_error(make_client):
    broken = httpx.Response(200, content=b"not-gzip", headers={"content-encoding": "gzip"})
    client, _ = make_client(broken)
    with pytest.raises(TransportError) as info:
        _run(client, "GET", "users")
    assert isinstance(info.value.cause, httpx.DecodingError)


def test_invalid_url_becomes_transport_error(make_client):
    client, recorder = make_client(httpx.Response(200, json={}))
    with pytest.raises(TransportError) as info:
        _run(client, "GET", "users\x00")
    assert isinstance(info.value.cause, httpx.InvalidURL)
    assert recorder.requests == []


def test_callback_receives_transport_error(make_client):
    def _boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(_boom)
    seen = []

    async def _go():
        task = client.request("GET", "users", callback=lambda err, res: seen.append((err, res)))
        with pytest.raises(TransportError) as info:
            await task
        await asyncio.sleep(0)
        return info.value

    error = asyncio.run(_go())
    assert seen == [(error, None)]
