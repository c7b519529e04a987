"""Tests for the request executor."""

import asyncio
import json

import httpx
import pytest

from restbridge.core.errors import NetworkError, RequestTimeoutError, RequestValidationError
from restbridge.core.types import RequestDescriptor
from restbridge.pipeline.executor import RequestExecutor
from restbridge.pipeline.request import prepare_request


def _prepared(config, **args):
    descriptor = RequestDescriptor.from_args({"method": "GET", "endpoint": "/users", **args})
    return prepare_request(descriptor, config)


@pytest.mark.asyncio
async def test_sends_method_url_and_headers(make_config):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True}, headers={"X-Request-Id": "r1"})

    config = make_config(bearer_token="token123", custom_headers={"X-Tenant": "acme"})
    executor = RequestExecutor(transport=httpx.MockTransport(handler))
    response = await executor.execute(_prepared(config, method="DELETE"), config)

    assert len(seen) == 1
    assert seen[0].method == "DELETE"
    assert str(seen[0].url) == "http://localhost:3000/users"
    assert seen[0].headers["Authorization"] == "Bearer token123"
    assert seen[0].headers["X-Tenant"] == "acme"

    assert response.status == 200
    assert response.reason == "OK"
    assert response.headers["x-request-id"] == "r1"
    assert json.loads(response.body) == {"ok": True}
    assert response.truncated is False


@pytest.mark.asyncio
async def test_object_body_sent_as_json(make_config):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201)

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))
    await executor.execute(_prepared(config, method="POST", body={"name": "Ada"}), config)

    assert seen[0].headers["Content-Type"] == "application/json"
    assert json.loads(seen[0].content) == {"name": "Ada"}


@pytest.mark.asyncio
async def test_string_body_sent_raw(make_config):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))
    await executor.execute(
        _prepared(config, method="PUT", body="a=1&b=2", headers={"Content-Type": "text/plain"}),
        config,
    )

    assert seen[0].content == b"a=1&b=2"
    assert seen[0].headers["Content-Type"] == "text/plain"


@pytest.mark.asyncio
async def test_error_status_returned_as_data(make_config):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not here")

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))
    response = await executor.execute(_prepared(config), config)

    assert response.status == 404
    assert response.is_error is True
    assert response.body == "not here"


@pytest.mark.asyncio
async def test_redirect_not_followed(make_config):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "http://elsewhere/"})

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))
    response = await executor.execute(_prepared(config), config)

    assert response.status == 302


@pytest.mark.asyncio
async def test_connection_failure_raises_network_error(make_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))

    with pytest.raises(NetworkError) as exc_info:
        await executor.execute(_prepared(config), config)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert "Connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_slow_response_raises_timeout(make_config):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200)

    config = make_config(timeout=50)
    executor = RequestExecutor(transport=httpx.MockTransport(handler))

    with pytest.raises(RequestTimeoutError) as exc_info:
        await executor.execute(_prepared(config), config)

    assert exc_info.value.timeout_ms == 50
    assert "50ms" in str(exc_info.value)


@pytest.mark.asyncio
async def test_transport_timeout_raises_timeout(make_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))

    with pytest.raises(RequestTimeoutError):
        await executor.execute(_prepared(config), config)


@pytest.mark.asyncio
async def test_local_protocol_error_is_validation_error(make_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.LocalProtocolError("Illegal header name b'Bad Name'", request=request)

    config = make_config()
    executor = RequestExecutor(transport=httpx.MockTransport(handler))

    with pytest.raises(RequestValidationError, match="Malformed request") as exc_info:
        await executor.execute(_prepared(config), config)

    assert isinstance(exc_info.value.__cause__, httpx.LocalProtocolError)
