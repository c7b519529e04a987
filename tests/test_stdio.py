"""Tests for the stdio JSON-lines bridge."""

import io
import json

import httpx
import pytest

from restbridge.interfaces.stdio import StdioBridge
from restbridge.pipeline.executor import RequestExecutor
from restbridge.pipeline.service import RestPipeline
from restbridge.tools.builtin.rest import build_rest_tool
from restbridge.tools.registry import ToolRegistry


@pytest.fixture
def bridge(make_config):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=f"{request.method} {request.url.path}")

    config = make_config()
    registry = ToolRegistry()
    pipeline = RestPipeline(config, RequestExecutor(transport=httpx.MockTransport(handler)))
    registry.register(build_rest_tool(config, pipeline))
    return StdioBridge(registry)


@pytest.mark.asyncio
async def test_tool_call_line(bridge):
    line = json.dumps({"id": 7, "tool": "test_request", "args": {"method": "GET", "endpoint": "/users"}})
    response = await bridge.handle_line(line)

    assert response["id"] == 7
    assert response["success"] is True
    assert response["data"]["response"]["body"] == "GET /users"


@pytest.mark.asyncio
async def test_list_tools(bridge):
    openai = await bridge.handle_line('{"op": "list_tools"}')
    anthropic = await bridge.handle_line('{"op": "list_tools", "format": "anthropic"}')

    assert openai["data"]["tools"][0]["function"]["name"] == "test_request"
    assert anthropic["data"]["tools"][0]["name"] == "test_request"


@pytest.mark.asyncio
async def test_unknown_list_format(bridge):
    response = await bridge.handle_line('{"id": 1, "op": "list_tools", "format": "xml"}')
    assert response == {"id": 1, "success": False, "data": None, "error": "Unknown format: xml"}


@pytest.mark.asyncio
async def test_malformed_lines(bridge):
    invalid = await bridge.handle_line("{not json")
    not_a_call = await bridge.handle_line('{"id": 3, "hello": "world"}')

    assert invalid["success"] is False
    assert invalid["error"].startswith("Invalid JSON")
    assert not_a_call["id"] == 3
    assert not_a_call["success"] is False


@pytest.mark.asyncio
async def test_validation_failure_reported(bridge):
    line = json.dumps({"tool": "test_request", "args": {"method": "INVALID", "endpoint": "/users"}})
    response = await bridge.handle_line(line)

    assert response["success"] is False
    assert response["data"] == {"error_type": "validation"}


@pytest.mark.asyncio
async def test_run_until_eof(bridge):
    lines = [
        json.dumps({"id": 1, "tool": "test_request", "args": {"method": "GET", "endpoint": "/a"}}),
        "",
        "garbage",
        json.dumps({"id": 2, "tool": "test_request", "args": {"method": "DELETE", "endpoint": "/b"}}),
    ]
    reader = io.StringIO("\n".join(lines) + "\n")
    writer = io.StringIO()

    await bridge.run(reader, writer)

    responses = [json.loads(line) for line in writer.getvalue().splitlines()]
    assert len(responses) == 3
    by_id = {r["id"]: r for r in responses}
    assert by_id[1]["data"]["response"]["body"] == "GET /a"
    assert by_id[2]["data"]["response"]["body"] == "DELETE /b"
    assert by_id[None]["success"] is False
