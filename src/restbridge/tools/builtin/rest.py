"""The test_request tool: one HTTP request against the configured REST API."""

from typing import Any

from restbridge.core.config import Config
from restbridge.core.errors import NetworkError, RequestTimeoutError, RequestValidationError
from restbridge.core.logging import get_logger
from restbridge.core.types import ActionResult, HttpMethod, RiskLevel
from restbridge.core.typing import JSONDict
from restbridge.pipeline.auth import describe_auth
from restbridge.pipeline.headers import sanitize_headers
from restbridge.pipeline.service import RequestResult, RestPipeline
from restbridge.tools.base import Tool, ToolParameter
from restbridge.tools.registry import ToolRegistry

logger = get_logger("tools.rest")

TOOL_NAME = "test_request"


def build_description(config: Config) -> str:
    """Tool description with the live configuration baked in."""
    lines = [
        "Send an HTTP request to the configured REST API and return status, headers and body.",
        f"Base URL: {config.base_url}",
        f"Authentication: {describe_auth(config)}",
        f"SSL verification: {'enabled' if config.enable_ssl_verify else 'disabled'}",
        f"Response size limit: {config.response_size_limit} bytes (larger bodies are truncated)",
        f"Timeout: {config.timeout}ms",
    ]
    if config.custom_headers:
        lines.append(f"Custom headers sent with every request: {', '.join(config.custom_headers)}")
    lines.append("Pass only the endpoint path (e.g. /users), never a full URL.")
    return "\n".join(lines)


def format_result(result: RequestResult, config: Config) -> JSONDict:
    """Shape a pipeline result for the caller. Headers are the sanitized echo."""
    request, response = result.request, result.response

    messages: list[str] = []
    if response.is_error:
        messages.append(f"Request failed with status {response.status}")

    validation: JSONDict = {"is_error": response.is_error, "messages": messages}
    if response.truncated:
        returned_size = len(response.body.encode("utf-8"))
        messages.append(
            f"Response truncated: {returned_size} of {response.original_size} bytes returned "
            f"due to size limit ({config.response_size_limit} bytes)"
        )
        validation["truncated"] = {
            "original_size": response.original_size,
            "returned_size": returned_size,
            "size_limit": config.response_size_limit,
        }

    return {
        "request": {
            "url": request.url,
            "method": request.method.value,
            "headers": request.echo_headers,
            "body": request.body,
            "auth_method": request.auth_scheme.value,
        },
        "response": {
            "status_code": response.status,
            "status_text": response.reason,
            "timing": f"{response.elapsed_ms}ms",
            "headers": sanitize_headers(
                response.headers, api_key_header_name=config.api_key_header_name
            ),
            "body": response.body,
        },
        "validation": validation,
    }


def build_rest_tool(config: Config, pipeline: RestPipeline | None = None) -> Tool:
    """
    Build the test_request tool bound to a configuration.

    Args:
        config: Resolved configuration
        pipeline: Pipeline to use (defaults to a new RestPipeline over config)
    """
    pipeline = pipeline or RestPipeline(config)

    async def test_request(
        method: str,
        endpoint: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        host: str | None = None,
    ) -> ActionResult:
        args: JSONDict = {"method": method, "endpoint": endpoint}
        for key, value in (("body", body), ("headers", headers), ("host", host)):
            if value is not None:
                args[key] = value

        try:
            result = await pipeline.run(args)
        except RequestValidationError as e:
            return ActionResult(success=False, error=f"Invalid request: {e}", data={"error_type": "validation"})
        except RequestTimeoutError as e:
            return ActionResult(success=False, error=str(e), data={"error_type": "timeout"})
        except NetworkError as e:
            cause = e.__cause__
            return ActionResult(
                success=False,
                error=str(e),
                data={"error_type": "network", "cause": type(cause).__name__ if cause else None},
            )

        return ActionResult(success=True, data=format_result(result, config))

    return Tool(
        name=TOOL_NAME,
        description=build_description(config),
        parameters=[
            ToolParameter(
                "method",
                "string",
                "HTTP method",
                enum=[m.value for m in HttpMethod],
            ),
            ToolParameter("endpoint", "string", "Endpoint path joined onto the base URL, e.g. /users"),
            ToolParameter(
                "body",
                None,
                "Request body: objects and arrays are sent as JSON, strings as raw text",
                required=False,
            ),
            ToolParameter("headers", "object", "Extra request headers (string values)", required=False),
            ToolParameter(
                "host",
                "string",
                "Override the base URL for this request (http:// or https://)",
                required=False,
            ),
        ],
        executor=test_request,
        risk_level=RiskLevel.MEDIUM,
        examples=[
            'test_request(method="GET", endpoint="/users")',
            'test_request(method="POST", endpoint="/users", body={"name": "Ada"})',
        ],
    )


def register_rest_tools(config: Config, registry: ToolRegistry | None = None) -> ToolRegistry:
    """Register the REST tool, creating a registry if none is given."""
    registry = registry or ToolRegistry()
    registry.register(build_rest_tool(config))
    return registry
