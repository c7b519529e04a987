"""
Shared type definitions.

Core data structures used across modules.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from restbridge.core.errors import RequestValidationError


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"


DESCRIPTOR_FIELDS = ("method", "endpoint", "headers", "body", "host")

# RFC 9110 token for names; printable ASCII with inner spaces/tabs for values
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_HEADER_VALUE = re.compile(r"(?:[\x21-\x7e](?:[ \t]*[\x21-\x7e])*)?")


def header_problem(name: str, value: str) -> str | None:
    """
    Check that a header can be sent as is.

    Returns:
        Description of the problem, or None if the header is valid
    """
    if not _HEADER_NAME.fullmatch(name):
        return f"invalid header name {name!r}"
    if not _HEADER_VALUE.fullmatch(value):
        return (
            f"invalid value for header {name!r}: only printable ASCII is allowed, "
            "without line breaks or surrounding whitespace"
        )
    return None


def url_problem(url: str) -> str | None:
    """Check that a URL is http(s) with a host. Returns None if valid."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        return f"invalid URL {url!r}: {e}"
    if parsed.scheme not in ("http", "https"):
        return f"URL {url!r} must start with http:// or https://"
    if not parsed.host:
        return f"URL {url!r} has no host"
    return None


@dataclass(frozen=True)
class RequestDescriptor:
    """A validated inbound request, before any config is applied."""

    method: HttpMethod
    endpoint: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    host: str | None = None

    @classmethod
    def from_args(cls, args: Any) -> "RequestDescriptor":
        """
        Validate raw tool arguments into a descriptor.

        Raises:
            RequestValidationError: if any field is malformed
        """
        if not isinstance(args, Mapping):
            raise RequestValidationError("Request arguments must be an object")

        unknown = set(args) - set(DESCRIPTOR_FIELDS)
        if unknown:
            raise RequestValidationError(f"Unknown parameters: {', '.join(sorted(map(str, unknown)))}")

        raw_method = args.get("method")
        try:
            method = HttpMethod(raw_method)
        except ValueError:
            allowed = ", ".join(m.value for m in HttpMethod)
            raise RequestValidationError(
                f"Invalid method {raw_method!r}: must be one of {allowed}"
            ) from None

        endpoint = args.get("endpoint")
        if not isinstance(endpoint, str):
            raise RequestValidationError("endpoint must be a string")
        if "://" in endpoint:
            raise RequestValidationError(
                "endpoint must be a path relative to the base URL, not a full URL"
            )

        headers = args.get("headers")
        if headers is None:
            headers = {}
        elif not isinstance(headers, Mapping):
            raise RequestValidationError("headers must be an object of string values")
        else:
            for key, value in headers.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise RequestValidationError(
                        f"headers must map strings to strings (bad entry: {key!r})"
                    )
                problem = header_problem(key, value)
                if problem:
                    raise RequestValidationError(f"headers: {problem}")

        host = args.get("host")
        if host is not None:
            if not isinstance(host, str) or not host.startswith(("http://", "https://")):
                raise RequestValidationError("host must start with http:// or https://")
            problem = url_problem(host)
            if problem:
                raise RequestValidationError(f"host: {problem}")

        return cls(
            method=method,
            endpoint=endpoint,
            headers=dict(headers),
            body=args.get("body"),
            host=host,
        )


@dataclass
class ResponseDescriptor:
    """Response handed back to the caller, body already size-bounded."""

    status: int
    reason: str
    headers: dict[str, str]
    body: str
    truncated: bool = False
    original_size: int = 0
    elapsed_ms: int = 0

    @property
    def is_error(self) -> bool:
        """HTTP error status. Data for the caller, not an exception."""
        return self.status >= 400


@dataclass
class ActionResult:
    """Result of an executed action."""

    success: bool
    data: Any = None
    error: str | None = None
