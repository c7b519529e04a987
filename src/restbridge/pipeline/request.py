"""Turn a validated descriptor into a concrete outbound request."""

from dataclasses import dataclass
from typing import Any

from restbridge.core.config import Config, normalize_base_url
from restbridge.core.types import HttpMethod, RequestDescriptor
from restbridge.pipeline.auth import AuthScheme, active_auth_scheme, resolve_auth_headers
from restbridge.pipeline.headers import merge_headers, sanitize_headers


@dataclass(frozen=True)
class PreparedRequest:
    """Fully resolved request: what goes on the wire plus its safe echo."""

    method: HttpMethod
    url: str
    headers: dict[str, str]
    echo_headers: dict[str, str]
    body: Any = None
    auth_scheme: AuthScheme = AuthScheme.NONE


def resolve_url(descriptor: RequestDescriptor, config: Config) -> str:
    """Join the endpoint onto the host override or the configured base URL."""
    base = normalize_base_url(descriptor.host or config.base_url)
    endpoint = descriptor.endpoint
    if not endpoint.startswith("/"):
        endpoint = f"/{endpoint}"
    return f"{base}{endpoint}"


def prepare_request(descriptor: RequestDescriptor, config: Config) -> PreparedRequest:
    """
    Merge caller, custom and auth headers and build the echo copy.

    Precedence on conflicting names: auth > custom > caller.
    """
    auth_headers = resolve_auth_headers(config)
    headers = merge_headers(descriptor.headers, config.custom_headers, auth_headers)

    echo_headers = merge_headers(
        sanitize_headers(descriptor.headers, is_from_optional_source=True),
        sanitize_headers(config.custom_headers, is_from_optional_source=True),
        sanitize_headers(
            auth_headers,
            is_from_optional_source=False,
            api_key_header_name=config.api_key_header_name,
        ),
    )

    return PreparedRequest(
        method=descriptor.method,
        url=resolve_url(descriptor, config),
        headers=headers,
        echo_headers=echo_headers,
        body=descriptor.body,
        auth_scheme=active_auth_scheme(config),
    )
