"""
Credential injection.

Exactly one authentication scheme is applied per request. When several are
configured, AUTH_PRECEDENCE decides: basic, then bearer, then API key.
Partially configured schemes are skipped.
"""

import base64
from collections.abc import Callable
from enum import Enum

from restbridge.core.config import Config, has_api_key_auth, has_basic_auth, has_bearer_auth


class AuthScheme(Enum):
    BASIC = "basic"
    BEARER = "bearer"
    API_KEY = "api_key"
    NONE = "none"


AUTH_PRECEDENCE: tuple[AuthScheme, ...] = (AuthScheme.BASIC, AuthScheme.BEARER, AuthScheme.API_KEY)

_SCHEME_CHECKS: dict[AuthScheme, Callable[[Config], bool]] = {
    AuthScheme.BASIC: has_basic_auth,
    AuthScheme.BEARER: has_bearer_auth,
    AuthScheme.API_KEY: has_api_key_auth,
}


def active_auth_scheme(config: Config) -> AuthScheme:
    """Return the first fully configured scheme in precedence order."""
    for scheme in AUTH_PRECEDENCE:
        if _SCHEME_CHECKS[scheme](config):
            return scheme
    return AuthScheme.NONE


def resolve_auth_headers(config: Config) -> dict[str, str]:
    """
    Build the headers for the active scheme.

    Args:
        config: Resolved configuration

    Returns:
        Header mapping, empty when no scheme is fully configured
    """
    scheme = active_auth_scheme(config)

    if scheme is AuthScheme.BASIC:
        raw = f"{config.basic_username}:{config.basic_password}".encode()
        return {"Authorization": f"Basic {base64.b64encode(raw).decode('ascii')}"}

    if scheme is AuthScheme.BEARER:
        return {"Authorization": f"Bearer {config.bearer_token}"}

    name, value = config.api_key_header_name, config.api_key_value
    if scheme is AuthScheme.API_KEY and name and value:
        return {name: value}

    return {}


def describe_auth(config: Config) -> str:
    """Human-readable description of the active scheme. Never includes secrets."""
    scheme = active_auth_scheme(config)
    if scheme is AuthScheme.BASIC:
        return f"Basic Auth with username: {config.basic_username}"
    if scheme is AuthScheme.BEARER:
        return "Bearer token authentication configured"
    if scheme is AuthScheme.API_KEY:
        return f"API Key using header: {config.api_key_header_name}"
    return "No authentication configured"
