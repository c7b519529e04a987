"""
Error taxonomy.

Configuration errors are fatal at startup. The others are per-call and
reported back to the caller without affecting other calls.
"""


class BridgeError(Exception):
    """Base class for all restbridge errors."""


class ConfigurationError(BridgeError):
    """Missing or invalid environment value."""


class RequestValidationError(BridgeError):
    """Malformed inbound request descriptor. The call is not attempted."""


class NetworkError(BridgeError):
    """DNS, connection or TLS failure. The original error is kept as __cause__."""


class RequestTimeoutError(BridgeError):
    """The request exceeded the configured timeout and was abandoned."""

    def __init__(self, timeout_ms: int, url: str):
        self.timeout_ms = timeout_ms
        self.url = url
        super().__init__(f"Request to {url} timed out after {timeout_ms}ms")
