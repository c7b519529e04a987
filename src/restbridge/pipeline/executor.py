"""Perform the single outbound HTTP call for a prepared request."""

import asyncio
import time
from typing import Any

import httpx

from restbridge.core.config import Config
from restbridge.core.errors import NetworkError, RequestTimeoutError, RequestValidationError
from restbridge.core.logging import get_logger
from restbridge.core.types import ResponseDescriptor
from restbridge.pipeline.request import PreparedRequest

logger = get_logger("pipeline.executor")


def _body_kwargs(body: Any) -> dict[str, Any]:
    """Raw content for str/bytes, JSON for everything else."""
    if body is None:
        return {}
    if isinstance(body, (str, bytes)):
        return {"content": body}
    return {"json": body}


class RequestExecutor:
    """Executes one request per call. No retries, no shared client."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """
        Initialize executor.

        Args:
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._transport = transport

    async def execute(self, prepared: PreparedRequest, config: Config) -> ResponseDescriptor:
        """
        Send the request and read the full response.

        Non-2xx statuses are returned as data.

        Raises:
            RequestTimeoutError: if the call exceeds config.timeout
            NetworkError: on connection, DNS or TLS failure
            RequestValidationError: if the resolved URL or the request itself is malformed
        """
        started = time.monotonic()
        async with httpx.AsyncClient(
            verify=config.enable_ssl_verify,
            timeout=httpx.Timeout(config.timeout_seconds),
            follow_redirects=False,
            transport=self._transport,
        ) as client:
            try:
                response = await asyncio.wait_for(
                    client.request(
                        prepared.method.value,
                        prepared.url,
                        headers=prepared.headers or None,
                        **_body_kwargs(prepared.body),
                    ),
                    timeout=config.timeout_seconds,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                logger.warning(f"{prepared.method.value} {prepared.url} timed out after {config.timeout}ms")
                raise RequestTimeoutError(config.timeout, prepared.url) from e
            except httpx.InvalidURL as e:
                raise RequestValidationError(f"Invalid URL {prepared.url!r}: {e}") from e
            except httpx.LocalProtocolError as e:
                # Our side produced a malformed request, not a network failure
                raise RequestValidationError(f"Malformed request to {prepared.url}: {e}") from e
            except httpx.TransportError as e:
                logger.warning(f"{prepared.method.value} {prepared.url} failed: {e!r}")
                raise NetworkError(f"Request to {prepared.url} failed: {e}") from e

        elapsed_ms = int((time.monotonic() - started) * 1000)
        body = response.text
        return ResponseDescriptor(
            status=response.status_code,
            reason=response.reason_phrase,
            headers=dict(response.headers),
            body=body,
            original_size=len(body.encode("utf-8")),
            elapsed_ms=elapsed_ms,
        )
