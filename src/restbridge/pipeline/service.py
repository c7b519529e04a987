"""
End-to-end request pipeline.

validate -> prepare (auth + headers) -> execute -> bound
"""

from dataclasses import dataclass, replace
from typing import Any

from restbridge.core.config import Config
from restbridge.core.logging import get_logger
from restbridge.core.types import RequestDescriptor, ResponseDescriptor
from restbridge.pipeline.bounder import bound
from restbridge.pipeline.executor import RequestExecutor
from restbridge.pipeline.request import PreparedRequest, prepare_request

logger = get_logger("pipeline.service")


@dataclass(frozen=True)
class RequestResult:
    """A prepared request and its bounded response."""

    request: PreparedRequest
    response: ResponseDescriptor


class RestPipeline:
    """Stateless per call. Config is shared read-only between concurrent calls."""

    def __init__(self, config: Config, executor: RequestExecutor | None = None) -> None:
        self.config = config
        self.executor = executor or RequestExecutor()

    async def run(self, args: Any) -> RequestResult:
        """
        Validate raw arguments and perform the request.

        Raises:
            RequestValidationError: before any network activity
            NetworkError, RequestTimeoutError: from the executor
        """
        descriptor = RequestDescriptor.from_args(args)
        return await self.send(descriptor)

    async def send(self, descriptor: RequestDescriptor) -> RequestResult:
        """Perform an already validated request."""
        prepared = prepare_request(descriptor, self.config)
        logger.info(f"{prepared.method.value} {prepared.url} headers={prepared.echo_headers}")

        response = await self.executor.execute(prepared, self.config)

        bounded = bound(response.body, self.config.response_size_limit)
        if bounded.truncated:
            logger.info(
                f"Response truncated: {bounded.returned_size} of {bounded.original_size} bytes "
                f"(limit {self.config.response_size_limit})"
            )
        response = replace(
            response,
            body=bounded.body,
            truncated=bounded.truncated,
            original_size=bounded.original_size,
        )

        logger.info(f"{prepared.method.value} {prepared.url} -> {response.status} ({response.elapsed_ms}ms)")
        return RequestResult(request=prepared, response=response)
