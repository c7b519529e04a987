"""Request construction and response sanitization pipeline."""

from restbridge.pipeline.auth import AuthScheme, describe_auth, resolve_auth_headers
from restbridge.pipeline.bounder import BoundedBody, bound
from restbridge.pipeline.executor import RequestExecutor
from restbridge.pipeline.headers import REDACTION_MARKER, merge_headers, sanitize_headers
from restbridge.pipeline.request import PreparedRequest, prepare_request
from restbridge.pipeline.service import RequestResult, RestPipeline

__all__ = [
    "AuthScheme",
    "BoundedBody",
    "PreparedRequest",
    "REDACTION_MARKER",
    "RequestExecutor",
    "RequestResult",
    "RestPipeline",
    "bound",
    "describe_auth",
    "merge_headers",
    "prepare_request",
    "resolve_auth_headers",
    "sanitize_headers",
]
