"""
HTTP Request Dispatching
========================

Convenience wrapper around an HTTP transport for talking to JSON APIs.

Features:
- Authorization / X-Authorization headers set once, sent with every request
- Static or per-request header override merged at the lowest precedence
- Optional request/response logging through any debug/error logger
- Predicate-based failure recovery (e.g. 404 -> None)
- Opt-in request-ID header with pluggable ID generators
"""

from .client import DispatchResult, LoggingOptions, RequestDispatcher, RequestLogger
from .headers import (
    AUTHORIZATION,
    X_AUTHORIZATION,
    Credentials,
    DynamicHeaders,
    HeaderOverride,
    StaticHeaders,
    as_header_override,
    merge_headers,
)
from .recovery import error_status, recover_if, return_null_for_404, status_is
from .request_id import (
    REQUEST_ID_HEADER,
    CountingRequestIdGenerator,
    UUIDRequestIdGenerator,
)

__all__ = [
    "AUTHORIZATION",
    "X_AUTHORIZATION",
    "REQUEST_ID_HEADER",
    "Credentials",
    "CountingRequestIdGenerator",
    "DispatchResult",
    "DynamicHeaders",
    "HeaderOverride",
    "LoggingOptions",
    "RequestDispatcher",
    "RequestLogger",
    "StaticHeaders",
    "UUIDRequestIdGenerator",
    "as_header_override",
    "error_status",
    "merge_headers",
    "recover_if",
    "return_null_for_404",
    "status_is",
]
