"""
apihttp - HTTP API client helpers
=================================

Version: 0.1.0
"""

__version__ = "0.1.0"

# Re-export the dispatcher API for convenience
from apihttp.core.http import (
    Credentials,
    CountingRequestIdGenerator,
    DispatchResult,
    DynamicHeaders,
    HeaderOverride,
    LoggingOptions,
    RequestDispatcher,
    StaticHeaders,
    UUIDRequestIdGenerator,
    error_status,
    merge_headers,
    recover_if,
    return_null_for_404,
    status_is,
)

__all__ = [
    "__version__",
    "Credentials",
    "CountingRequestIdGenerator",
    "DispatchResult",
    "DynamicHeaders",
    "HeaderOverride",
    "LoggingOptions",
    "RequestDispatcher",
    "StaticHeaders",
    "UUIDRequestIdGenerator",
    "error_status",
    "merge_headers",
    "recover_if",
    "return_null_for_404",
    "status_is",
]
