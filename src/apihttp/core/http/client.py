"""
Request Dispatcher
==================

A thin convenience layer over an HTTP transport (a ``requests.Session`` by
default) that adds:

- authentication headers set once and sent with every request
- a static or per-request header override
- optional request/response logging through an injected logger
- an opt-in request-ID header

Every request is a single round trip. Nothing is retried or cached; a
failure is logged (when a logger is configured) and re-raised unchanged.

Example:
    >>> client = RequestDispatcher(
    ...     logging_options=LoggingOptions(log_data_payloads=True, logger=log),
    ...     header_override={"Accept": "application/json"},
    ... )
    >>> client.set_authorization_header("Bearer abc123")
    >>> user = client.get_request("https://api.example.com/users/1")
"""

import copy
import json
import logging
import threading
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import urlsplit

import requests

from apihttp.core.http.headers import (
    Credentials,
    HeaderOverrideLike,
    Headers,
    as_header_override,
    merge_headers,
)
from apihttp.core.http.request_id import (
    REQUEST_ID_HEADER,
    RequestIdGenerator,
    UUIDRequestIdGenerator,
)

logger = logging.getLogger(__name__)


class RequestLogger(Protocol):
    """Anything with ``debug`` and ``error`` methods, e.g. ``logging.Logger``."""

    def debug(self, msg: str) -> Any: ...

    def error(self, msg: str) -> Any: ...


@dataclass(frozen=True)
class LoggingOptions:
    """
    Request/response logging settings.

    Args:
        log_data_payloads: Log request payloads and successful response bodies.
        log_request_headers: Log the merged outgoing headers.
        logger: Destination for log lines. When None nothing is logged,
            whatever the flags say.
    """

    log_data_payloads: bool = False
    log_request_headers: bool = False
    logger: Optional[RequestLogger] = None


@dataclass
class DispatchResult:
    """Status, headers and decoded body of a successful request."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None


def _pretty(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def _decode_body(response: Any) -> Any:
    """Decode a response body as JSON, falling back to text; empty bodies give None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class RequestDispatcher:
    """
    HTTP client wrapper with auth headers, header override and logging.

    Headers for each request are merged in this order, later sources
    winning on key collisions: request ID (if enabled), header override,
    credentials, per-call headers.

    Args:
        transport: Object with ``request(method, url, **kwargs)`` returning a
            ``requests.Response``. A fresh ``requests.Session`` is created
            (and closed by ``close()``) when omitted.
        logging_options: Logging flags and logger. Defaults to no logging.
        header_override: Mapping, zero-argument callable or HeaderOverride
            merged into every request at the lowest precedence.
        base_url: Prefix for relative URLs.
        default_options: Transport keyword arguments (e.g. ``timeout``) sent
            with every request, beneath per-call options.
        request_ids: Request-ID generator, used only when
            ``include_request_id`` is True.
        include_request_id: Attach a generated ID under ``request_id_header``.
        request_id_header: Header name for the request ID.
        credentials: Initial authentication headers.

    Thread Safety:
        Credentials are an immutable snapshot read once per request. The
        setters swap the snapshot under a lock, so concurrent requests see
        either the old or the new credentials, never a mix.
    """

    def __init__(
        self,
        transport: Optional[Any] = None,
        logging_options: Optional[LoggingOptions] = None,
        header_override: HeaderOverrideLike = None,
        *,
        base_url: str = "",
        default_options: Optional[Mapping[str, Any]] = None,
        request_ids: Optional[RequestIdGenerator] = None,
        include_request_id: bool = False,
        request_id_header: str = REQUEST_ID_HEADER,
        credentials: Optional[Credentials] = None,
    ):
        self._owns_transport = transport is None
        if transport is None:
            logger.debug("No transport supplied, creating a requests.Session")
            transport = requests.Session()
        self.transport = transport
        self.logging_options = logging_options or LoggingOptions()
        self.header_override = as_header_override(header_override)
        self.base_url = base_url.rstrip("/")
        self.default_options: Dict[str, Any] = dict(default_options or {})
        self.request_ids = request_ids or UUIDRequestIdGenerator()
        self.include_request_id = include_request_id
        self.request_id_header = request_id_header
        self._credentials = credentials or Credentials()
        self._credentials_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: Optional[Any] = None,
        logger: Optional[RequestLogger] = None,
        transport: Optional[Any] = None,
    ) -> "RequestDispatcher":
        """
        Build a dispatcher from an apihttp configuration.

        Args:
            config: Config instance; the global configuration when None.
            logger: Request logger; the ``apihttp.requests`` package logger
                when None.
            transport: Transport to use instead of a fresh session.

        Returns:
            A configured RequestDispatcher.
        """
        from apihttp.core.config import get_config
        from apihttp.core.logger import REQUEST_LOGGER_NAME, get_logger

        config = config or get_config()

        logging_options = LoggingOptions(
            log_data_payloads=bool(config.get("logging", "log_data_payloads", False)),
            log_request_headers=bool(config.get("logging", "log_request_headers", False)),
            logger=logger if logger is not None else get_logger(REQUEST_LOGGER_NAME),
        )
        timeout = config.get("transport", "timeout")
        credentials = Credentials(
            authorization=config.get("auth", "authorization") or None,
            x_authorization=config.get("auth", "x_authorization") or None,
        )

        return cls(
            transport,
            logging_options,
            dict(config.headers or {}) or None,
            base_url=config.get("transport", "base_url") or "",
            default_options={"timeout": timeout} if timeout else None,
            include_request_id=bool(config.get("request_id", "enabled", False)),
            request_id_header=config.get("request_id", "header") or REQUEST_ID_HEADER,
            credentials=credentials,
        )

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    @property
    def credentials(self) -> Credentials:
        """The current credentials snapshot."""
        return self._credentials

    def set_authorization_header(self, value: str) -> None:
        """Send ``Authorization: value`` with every subsequent request."""
        with self._credentials_lock:
            self._credentials = self._credentials.with_authorization(value)

    def set_x_authorization_header(self, value: str) -> None:
        """Send ``X-Authorization: value`` with every subsequent request."""
        with self._credentials_lock:
            self._credentials = self._credentials.with_x_authorization(value)

    def with_credentials(
        self,
        authorization: Optional[str] = None,
        x_authorization: Optional[str] = None,
    ) -> "RequestDispatcher":
        """
        Return a dispatcher with its own credentials.

        The new dispatcher shares this one's transport, logging, header
        override and options, but never sees later changes to this
        dispatcher's credentials (nor the reverse). It does not close the
        shared transport.
        """
        clone = copy.copy(self)
        clone._credentials = Credentials(
            authorization=authorization, x_authorization=x_authorization
        )
        clone._credentials_lock = threading.Lock()
        clone._owns_transport = False
        return clone

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _url(self, url: str) -> str:
        if not self.base_url or urlsplit(url).scheme.lower() in ("http", "https"):
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    def build_headers(self, headers: Optional[Mapping[str, str]] = None) -> Headers:
        """Merge the headers one request would be sent with."""
        request_id = (
            {self.request_id_header: self.request_ids()} if self.include_request_id else None
        )
        return merge_headers(
            request_id,
            self.header_override.resolve(),
            self._credentials.as_headers(),
            headers,
        )

    def dispatch(
        self,
        method: str,
        url: str,
        payload: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> DispatchResult:
        """
        Send one request and return its status, headers and decoded body.

        Args:
            method: HTTP method.
            url: Absolute URL, or a path joined to ``base_url``.
            payload: Request body. ``str``/``bytes`` are sent as-is, anything
                else is JSON encoded.
            headers: Per-call headers; they win over every other source.
            options: Extra transport keyword arguments (``timeout``,
                ``params``, ...), applied last.

        Returns:
            DispatchResult for a 2xx/3xx response.

        Raises:
            requests.HTTPError: For 4xx/5xx responses (``err.response`` is set).
            Exception: Any transport failure, re-raised unchanged.
        """
        method = method.upper()
        url = self._url(url)
        log_prefix = f"{method} {url}"
        opts = self.logging_options
        log = opts.logger

        request_headers = self.build_headers(headers)

        if log and opts.log_data_payloads:
            log.debug(f"[Request] {log_prefix}\nSending request: {_pretty(payload)}")
        if log and opts.log_request_headers:
            log.debug(f"[Request] {log_prefix}\nSending headers: {_pretty(request_headers)}")

        kwargs: Dict[str, Any] = dict(self.default_options)
        kwargs["headers"] = request_headers
        if payload is not None:
            kwargs["data" if isinstance(payload, (str, bytes)) else "json"] = payload
        kwargs.update(options or {})

        try:
            response = self.transport.request(method, url, **kwargs)
            response.raise_for_status()
        except Exception as err:
            if log:
                self._log_failure(log, log_prefix, err)
            raise

        data = _decode_body(response)
        if log and opts.log_data_payloads:
            log.debug(
                f"[Response] {log_prefix}\nStatus code: {response.status_code}\n"
                f"Response body: {_pretty(data)}"
            )

        return DispatchResult(
            status=response.status_code,
            headers=dict(response.headers),
            data=data,
        )

    @staticmethod
    def _log_failure(log: RequestLogger, log_prefix: str, err: Exception) -> None:
        response = getattr(err, "response", None)
        if response is not None:
            log.error(
                f"[Response] {log_prefix} Received error status code: "
                f"{response.status_code} {response.reason}\n"
                f"Response headers: {_pretty(dict(response.headers))}\n"
                f"Response body: {_pretty(_decode_body(response))}"
            )
        else:
            trace = "".join(traceback.format_exception(type(err), err, err.__traceback__))
            log.error(f"[Response] {log_prefix} Error calling the endpoint: {trace.rstrip()}")

    def get_request(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """GET ``url`` and return the response body."""
        return self.dispatch("GET", url, None, headers, options).data

    def post_request(
        self,
        url: str,
        payload: Any,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """POST ``payload`` to ``url`` and return the response body."""
        return self.dispatch("POST", url, payload, headers, options).data

    def put_request(
        self,
        url: str,
        payload: Any,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """PUT ``payload`` to ``url`` and return the response body."""
        return self.dispatch("PUT", url, payload, headers, options).data

    def delete_request(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """DELETE ``url`` and return the response body."""
        return self.dispatch("DELETE", url, None, headers, options).data

    def close(self) -> None:
        """Close the transport if this dispatcher created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
