"""
Request Header Sources
======================

The dispatcher builds every request's headers from four sources, merged in a
fixed order (later sources win on key collision):

1. the request-ID header, when enabled
2. the header override (static mapping or per-request producer)
3. the credentials snapshot (Authorization / X-Authorization)
4. the headers supplied with the individual call
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Mapping, Optional, Union

AUTHORIZATION = "Authorization"
X_AUTHORIZATION = "X-Authorization"

Headers = Dict[str, str]
HeaderProducer = Callable[[], Mapping[str, str]]


class HeaderOverride:
    """Base class for the two header override variants."""

    def resolve(self) -> Headers:
        raise NotImplementedError


@dataclass(frozen=True)
class StaticHeaders(HeaderOverride):
    """A fixed mapping merged into every request."""

    headers: Mapping[str, str] = field(default_factory=dict)

    def resolve(self) -> Headers:
        return dict(self.headers)


@dataclass(frozen=True)
class DynamicHeaders(HeaderOverride):
    """
    A zero-argument producer called once per request.

    Useful for values that change over the dispatcher's lifetime, such as
    short-lived tokens or tracing context.
    """

    producer: HeaderProducer

    def resolve(self) -> Headers:
        return dict(self.producer() or {})


NO_OVERRIDE = StaticHeaders()

HeaderOverrideLike = Union[HeaderOverride, Mapping[str, str], HeaderProducer, None]


def as_header_override(value: HeaderOverrideLike) -> HeaderOverride:
    """
    Coerce a mapping, callable or None into a HeaderOverride variant.

    Raises:
        TypeError: If the value is neither a mapping nor callable.
    """
    if value is None:
        return NO_OVERRIDE
    if isinstance(value, HeaderOverride):
        return value
    if isinstance(value, Mapping):
        return StaticHeaders(dict(value))
    if callable(value):
        return DynamicHeaders(value)
    raise TypeError(
        f"Header override must be a mapping or a callable, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class Credentials:
    """Immutable snapshot of the authentication headers."""

    authorization: Optional[str] = None
    x_authorization: Optional[str] = None

    def with_authorization(self, value: str) -> "Credentials":
        return replace(self, authorization=value)

    def with_x_authorization(self, value: str) -> "Credentials":
        return replace(self, x_authorization=value)

    def as_headers(self) -> Headers:
        headers: Headers = {}
        if self.authorization is not None:
            headers[AUTHORIZATION] = self.authorization
        if self.x_authorization is not None:
            headers[X_AUTHORIZATION] = self.x_authorization
        return headers


def merge_headers(*sources: Optional[Mapping[str, str]]) -> Headers:
    """Merge header mappings left to right; later mappings win. None is skipped."""
    merged: Headers = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged
