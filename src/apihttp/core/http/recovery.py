"""
Failure recovery helpers.

A failed request surfaces as an exception. Those raised by ``requests`` for
non-2xx answers carry the ``Response`` on ``err.response``; connection errors
and timeouts carry ``None`` there.
"""

from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")

ErrorPredicate = Callable[[BaseException], bool]


def error_status(err: BaseException) -> Optional[int]:
    """Return the HTTP status carried by a failure, or None if it has no response."""
    response = getattr(err, "response", None)
    if response is None:
        return None
    return getattr(response, "status_code", None)


def status_is(*codes: int) -> ErrorPredicate:
    """Build a predicate matching failures whose response status is one of ``codes``."""
    wanted = frozenset(codes)

    def predicate(err: BaseException) -> bool:
        return error_status(err) in wanted

    return predicate


def recover_if(
    predicate: ErrorPredicate, fallback: Any = None
) -> Callable[[Callable[[], T]], Any]:
    """
    Build a runner that turns matching failures into a fallback value.

    Args:
        predicate: Called with the raised exception; True means recover.
        fallback: Value returned instead of the matching failure.

    Returns:
        A function taking a zero-argument operation. It returns the
        operation's result, or ``fallback`` when the operation raised an
        exception accepted by ``predicate``. Every other exception is
        re-raised unchanged.

    Example:
        >>> missing_is_empty = recover_if(status_is(404, 410), fallback=[])
        >>> items = missing_is_empty(lambda: client.get_request("/items"))
    """

    def run(operation: Callable[[], T]) -> Any:
        try:
            return operation()
        except Exception as err:
            if predicate(err):
                return fallback
            raise

    return run


_null_for_404 = recover_if(status_is(404), None)


def return_null_for_404(operation: Callable[[], T]) -> Optional[T]:
    """Run ``operation``, returning None if it fails with HTTP status exactly 404."""
    return _null_for_404(operation)
