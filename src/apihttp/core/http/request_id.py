"""
Request ID generators.

A generator is any zero-argument callable returning a string. The dispatcher
only calls it when request IDs are switched on.
"""

import threading
import uuid
from typing import Callable

RequestIdGenerator = Callable[[], str]

REQUEST_ID_HEADER = "X-Request-ID"


class UUIDRequestIdGenerator:
    """Random UUID4 request IDs."""

    def __call__(self) -> str:
        return str(uuid.uuid4())


class CountingRequestIdGenerator:
    """
    Sequential, readable request IDs: ``"<name>-1"``, ``"<name>-2"``, ...

    Handy in tests, where the name is usually the current test's name so
    that server-side logs can be matched to the test that produced them.

    Thread Safety:
        The counter is guarded by a ``threading.Lock``; one instance can be
        shared across worker threads.
    """

    def __init__(self, name: str):
        self.name = name
        self._count = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            self._count += 1
            count = self._count
        return f"{self.name}-{count}"
