"""
Unit tests for apihttp.core.http.request_id module.
"""

import threading
import uuid

from apihttp.core.http.request_id import CountingRequestIdGenerator, UUIDRequestIdGenerator


class TestUUIDRequestIdGenerator:
    """Tests for UUIDRequestIdGenerator."""

    def test_generates_valid_uuid4(self):
        value = UUIDRequestIdGenerator()()

        assert uuid.UUID(value).version == 4

    def test_generates_distinct_ids(self):
        generator = UUIDRequestIdGenerator()

        assert generator() != generator()


class TestCountingRequestIdGenerator:
    """Tests for CountingRequestIdGenerator."""

    def test_sequential_ids(self):
        generator = CountingRequestIdGenerator("test_login")

        assert [generator() for _ in range(3)] == [
            "test_login-1",
            "test_login-2",
            "test_login-3",
        ]

    def test_instances_count_independently(self):
        first = CountingRequestIdGenerator("a")
        second = CountingRequestIdGenerator("b")

        first()
        first()

        assert second() == "b-1"

    def test_thread_safe(self):
        generator = CountingRequestIdGenerator("t")
        results = []
        lock = threading.Lock()

        def worker():
            for _ in range(100):
                value = generator()
                with lock:
                    results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 400
