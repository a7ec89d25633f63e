"""
Unit tests for apihttp.core.http.recovery module.
"""

from unittest.mock import MagicMock

import pytest
import requests

from apihttp.core.http.recovery import (
    error_status,
    recover_if,
    return_null_for_404,
    status_is,
)
from tests.mocks.mock_transport import make_response


def http_error(status: int) -> requests.HTTPError:
    return requests.HTTPError(f"{status} error", response=make_response(status))


def failing(err: Exception):
    def operation():
        raise err

    return operation


class TestErrorStatus:
    """Tests for error_status."""

    def test_status_from_response(self):
        assert error_status(http_error(503)) == 503

    def test_none_without_response(self):
        assert error_status(requests.ConnectionError("down")) is None

    def test_none_for_plain_exception(self):
        assert error_status(ValueError("x")) is None

    def test_duck_typed_response(self):
        err = RuntimeError("x")
        err.response = MagicMock(status_code=404)

        assert error_status(err) == 404


class TestStatusIs:
    """Tests for status_is predicates."""

    def test_matches_listed_codes(self):
        predicate = status_is(404, 410)

        assert predicate(http_error(404))
        assert predicate(http_error(410))
        assert not predicate(http_error(400))

    def test_never_matches_without_response(self):
        assert not status_is(404)(requests.Timeout("slow"))


class TestRecoverIf:
    """Tests for the recover_if combinator."""

    def test_returns_operation_result(self):
        run = recover_if(status_is(404), fallback="fallback")

        assert run(lambda: "value") == "value"

    def test_returns_fallback_on_match(self):
        run = recover_if(status_is(409), fallback={"conflict": True})

        assert run(failing(http_error(409))) == {"conflict": True}

    def test_reraises_on_mismatch(self):
        err = http_error(500)
        run = recover_if(status_is(404))

        with pytest.raises(requests.HTTPError) as exc_info:
            run(failing(err))

        assert exc_info.value is err

    def test_custom_predicate(self):
        run = recover_if(lambda err: isinstance(err, requests.Timeout), fallback=[])

        assert run(failing(requests.Timeout("slow"))) == []

    def test_operation_called_once(self):
        operation = MagicMock(side_effect=http_error(404))

        recover_if(status_is(404))(operation)

        operation.assert_called_once_with()


class TestReturnNullFor404:
    """Tests for return_null_for_404."""

    def test_404_returns_none(self):
        assert return_null_for_404(failing(http_error(404))) is None

    def test_success_returns_value(self):
        assert return_null_for_404(lambda: {"a": 1}) == {"a": 1}

    @pytest.mark.parametrize("status", [400, 401, 403, 405, 410, 500])
    def test_other_status_propagates(self, status):
        err = http_error(status)

        with pytest.raises(requests.HTTPError) as exc_info:
            return_null_for_404(failing(err))

        assert exc_info.value is err

    def test_failure_without_response_propagates(self):
        err = requests.ConnectionError("refused")

        with pytest.raises(requests.ConnectionError) as exc_info:
            return_null_for_404(failing(err))

        assert exc_info.value is err
