"""
Unit tests for apihttp.core.logger module.
"""

import logging

import pytest
from rich.logging import RichHandler

from apihttp.core.logger import (
    HANDLER_NAME,
    PACKAGE_NAME,
    REQUEST_LOGGER_NAME,
    get_logger,
    set_level,
    set_request_logging,
)


def _console_handlers():
    return [
        h for h in logging.getLogger(PACKAGE_NAME).handlers if h.get_name() == HANDLER_NAME
    ]


class TestLogger:
    """Tests for package logger setup."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("apihttp.core.http.client")

        assert logger.name == "apihttp.core.http.client"

    def test_package_logger_configured_once(self):
        get_logger("apihttp.a")
        get_logger("apihttp.b")

        handlers = _console_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert logging.getLogger(PACKAGE_NAME).propagate is False

    def test_foreign_handlers_do_not_block_configuration(self):
        package_logger = logging.getLogger(PACKAGE_NAME)
        for handler in _console_handlers():
            package_logger.removeHandler(handler)
        foreign = logging.NullHandler()
        package_logger.addHandler(foreign)
        try:
            get_logger("apihttp.c")

            assert len(_console_handlers()) == 1
        finally:
            package_logger.removeHandler(foreign)

    def test_console_writes_to_current_stderr(self, capsys):
        get_logger("apihttp.d").warning("disk nearly full")

        assert "disk nearly full" in capsys.readouterr().err

    def test_set_level_int(self):
        set_level(logging.DEBUG)

        assert logging.getLogger(PACKAGE_NAME).level == logging.DEBUG

    def test_set_level_name(self):
        set_level("error")

        assert logging.getLogger(PACKAGE_NAME).level == logging.ERROR

    def test_set_level_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown logging level"):
            set_level("LOUD")


class TestRequestLogging:
    """Tests for the request logger switch."""

    def test_enabled_overrides_package_level(self):
        set_level("WARNING")
        set_request_logging(True)

        assert logging.getLogger(REQUEST_LOGGER_NAME).isEnabledFor(logging.DEBUG)
        assert not logging.getLogger("apihttp.other").isEnabledFor(logging.DEBUG)

    def test_disabled_inherits_package_level(self):
        set_level("WARNING")
        set_request_logging(True)
        set_request_logging(False)

        request_logger = logging.getLogger(REQUEST_LOGGER_NAME)
        assert request_logger.level == logging.NOTSET
        assert not request_logger.isEnabledFor(logging.DEBUG)
