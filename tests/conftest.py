# tests/conftest.py
"""
Global pytest fixtures for apihttp tests.
"""

from unittest.mock import MagicMock

import pytest

from tests.mocks.mock_transport import MockTransport, make_response


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config cascade at empty temp locations and reset the global config."""
    from apihttp.core import config

    locations = [
        tmp_path / "cwd" / "apihttp.toml",
        tmp_path / "user" / "config.toml",
        tmp_path / "system" / "config.toml",
    ]
    monkeypatch.setattr(config, "CONFIG_LOCATIONS", locations)
    config.reset_config()
    yield locations
    config.reset_config()


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for files written by a test."""
    return tmp_path


@pytest.fixture
def transport():
    """Transport answering 200 with an empty body."""
    return MockTransport()


@pytest.fixture
def json_transport():
    """Transport answering 200 with {"a": 1}."""
    return MockTransport([make_response(200, {"a": 1})])


@pytest.fixture
def request_log():
    """Logger double exposing only debug() and error()."""
    return MagicMock(spec=["debug", "error"])



@pytest.fixture(autouse=True)
def reset_log_levels():
    """Restore the package and request logger levels after each test."""
    import logging

    from apihttp.core.logger import PACKAGE_NAME, REQUEST_LOGGER_NAME

    loggers = [logging.getLogger(PACKAGE_NAME), logging.getLogger(REQUEST_LOGGER_NAME)]
    levels = [lg.level for lg in loggers]
    yield
    for lg, level in zip(loggers, levels):
        lg.setLevel(level)
