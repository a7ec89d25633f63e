"""Shared state and dispatcher construction for CLI commands."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import click

from apihttp.core.config import Config, load_config_cascade
from apihttp.core.http import RequestDispatcher
from apihttp.core.logger import set_level, set_request_logging


@dataclass
class CliState:
    """Options given to the top-level ``apihttp`` group."""

    config_path: Optional[str] = None
    verbose: bool = False
    authorization: Optional[str] = None
    x_authorization: Optional[str] = None
    log_payloads: bool = False
    log_headers: bool = False
    timeout: Optional[float] = None

    def load_config(self) -> Config:
        """Load the configuration cascade and apply command-line overrides."""
        config = load_config_cascade(self.config_path)
        if self.log_payloads:
            config.set("logging", "log_data_payloads", True)
        if self.log_headers:
            config.set("logging", "log_request_headers", True)
        if self.timeout is not None:
            config.set("transport", "timeout", self.timeout)
        if self.authorization:
            config.set("auth", "authorization", self.authorization)
        if self.x_authorization:
            config.set("auth", "x_authorization", self.x_authorization)
        return config


def build_dispatcher(state: CliState) -> RequestDispatcher:
    """Create a dispatcher from the configuration and CLI overrides."""
    config = state.load_config()
    if state.verbose:
        set_level(logging.DEBUG)
    else:
        try:
            set_level(config.get("logging", "level", "WARNING"))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="[logging] level") from e
    set_request_logging(
        bool(config.get("logging", "log_data_payloads", False))
        or bool(config.get("logging", "log_request_headers", False))
    )
    return RequestDispatcher.from_config(config)


def parse_header(value: str) -> Tuple[str, str]:
    """
    Parse a ``"Name: value"`` header argument.

    Raises:
        click.BadParameter: If the name or the colon is missing.
    """
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected 'Name: value', got {value!r}")
    return name.strip(), header_value.strip()


def headers_callback(
    ctx: click.Context, param: click.Parameter, values: Tuple[str, ...]
) -> Dict[str, str]:
    """Click callback turning repeated ``-H`` options into a header dict."""
    return dict(parse_header(value) for value in values)
