"""apihttp command line interface."""

from .cli import cli

__all__ = ["cli"]
