"""
Rich-based console output utilities for the apihttp CLI.
"""

from typing import Any

import click
from rich.console import Console
from rich.markup import escape

# Global console instance
console = Console()


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {escape(message)}", highlight=False, soft_wrap=True)


def print_body(data: Any) -> None:
    """
    Print a response body.

    Text bodies are echoed verbatim; everything else (including None) is
    rendered as indented JSON.
    """
    if isinstance(data, str):
        click.echo(data)
    else:
        console.print_json(data=data)


def exit_with_error(message: str, code: int = 1) -> None:
    """
    Print error message and exit.

    Raises:
        SystemExit: Always exits with specified code
    """
    print_error(message)
    raise SystemExit(code)
