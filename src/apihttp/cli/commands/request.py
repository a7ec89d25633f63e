"""HTTP request commands."""

import json
from typing import Any, Callable, Dict

import click
import requests

from apihttp.cli.helpers import CliState, build_dispatcher, headers_callback
from apihttp.cli.output import exit_with_error, print_body
from apihttp.core.http import return_null_for_404

header_option = click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    callback=headers_callback,
    help="Request header as 'Name: value' (repeatable)",
)
null_404_option = click.option(
    "--null-404", is_flag=True, help="Print null instead of failing on 404"
)
data_option = click.option("--data", "-d", required=True, help="JSON request body")


def _parse_payload(data: str) -> Any:
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="'--data'") from e


def _send(
    state: CliState,
    url: str,
    call: Callable[..., Any],
    null_404: bool = False,
) -> None:
    """Run one request through a fresh dispatcher and print the body."""
    with build_dispatcher(state) as dispatcher:

        def operation() -> Any:
            return call(dispatcher)

        try:
            data = return_null_for_404(operation) if null_404 else operation()
        except requests.HTTPError as e:
            response = e.response
            exit_with_error(f"{response.status_code} {response.reason}: {url}")
        except requests.RequestException as e:
            exit_with_error(f"Request failed: {e}")

    print_body(data)


@click.command("get")
@click.argument("url")
@header_option
@null_404_option
@click.pass_obj
def get(state: CliState, url: str, headers: Dict[str, str], null_404: bool) -> None:
    """Send a GET request and print the response body."""
    _send(state, url, lambda d: d.get_request(url, headers), null_404)


@click.command("delete")
@click.argument("url")
@header_option
@null_404_option
@click.pass_obj
def delete(state: CliState, url: str, headers: Dict[str, str], null_404: bool) -> None:
    """Send a DELETE request and print the response body."""
    _send(state, url, lambda d: d.delete_request(url, headers), null_404)


@click.command("post")
@click.argument("url")
@data_option
@header_option
@click.pass_obj
def post(state: CliState, url: str, data: str, headers: Dict[str, str]) -> None:
    """Send a POST request with a JSON body and print the response body."""
    payload = _parse_payload(data)
    _send(state, url, lambda d: d.post_request(url, payload, headers))


@click.command("put")
@click.argument("url")
@data_option
@header_option
@click.pass_obj
def put(state: CliState, url: str, data: str, headers: Dict[str, str]) -> None:
    """Send a PUT request with a JSON body and print the response body."""
    payload = _parse_payload(data)
    _send(state, url, lambda d: d.put_request(url, payload, headers))
