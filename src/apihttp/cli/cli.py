"""
apihttp CLI - send requests to JSON APIs from the command line
"""

from typing import Optional

import click

from apihttp import __version__

from .commands import config, delete, get, post, put
from .helpers import CliState


@click.group()
@click.version_option(version=__version__, prog_name="apihttp")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--auth", "authorization", help="Authorization header value")
@click.option("--x-auth", "x_authorization", help="X-Authorization header value")
@click.option("--log-payloads", is_flag=True, help="Log request payloads and response bodies")
@click.option("--log-headers", is_flag=True, help="Log outgoing request headers")
@click.option("--timeout", type=float, help="Request timeout in seconds")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    verbose: bool,
    authorization: Optional[str],
    x_authorization: Optional[str],
    log_payloads: bool,
    log_headers: bool,
    timeout: Optional[float],
) -> None:
    """apihttp - HTTP API client helpers

    Use 'apihttp COMMAND --help' for more information on a command.
    """
    ctx.obj = CliState(
        config_path=config_path,
        verbose=verbose,
        authorization=authorization,
        x_authorization=x_authorization,
        log_payloads=log_payloads,
        log_headers=log_headers,
        timeout=timeout,
    )


# Register commands
cli.add_command(get)
cli.add_command(post)
cli.add_command(put)
cli.add_command(delete)
cli.add_command(config)


if __name__ == "__main__":
    cli()
