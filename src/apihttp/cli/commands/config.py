"""Configuration management commands."""

from pathlib import Path

import click


@click.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_obj
def config_show(state) -> None:
    """Show the effective configuration."""
    from rich.markup import escape

    from apihttp.cli.output import console

    config_obj = state.load_config()

    console.print("\n[bold]Current Configuration[/bold]")
    if config_obj._source:
        console.print(f"[dim]Source: {config_obj._source}[/dim]\n")
    else:
        console.print("[dim]Source: defaults (no config file found)[/dim]\n")

    for section_name, section in config_obj.to_dict().items():
        console.print(f"[bold blue]\\[{section_name}][/bold blue]")
        for key, value in section.items():
            if section_name == "auth" and value:
                value = "***"
            console.print(f"  {key} = {escape(repr(value))}", highlight=False)
        console.print()


@config.command("init")
@click.option("--output", "-o", default="apihttp.toml", help="Output file path")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing file")
def config_init(output: str, force: bool) -> None:
    """Create a default configuration file."""
    from apihttp.cli.output import exit_with_error, print_success
    from apihttp.core.config import create_default_config_file

    if Path(output).exists() and not force:
        click.echo("Use --force to overwrite.")
        exit_with_error(f"Configuration file already exists: {output}")

    create_default_config_file(output)
    print_success(f"Created configuration file: {output}")


@config.command("path")
@click.pass_obj
def config_path(state) -> None:
    """Show configuration file search paths."""
    from apihttp.cli.output import console
    from apihttp.core.config import get_config_locations

    console.print("\n[bold]Configuration File Search Paths[/bold]\n")
    console.print("Files are merged lowest to highest priority; listed highest first:\n")

    locations = get_config_locations()
    if state.config_path:
        locations.insert(0, Path(state.config_path))

    for i, location in enumerate(locations, 1):
        status = "[green]found[/green]" if location.exists() else "[dim]not found[/dim]"
        console.print(f"  {i}. {location} {status}", highlight=False, soft_wrap=True)

    console.print()
