"""
Configuration management commands
"""

import click
from rich.console import Console

from ...core.config_manager import ConfigurationError
from ..ui.display import create_config_table, create_error_display
from ..utils.async_runner import async_command
from ..utils.config_loader import config_manager_for


@click.group()
def config() -> None:
    """
    Configuration management commands.

    Inspect the effective configuration or write a commented default
    configuration file.
    """
    pass


@config.command()
@click.pass_context
@async_command
async def show(ctx: click.Context) -> None:
    """
    Display the effective configuration.

    Values come from the configuration file, CSLB_SYNC_* environment
    variables and built-in defaults, in that order of precedence (the
    environment wins over the file).
    """
    console: Console = ctx.obj["console"]

    exit_code = 0
    try:
        config_manager = config_manager_for(ctx)
        current = await config_manager.load_config()

        console.print(create_config_table(current.model_dump(), "cslb-sync Configuration"))

        config_file_path = config_manager.config_path
        console.print(f"\n[dim]Configuration file: {config_file_path}[/dim]")
        if config_file_path and not config_file_path.exists():
            console.print(
                "[yellow]Configuration file does not exist; built-in defaults are in use. "
                "Run 'cslb-sync config init' to create one.[/yellow]"
            )

    except ConfigurationError as e:
        console.print(create_error_display(e, "Configuration Error"))
        exit_code = 1

    ctx.exit(exit_code)


@config.command()
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
@async_command
async def init(ctx: click.Context, force: bool) -> None:
    """
    Write a default configuration file.

    The file goes to --config, CSLB_SYNC_CONFIG_PATH or ./cslb-sync.yaml.
    """
    console: Console = ctx.obj["console"]

    exit_code = 0
    try:
        config_path = await config_manager_for(ctx).generate_default_config(force=force)
        console.print(f"[green]✓ Configuration written to {config_path}[/green]")
    except ConfigurationError as e:
        console.print(create_error_display(e, "Configuration Error"))
        if not force:
            console.print("Use --force to overwrite the existing file")
        exit_code = 1

    ctx.exit(exit_code)
