"""
Main CLI entry point for cslb-sync
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.traceback import install

from .. import __version__
from ..core.logging_setup import configure_console_logging

# Install rich traceback handler for better error display
install(show_locals=False)

# Initialize console
console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="cslb-sync")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to configuration file (default: ./cslb-sync.yaml)",
)
@click.pass_context
def cli(
    ctx: click.Context, verbose: bool, no_color: bool, config_path: Optional[str]
) -> None:
    """
    cslb-sync - CSLB contractor listing ingestion

    Converts CSLB business (PL) and personnel (PP) listing PDFs into CSV
    files, writes a run report and archives aged files.

    Examples:
      cslb-sync run daily                  # Scheduled daily sync
      cslb-sync run manual                 # Process everything, no archiving
      cslb-sync parse PL250307.pdf         # Process a single PDF
      cslb-sync download recent 3          # Fetch the last three days
      cslb-sync status                     # Check system health
    """
    ctx.ensure_object(dict)

    # Configure console
    if no_color:
        ctx.obj["console"] = Console(force_terminal=False, no_color=True)
    else:
        ctx.obj["console"] = console

    configure_console_logging(ctx.obj["console"])

    ctx.obj["verbose"] = verbose
    ctx.obj["no_color"] = no_color
    ctx.obj["config_path"] = config_path


# Import and register commands at module level to support testing
from .commands import config, download, parse, run, status  # noqa: E402

cli.add_command(run.run)
cli.add_command(parse.parse)
cli.add_command(download.download)
cli.add_command(status.status)
cli.add_command(config.config)


def main() -> None:
    """Main entry point for the CLI application"""
    try:
        cli()

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
