"""
Stand-alone PDF processing command
"""

import click
from rich.console import Console

from ...core.config_manager import ConfigurationError
from ...core.sync_pipeline import CSLBSyncPipeline
from ...models.errors import CSLBSyncError
from ..ui.display import create_error_display, create_file_results_table
from ..ui.progress import FileProgressTracker
from ..utils.async_runner import async_command
from ..utils.config_loader import load_command_config
from ..utils.validation import validate_listing_filename


@click.command()
@click.argument("filename", default="all")
@click.pass_context
@async_command
async def parse(ctx: click.Context, filename: str) -> None:
    """
    Extract, parse and convert listing PDFs to CSV.

    FILENAME names one PDF in the raw directory; "all" (the default)
    processes every PDF found there. A processing report is written to the
    logs directory.

    Examples:
      cslb-sync parse
      cslb-sync parse PL250307.pdf
    """
    console: Console = ctx.obj["console"]
    verbose: bool = ctx.obj.get("verbose", False)

    target = None if filename.lower() == "all" else filename
    if target is not None:
        is_valid, error_msg = validate_listing_filename(target)
        if not is_valid:
            console.print(f"[red]{error_msg}[/red]")
            ctx.exit(1)
            return

    exit_code = 0
    try:
        config = await load_command_config(ctx)
        pipeline = CSLBSyncPipeline(config)

        with FileProgressTracker(console) as tracker:
            outcome = await pipeline.parse_files(
                target, progress_callback=tracker.callback
            )

        if outcome.file_results:
            console.print(create_file_results_table(outcome.file_results))
        else:
            console.print("[yellow]No PDF files found to process[/yellow]")
        console.print(f"Report saved to: {outcome.report_path}")

        if outcome.has_failures:
            exit_code = 1

    except ConfigurationError as e:
        console.print(create_error_display(e, "Loading configuration"))
        exit_code = 1
    except CSLBSyncError as e:
        console.print(create_error_display(e, "Processing PDFs"))
        exit_code = 1
    except Exception as e:
        console.print(create_error_display(e, "Processing PDFs"))
        if verbose:
            console.print_exception()
        exit_code = 1

    ctx.exit(exit_code)
