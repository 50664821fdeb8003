"""
Full pipeline run command
"""

import click
from rich.console import Console

from ...core.config_manager import ConfigurationError
from ...core.sync_pipeline import CSLBSyncPipeline
from ...models.errors import ReportWriteError
from ..ui.display import create_error_display, create_session_summary
from ..ui.progress import FileProgressTracker
from ..utils.async_runner import async_command
from ..utils.config_loader import load_command_config
from ..utils.validation import VALID_MODES, validate_mode


@click.command()
@click.argument("mode", default="daily")
@click.option(
    "--fail-on-file-errors",
    is_flag=True,
    help="Exit with status 1 if any individual file fails",
)
@click.pass_context
@async_command
async def run(ctx: click.Context, mode: str, fail_on_file_errors: bool) -> None:
    """
    Run the full sync pipeline.

    MODE is one of daily (the default), manual or test. Daily runs also
    check for today's listings and archive files past the retention window.

    Examples:
      cslb-sync run daily
      cslb-sync run manual --fail-on-file-errors
    """
    console: Console = ctx.obj["console"]
    verbose: bool = ctx.obj.get("verbose", False)

    is_valid, error_msg, sync_mode = validate_mode(mode)
    if not is_valid or sync_mode is None:
        console.print(f"[red]{error_msg}[/red]")
        console.print(f"Usage: cslb-sync run [{'|'.join(VALID_MODES)}]")
        ctx.exit(1)
        return

    exit_code = 0
    try:
        config = await load_command_config(ctx)
        pipeline = CSLBSyncPipeline(config)

        console.print(f"[cyan]Starting {sync_mode.value} sync...[/cyan]")
        with FileProgressTracker(console) as tracker:
            result = await pipeline.run_pipeline(
                sync_mode, progress_callback=tracker.callback
            )

        console.print(create_session_summary(result.session))
        console.print(f"Report saved to: {result.report_path}")

        if not result.success:
            console.print(
                create_error_display(
                    RuntimeError(result.error or "unknown error"), "Pipeline run"
                )
            )
            exit_code = 1
        elif result.session.failed_files:
            console.print(
                f"[yellow]⚠ {result.session.failed_files} file(s) failed; "
                "see the report for details[/yellow]"
            )
            if fail_on_file_errors:
                exit_code = 1
        else:
            console.print("[bold green]✓ Sync completed successfully[/bold green]")

    except ConfigurationError as e:
        console.print(create_error_display(e, "Loading configuration"))
        exit_code = 1
    except ReportWriteError as e:
        console.print(create_error_display(e, "Writing sync report"))
        exit_code = 1
    except Exception as e:
        console.print(create_error_display(e, "Pipeline run"))
        if verbose:
            console.print_exception()
        exit_code = 1

    ctx.exit(exit_code)
