"""
Listing download command
"""

from datetime import datetime
from typing import List, Optional

import click
from rich.console import Console

from ...core.config_manager import ConfigurationError
from ...core.downloader import CSLBDownloader
from ...core.report_generator import ReportWriter, render_download_report
from ...models.errors import ReportWriteError
from ...models.session_models import DownloadResult, generate_session_id
from ..ui.display import create_download_table, create_error_display
from ..utils.async_runner import async_command
from ..utils.config_loader import load_command_config
from ..utils.validation import (
    DOWNLOAD_MODES,
    validate_date_argument,
    validate_recent_days,
)


@click.command()
@click.argument("mode", type=click.Choice(DOWNLOAD_MODES), default="daily")
@click.argument("value", required=False)
@click.pass_context
@async_command
async def download(ctx: click.Context, mode: str, value: Optional[str]) -> None:
    """
    Download listing PDFs from the CSLB website.

    \b
    MODE:
      daily            today's PL and PP listings
      recent [DAYS]    today and the previous DAYS-1 days (default 7)
      date YYYY-MM-DD  listings for one date

    Files already present in the raw directory are not downloaded again.
    """
    console: Console = ctx.obj["console"]
    verbose: bool = ctx.obj.get("verbose", False)

    day = None
    days = None
    if mode == "date":
        is_valid, error_msg, day = validate_date_argument(value)
    elif mode == "recent":
        is_valid, error_msg, days = validate_recent_days(value)
    else:
        is_valid, error_msg = True, None

    if not is_valid:
        console.print(f"[red]{error_msg}[/red]")
        ctx.exit(1)
        return

    exit_code = 0
    try:
        config = await load_command_config(ctx)
        session_id = generate_session_id()

        async with CSLBDownloader(
            config.storage.raw_path,
            config.download,
            prefixes=config.pipeline.daily_prefixes,
        ) as downloader:
            with console.status("Downloading listings..."):
                if mode == "date" and day is not None:
                    results: List[DownloadResult] = await downloader.download_for_date(day)
                elif mode == "recent":
                    results = await downloader.download_recent(days)
                else:
                    results = await downloader.download_daily()

        console.print(create_download_table(results))

        generated_at = datetime.now()
        report = render_download_report(session_id, results, generated_at)
        report_path = ReportWriter(config.storage.logs).write(
            report, f"download-report-{session_id}.txt"
        )
        console.print(f"Report saved to: {report_path}")

        successful = sum(1 for r in results if r.success)
        console.print(f"{successful}/{len(results)} files available")
        if successful == 0:
            exit_code = 1

    except ConfigurationError as e:
        console.print(create_error_display(e, "Loading configuration"))
        exit_code = 1
    except ReportWriteError as e:
        console.print(create_error_display(e, "Writing download report"))
        exit_code = 1
    except Exception as e:
        console.print(create_error_display(e, "Downloading listings"))
        if verbose:
            console.print_exception()
        exit_code = 1

    ctx.exit(exit_code)
