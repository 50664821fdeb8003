"""
Status and health check commands
"""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.columns import Columns
from rich.console import Console

from ...core.config_manager import ConfigurationError
from ...core.directory_manager import DirectoryManager
from ...models.config_models import CSLBSyncConfig
from ..ui.display import create_error_display, create_status_panel
from ..ui.formatters import format_timestamp
from ..utils.async_runner import async_command
from ..utils.config_loader import load_command_config


@click.command()
@click.pass_context
@async_command
async def status(ctx: click.Context) -> None:
    """
    Check system status and component health.

    Reports:
    - Working directory contents (raw PDFs, cached text, CSV files)
    - The most recent sync report
    - Whether the pdftotext tool can be found
    """
    console: Console = ctx.obj["console"]

    try:
        config = await load_command_config(ctx)
    except ConfigurationError as e:
        console.print(create_error_display(e, "Loading configuration"))
        ctx.exit(1)
        return

    directories = DirectoryManager(config.storage)
    storage_status = check_storage_health(directories)
    tool_status = check_extraction_tool(config)
    report_status = check_last_report(directories.logs_dir)

    console.print(
        Columns(
            [
                create_status_panel("Storage", storage_status),
                create_status_panel("Text Extraction", tool_status),
                create_status_panel("Last Sync", report_status),
            ],
            equal=True,
        )
    )

    if storage_status["healthy"] and tool_status["healthy"]:
        console.print("\n[bold green]✓ All systems operational[/bold green]")
        ctx.exit(0)
    else:
        console.print("\n[bold yellow]⚠ Some systems have issues[/bold yellow]")
        ctx.exit(1)


def _count(directory: Path, suffix: str) -> int:
    if not directory.is_dir():
        return 0
    return sum(
        1 for p in directory.iterdir() if p.is_file() and p.suffix.lower() == suffix
    )


def check_storage_health(directories: DirectoryManager) -> Dict[str, Any]:
    """Count working files; healthy when every working directory exists."""
    missing = [
        str(d) for d in directories.storage.all_directories() if not d.is_dir()
    ]
    details = [
        f"Raw PDFs: {_count(directories.raw_dir, '.pdf')}",
        f"Cached text: {_count(directories.text_dir, '.txt')}",
        f"CSV files: {_count(directories.csv_dir, '.csv')}",
        f"Archived: {_count(directories.archive_dir, '.pdf') + _count(directories.archive_dir, '.csv')}",
    ]
    status_info: Dict[str, Any] = {
        "healthy": not missing,
        "details": "\n".join(details),
    }
    if missing:
        status_info["error"] = "Missing directories: " + ", ".join(missing)
    return status_info


def check_extraction_tool(config: CSLBSyncConfig) -> Dict[str, Any]:
    command = config.extraction.command
    resolved = shutil.which(command)
    if resolved:
        return {"healthy": True, "details": f"{command}: {resolved}"}
    return {
        "healthy": False,
        "details": f"{command} not found on PATH",
        "error": "Install poppler-utils or set CSLB_SYNC_PDFTOTEXT",
    }


def check_last_report(logs_dir: Path, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Describe the newest sync report; a missing report is not a failure."""
    reports = sorted(logs_dir.glob("sync-report-*.txt")) if logs_dir.is_dir() else []
    if not reports:
        return {"healthy": True, "details": "No sync reports yet"}

    latest = max(reports, key=lambda p: p.stat().st_mtime)
    modified = datetime.fromtimestamp(latest.stat().st_mtime)
    return {
        "healthy": True,
        "details": f"{latest.name}\n{format_timestamp(modified, now)}",
    }
