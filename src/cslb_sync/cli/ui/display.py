"""
Rich display components for run summaries, status and errors
"""

from typing import Any, Dict, Optional, Sequence

from rich.panel import Panel
from rich.table import Table

from ...models.session_models import DownloadResult, FileResult, SyncSession
from .formatters import format_config_value, format_duration, format_success_rate


def create_config_table(
    config_data: Dict[str, Any], title: str = "Configuration"
) -> Table:
    """
    Create a Rich table from a nested configuration dump
    """
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for section, values in config_data.items():
        if isinstance(values, dict):
            for key, value in values.items():
                table.add_row(f"{section}.{key}", format_config_value(value))
        else:
            table.add_row(section, format_config_value(values))

    return table


def create_status_panel(component: str, status_info: Dict[str, Any]) -> Panel:
    """
    Create a status panel for a system component
    """
    is_healthy = status_info.get("healthy", False)

    if is_healthy:
        color = "green"
        status_text = "✓ Healthy"
    else:
        color = "red"
        status_text = "✗ Unhealthy"

    content_lines = [f"[{color}]{status_text}[/{color}]"]

    if "details" in status_info and status_info["details"]:
        content_lines.append("")
        content_lines.append(status_info["details"])

    if not is_healthy and "error" in status_info:
        content_lines.append("")
        content_lines.append(f"[red]Error: {status_info['error']}[/red]")

    return Panel(
        "\n".join(content_lines), title=component, border_style=color, padding=(0, 1)
    )


def create_session_summary(session: SyncSession) -> Table:
    """
    Create the end-of-run summary table for a pipeline session
    """
    table = Table(title=f"Sync {session.session_id}", show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Mode", session.mode.value)
    table.add_row("Duration", format_duration(session.duration_seconds))
    table.add_row(
        "Files",
        f"{session.successful_files}/{session.total_files} successful",
    )
    table.add_row(
        "Success rate",
        format_success_rate(session.successful_files, session.total_files),
    )
    table.add_row("Contractor records", str(session.contractor_records))
    table.add_row("Personnel records", str(session.personnel_records))
    table.add_row("Total records", str(session.total_records))
    if session.archive_result is not None:
        table.add_row("Archived files", str(session.archive_result.archived_count))
    table.add_row("Errors", str(len(session.errors)))

    return table


def create_file_results_table(results: Sequence[FileResult]) -> Table:
    """
    Create a per-file table for parse results
    """
    table = Table(title="Processed Files", show_header=True, header_style="bold blue")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Records", justify="right")
    table.add_column("Result")

    for result in results:
        kind = result.record_type.value if result.record_type else "unknown"
        if result.success:
            outcome = f"[green]✓ {result.csv_file.name if result.csv_file else ''}[/green]"
        else:
            outcome = f"[red]✗ {result.error}[/red]"
        table.add_row(result.filename, kind, str(result.records_parsed), outcome)

    return table


def create_download_table(results: Sequence[DownloadResult]) -> Table:
    """
    Create a per-file table for download results
    """
    table = Table(title="Downloads", show_header=True, header_style="bold blue")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Result")

    for result in results:
        if result.success:
            note = "already present" if result.already_exists else "downloaded"
            outcome = f"[green]✓ {note}[/green]"
        else:
            outcome = f"[red]✗ {result.error}[/red]"
        table.add_row(result.filename, str(result.file_size), outcome)

    return table


def create_error_display(error: Exception, context: Optional[str] = None) -> Panel:
    """
    Create formatted error display with suggestions
    """
    error_lines = []

    if context:
        error_lines.append(f"Context: {context}")
        error_lines.append("")

    error_lines.append(f"Error: {str(error)}")
    error_lines.append("")

    error_type = type(error).__name__.lower()
    message = str(error).lower()
    suggestions = []

    if "config" in error_type or "config" in message:
        suggestions.extend(
            [
                "Check configuration file: cslb-sync config show",
                "Create a default configuration: cslb-sync config init",
                "Verify CSLB_SYNC_* environment variables",
            ]
        )

    elif "pdftotext" in message or "extraction" in error_type:
        suggestions.extend(
            [
                "Install poppler-utils (apt install poppler-utils / brew install poppler)",
                "Set the extraction command: CSLB_SYNC_PDFTOTEXT=/path/to/pdftotext",
                "Check system status: cslb-sync status",
            ]
        )

    elif "permission" in message or "directory" in message:
        suggestions.extend(
            [
                "Check write permissions for the data and logs directories",
                "Set a different data directory: CSLB_SYNC_BASE_PATH",
                "Verify parent directory exists",
            ]
        )

    elif "timeout" in message or "connect" in message:
        suggestions.extend(
            [
                "Check network connectivity",
                "Retry the operation",
                "Use --verbose to see detailed progress",
            ]
        )

    else:
        suggestions.extend(
            [
                "Run with --verbose for detailed error information",
                "Check system status: cslb-sync status",
                "Verify configuration: cslb-sync config show",
            ]
        )

    error_lines.append("Suggestions:")
    for suggestion in suggestions:
        error_lines.append(f"  • {suggestion}")

    return Panel(
        "\n".join(error_lines),
        title="[red]Error[/red]",
        border_style="red",
        padding=(1, 2),
    )
