"""
Human-readable run reports.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.errors import ReportWriteError
from ..models.record_models import RecordType
from ..models.session_models import DownloadResult, FileResult, SyncSession

logger = logging.getLogger(__name__)


def format_file_size(num_bytes: int) -> str:
    """Format a byte count, e.g. 1536 -> '1.5 KB'."""
    sizes = ["Bytes", "KB", "MB", "GB"]
    if num_bytes <= 0:
        return "0 Bytes"
    index = 0
    while num_bytes >= 1024 ** (index + 1) and index < len(sizes) - 1:
        index += 1
    value = round(num_bytes / 1024**index, 2)
    return f"{value:g} {sizes[index]}"


def _percent(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole else 0


def _lines(items: Sequence[str]) -> str:
    return "\n".join(items) if items else "  (none)"


def render_sync_report(session: SyncSession, csv_dir: Optional[Path] = None) -> str:
    """Render the full report for a pipeline session."""
    end_time = session.end_time or datetime.now()
    duration_minutes = round(session.duration_seconds / 60)

    downloaded = [r for r in session.download_results if r.success]
    missing = [r for r in session.download_results if not r.success]
    parsed_ok = [r for r in session.parse_results if r.success]
    parsed_failed = [r for r in session.parse_results if not r.success]

    sections: List[str] = [
        "CSLB Data Sync Pipeline Report",
        "==============================",
        f"Session ID: {session.session_id}",
        f"Mode: {session.mode.value}",
        f"Start Time: {session.start_time.isoformat()}",
        f"End Time: {end_time.isoformat()}",
        f"Duration: {duration_minutes} minutes",
        "",
        "DOWNLOAD RESULTS:",
        "=================",
        f"Files Attempted: {len(session.download_results)}",
        f"Files Downloaded: {len(downloaded)}",
        f"Download Failures: {len(missing)}",
        "",
        "Downloaded Files:",
        _lines(
            [
                f"  ✓ {r.filename} ({format_file_size(r.file_size)})"
                + (" [already existed]" if r.already_exists else "")
                for r in downloaded
            ]
        ),
    ]

    if missing:
        sections += [
            "",
            "Download Failures:",
            _lines([f"  ✗ {r.filename} - {r.error}" for r in missing]),
        ]

    sections += [
        "",
        "PARSING RESULTS:",
        "================",
        f"Files Processed: {session.total_files}",
        f"Files Successful: {session.successful_files}",
        f"Files Failed: {session.failed_files}",
        f"Success Rate: {session.success_rate}%",
        "",
        f"Total Records Extracted: {session.total_records}",
        f"  - Contractor Records: {session.contractor_records}",
        f"  - Personnel Records: {session.personnel_records}",
        "",
        "Successful Parsing:",
        _lines([_file_line(r) for r in parsed_ok]),
    ]

    if parsed_failed:
        sections += [
            "",
            "Parsing Failures:",
            _lines([f"  ✗ {r.filename} - {r.error}" for r in parsed_failed]),
        ]

    sections += [
        "",
        "CSV FILES GENERATED:",
        "====================",
        _lines([f"  → {r.csv_file}" for r in parsed_ok if r.csv_file]),
    ]

    if session.archive_result is not None:
        sections += [
            "",
            "ARCHIVE:",
            "========",
            f"Files Archived: {session.archive_result.archived_count}",
        ]

    if session.errors:
        sections += [
            "",
            "ERRORS:",
            "=======",
            "\n".join(f"  - {e}" for e in session.errors),
        ]

    outcome = "successfully" if not session.errors else "with errors"
    sections += [
        "",
        "SUMMARY:",
        "========",
        f"Pipeline completed {outcome}",
        f"{session.total_records} total records processed",
        f"{duration_minutes} minutes execution time",
    ]

    if csv_dir is not None:
        next_sync = (end_time + timedelta(days=1)).strftime("%a %b %d %Y")
        sections += [
            "",
            "NEXT STEPS:",
            "===========",
            f"1. Review CSV files in: {csv_dir}",
            "2. Import the CSV files into the contractor database",
            f"3. Schedule next sync: {next_sync}",
        ]

    return "\n".join(sections) + "\n"


def render_processing_report(
    results: Sequence[FileResult], generated_at: Optional[datetime] = None
) -> str:
    """Render the report for a stand-alone parse run."""
    generated_at = generated_at or datetime.now()
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    business = [r for r in successful if r.record_type is RecordType.BUSINESS]
    personnel = [r for r in successful if r.record_type is RecordType.PERSONNEL]

    sections = [
        "CSLB PDF Processing Report",
        "==========================",
        f"Date: {generated_at.isoformat()}",
        "",
        f"Files Processed: {len(results)}",
        f"Files Successful: {len(successful)}",
        f"Files Failed: {len(failed)}",
        f"Success Rate: {_percent(len(successful), len(results))}%",
        "",
        f"Total Records Extracted: {sum(r.records_parsed for r in successful)}",
        f"Business Files: {len(business)} "
        f"({sum(r.records_parsed for r in business)} contractors)",
        f"Personnel Files: {len(personnel)} "
        f"({sum(r.records_parsed for r in personnel)} personnel)",
        "",
        "Successful Processing:",
        _lines([_file_line(r) for r in successful]),
    ]
    if failed:
        sections += [
            "",
            "Failed Processing:",
            _lines([f"  ✗ {r.filename} - {r.error}" for r in failed]),
        ]
    sections += [
        "",
        "CSV Files Generated:",
        _lines([f"  → {r.csv_file}" for r in successful if r.csv_file]),
    ]
    return "\n".join(sections) + "\n"


def render_download_report(
    session_id: str,
    results: Sequence[DownloadResult],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the report for a download run."""
    generated_at = generated_at or datetime.now()
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    total_size = sum(r.file_size for r in successful)

    sections = [
        "CSLB Data Download Report",
        "=========================",
        f"Session ID: {session_id}",
        f"Date: {generated_at.isoformat()}",
        "",
        f"Files Attempted: {len(results)}",
        f"Files Downloaded: {len(successful)}",
        f"Files Failed: {len(failed)}",
        f"Success Rate: {_percent(len(successful), len(results))}%",
        f"Total Size: {format_file_size(total_size)}",
        "",
        "Successful Downloads:",
        _lines(
            [
                f"  ✓ {r.filename} ({format_file_size(r.file_size)})"
                + (" [already existed]" if r.already_exists else "")
                for r in successful
            ]
        ),
    ]
    if failed:
        sections += [
            "",
            "Failed Downloads:",
            _lines([f"  ✗ {r.filename} - {r.error}" for r in failed]),
        ]
    return "\n".join(sections) + "\n"


def _file_line(result: FileResult) -> str:
    kind = result.record_type.value if result.record_type else "unknown"
    return f"  ✓ {result.filename} → {result.records_parsed} {kind} records"


class ReportWriter:
    """Persists rendered reports into the logs directory."""

    def __init__(self, logs_dir: Path):
        self.logs_dir = logs_dir

    def write(self, report: str, filename: str) -> Path:
        """
        Write a report file.

        Raises:
            ReportWriteError: If the report cannot be written. The report
                text is logged first so it is not lost.
        """
        report_path = self.logs_dir / filename
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            report_path.write_text(report, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not write report to {report_path}: {e}")
            logger.error(report)
            raise ReportWriteError(
                f"Failed to write report {report_path}: {e}",
                report_path=str(report_path),
                report_text=report,
            ) from e

        logger.info(f"Report saved to: {report_path}")
        return report_path
