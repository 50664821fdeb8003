"""
Run session and stage result models.

Each pipeline stage returns its own result value. The orchestrator merges
those values into the run's ``SyncSession``; stages never touch the session
directly.
"""

import random
import string
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .record_models import RecordType


class SyncMode(Enum):
    """Pipeline run modes."""

    DAILY = "daily"
    MANUAL = "manual"
    TEST = "test"

    @property
    def archives(self) -> bool:
        """Only daily runs move aged files to the archive."""
        return self is SyncMode.DAILY


def generate_session_id(now: Optional[datetime] = None) -> str:
    """Build a session id of the form SYNC_<YYYYMMDD>_<HHMMSS>_<suffix>."""
    now = now or datetime.now()
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=4))
    return f"SYNC_{now.strftime('%Y%m%d')}_{now.strftime('%H%M%S')}_{suffix}"


@dataclass
class DownloadResult:
    """Outcome of acquiring one source document."""

    filename: str
    success: bool
    file_size: int = 0
    download_time: float = 0.0
    already_exists: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "success": self.success,
            "file_size": self.file_size,
            "download_time": self.download_time,
            "already_exists": self.already_exists,
            "error": self.error,
        }


@dataclass(frozen=True)
class FileResult:
    """Outcome of extracting, parsing and serializing one source document."""

    filename: str
    success: bool
    record_type: Optional[RecordType] = None
    records_parsed: int = 0
    csv_file: Optional[Path] = None
    error: Optional[str] = None

    @classmethod
    def failed(
        cls, filename: str, error: str, record_type: Optional[RecordType] = None
    ) -> "FileResult":
        return cls(
            filename=filename, success=False, record_type=record_type, error=error
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "success": self.success,
            "type": self.record_type.value if self.record_type else None,
            "records_parsed": self.records_parsed,
            "csv_file": str(self.csv_file) if self.csv_file else None,
            "error": self.error,
        }


@dataclass
class ParseStageResult:
    """Accumulated output of the extraction and parse stage."""

    file_results: List[FileResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def add(self, result: FileResult) -> None:
        self.file_results.append(result)
        if not result.success:
            self.errors.append(f"{result.filename}: {result.error}")

    @property
    def successful(self) -> List[FileResult]:
        return [r for r in self.file_results if r.success]

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.file_results if not r.success]

    def records_for(self, record_type: RecordType) -> int:
        return sum(
            r.records_parsed for r in self.successful if r.record_type is record_type
        )


@dataclass
class ArchiveResult:
    """Outcome of the retention-based archiving step."""

    archived_files: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def archived_count(self) -> int:
        return len(self.archived_files)


@dataclass
class SyncSession:
    """Counters, results and errors for one pipeline run."""

    mode: SyncMode = SyncMode.MANUAL
    session_id: str = field(default_factory=generate_session_id)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    download_results: List[DownloadResult] = field(default_factory=list)
    parse_results: List[FileResult] = field(default_factory=list)
    archive_result: Optional[ArchiveResult] = None

    total_files: int = 0
    successful_files: int = 0
    failed_files: int = 0
    contractor_records: int = 0
    personnel_records: int = 0

    errors: List[str] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        return self.contractor_records + self.personnel_records

    @property
    def archived_files(self) -> List[Path]:
        if self.archive_result is None:
            return []
        return list(self.archive_result.archived_files)

    @property
    def is_finalized(self) -> bool:
        return self.end_time is not None

    @property
    def duration_seconds(self) -> float:
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()

    @property
    def success_rate(self) -> int:
        if self.total_files == 0:
            return 0
        return round(self.successful_files / self.total_files * 100)

    def merge_downloads(self, results: List[DownloadResult]) -> None:
        self.download_results = list(results)

    def merge_parse_stage(self, stage: ParseStageResult) -> None:
        """Fold the parse stage result into the session counters."""
        self.parse_results = list(stage.file_results)
        self.total_files = len(stage.file_results)
        self.successful_files = len(stage.successful)
        self.failed_files = len(stage.failed)
        self.contractor_records = stage.records_for(RecordType.BUSINESS)
        self.personnel_records = stage.records_for(RecordType.PERSONNEL)
        self.errors.extend(stage.errors)

    def merge_archive(self, result: ArchiveResult) -> None:
        self.archive_result = result
        self.errors.extend(result.errors)

    def record_error(self, message: str) -> None:
        self.errors.append(message)

    def finalize(self, end_time: Optional[datetime] = None) -> None:
        """Stamp the end time. Later calls keep the first stamp."""
        if self.end_time is None:
            self.end_time = end_time or datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "mode": self.mode.value,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "total_files": self.total_files,
            "successful_files": self.successful_files,
            "failed_files": self.failed_files,
            "total_records": self.total_records,
            "contractor_records": self.contractor_records,
            "personnel_records": self.personnel_records,
            "errors": list(self.errors),
            "downloads": [r.to_dict() for r in self.download_results],
            "files": [r.to_dict() for r in self.parse_results],
        }


@dataclass
class PipelineResult:
    """Value returned to the caller of a pipeline run."""

    success: bool
    session: SyncSession
    report_path: Optional[Path] = None
    error: Optional[str] = None
