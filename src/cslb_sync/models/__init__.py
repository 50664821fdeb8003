"""
Data models for cslb-sync.
"""

from .config_models import (
    CSLBSyncConfig,
    DownloadConfig,
    ExtractionConfig,
    LoggingConfig,
    PipelineConfig,
    StorageConfig,
)
from .errors import (
    AcquisitionError,
    CSLBSyncError,
    DownloadError,
    ExtractionError,
    ParseError,
    ReportWriteError,
    SerializationError,
)
from .record_models import (
    BusinessRecord,
    LicenseStatus,
    PersonnelRecord,
    PersonnelTitle,
    RecordType,
)
from .session_models import (
    ArchiveResult,
    DownloadResult,
    FileResult,
    ParseStageResult,
    PipelineResult,
    SyncMode,
    SyncSession,
)

__all__ = [
    "CSLBSyncConfig",
    "DownloadConfig",
    "ExtractionConfig",
    "LoggingConfig",
    "PipelineConfig",
    "StorageConfig",
    "CSLBSyncError",
    "AcquisitionError",
    "DownloadError",
    "ExtractionError",
    "ParseError",
    "ReportWriteError",
    "SerializationError",
    "BusinessRecord",
    "PersonnelRecord",
    "LicenseStatus",
    "PersonnelTitle",
    "RecordType",
    "ArchiveResult",
    "DownloadResult",
    "FileResult",
    "ParseStageResult",
    "PipelineResult",
    "SyncMode",
    "SyncSession",
]
