"""
Exception hierarchy for the ingestion pipeline.

Stage-level errors (acquisition, report writing) are fatal to a run.
Per-file errors (extraction, parsing, serialization) are recorded against
the file that raised them and the run moves on to the next document.
"""

from typing import Optional


class CSLBSyncError(Exception):
    """Base exception for pipeline errors."""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.filename = filename
        self.operation = operation


class AcquisitionError(CSLBSyncError):
    """Working directories cannot be created or read."""

    pass


class ExtractionError(CSLBSyncError):
    """Text extraction failed for a source document."""

    pass


class ParseError(CSLBSyncError):
    """Unexpected failure while parsing extracted text."""

    pass


class SerializationError(CSLBSyncError):
    """Parsed records could not be written to CSV."""

    pass


class ReportWriteError(CSLBSyncError):
    """The run report could not be persisted."""

    def __init__(
        self,
        message: str,
        report_path: Optional[str] = None,
        report_text: Optional[str] = None,
    ):
        super().__init__(message, operation="write_report")
        self.report_path = report_path
        self.report_text = report_text


class DownloadError(CSLBSyncError):
    """A listing document could not be fetched."""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, filename=filename, operation="download")
        self.status_code = status_code
