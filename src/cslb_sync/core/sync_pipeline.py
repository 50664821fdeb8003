"""
CSLB Sync Pipeline - end-to-end run orchestration.

Runs acquisition, per-file extraction/parsing/serialization, archiving and
reporting in that order. Stage results are folded into a ``SyncSession``
here; no stage writes to the session itself.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.config_models import CSLBSyncConfig
from ..models.errors import ParseError
from ..models.session_models import (
    FileResult,
    ParseStageResult,
    PipelineResult,
    SyncMode,
    SyncSession,
)
from .acquisition import AcquisitionStage
from .archiver import FileArchiver
from .csv_writer import CSVRecordWriter
from .directory_manager import DirectoryManager
from .listing_processor import ListingProcessor, ProgressCallback
from .report_generator import ReportWriter, render_processing_report, render_sync_report
from .text_extractor import PDFTextExtractor

logger = logging.getLogger(__name__)


class CSLBSyncPipeline:
    """
    Orchestrates one ingestion run over the configured working directories.

    Per-file failures are recorded and the run continues. Any failure outside
    the per-file loop ends the run early with ``success=False``; the report
    is written either way.
    """

    def __init__(self, config: Optional[CSLBSyncConfig] = None):
        self.config = config or CSLBSyncConfig()
        self.directories = DirectoryManager(self.config.storage)
        self.acquisition = AcquisitionStage(
            self.directories, self.config.pipeline.daily_prefixes
        )
        self.extractor = PDFTextExtractor(
            self.directories.text_dir, self.config.extraction
        )
        self.writer = CSVRecordWriter(self.directories.csv_dir)
        self.processor = ListingProcessor(self.extractor, self.writer)
        self.archiver = FileArchiver(
            self.directories.archive_dir, self.config.storage.retention_days
        )
        self.report_writer = ReportWriter(self.directories.logs_dir)

    async def run_pipeline(
        self,
        mode: SyncMode = SyncMode.MANUAL,
        progress_callback: Optional[ProgressCallback] = None,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> PipelineResult:
        """
        Execute a full pipeline run.

        Args:
            mode: Run mode; only daily runs archive aged files
            progress_callback: Called as ``(filename, index, total)`` per file
            today: Override the date used for expected daily listings
            now: Override the reference time for the retention cutoff

        Returns:
            PipelineResult with the finalized session and report path

        Raises:
            ReportWriteError: If the report cannot be persisted
        """
        session = SyncSession(mode=mode)
        logger.info(f"Starting CSLB data sync pipeline - {session.session_id}")
        logger.info(f"Mode: {mode.value}")

        failure: Optional[str] = None
        try:
            session.merge_downloads(await self.acquisition.acquire(mode, today=today))

            logger.info("Step 2: Parsing PDF files...")
            stage = await self.processor.process_files(
                self.directories.list_source_pdfs(),
                delay_seconds=self.config.pipeline.file_delay_seconds,
                progress_callback=progress_callback,
            )
            session.merge_parse_stage(stage)

            if mode.archives:
                session.merge_archive(
                    await self.archiver.archive_old_files(
                        [self.directories.raw_dir, self.directories.csv_dir], now=now
                    )
                )
        except Exception as e:
            failure = str(e)
            session.record_error(f"Pipeline failed: {failure}")
            logger.error(f"Pipeline failed: {failure}", exc_info=self.config.debug_mode)

        session.finalize()

        logger.info("Step 4: Generating report...")
        report = render_sync_report(session, csv_dir=self.directories.csv_dir)
        report_path = self.report_writer.write(
            report, f"sync-report-{session.session_id}.txt"
        )

        if failure is None:
            logger.info(
                f"Pipeline completed: {session.successful_files}/{session.total_files} "
                f"files, {session.total_records} records"
            )

        return PipelineResult(
            success=failure is None,
            session=session,
            report_path=report_path,
            error=failure,
        )

    async def parse_files(
        self,
        filename: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
        generated_at: Optional[datetime] = None,
    ) -> "ParseRunResult":
        """
        Process one named PDF, or every PDF in the raw directory, and write a
        processing report.

        Raises:
            ParseError: If a named file does not exist in the raw directory
            ReportWriteError: If the report cannot be persisted
        """
        self.directories.ensure_directories()

        if filename:
            pdf_path = self.directories.raw_path_for(filename)
            if not pdf_path.is_file():
                raise ParseError(f"File not found: {pdf_path}", filename=filename)
            pdf_paths: Sequence[Path] = [pdf_path]
        else:
            pdf_paths = self.directories.list_source_pdfs()

        stage = await self.processor.process_files(
            pdf_paths,
            delay_seconds=self.config.pipeline.file_delay_seconds,
            progress_callback=progress_callback,
        )

        generated_at = generated_at or datetime.now()
        report = render_processing_report(stage.file_results, generated_at)
        report_path = self.report_writer.write(
            report,
            f"pdf-processing-report-{generated_at.strftime('%Y%m%d-%H%M%S')}.txt",
        )
        return ParseRunResult(stage=stage, report_path=report_path)


class ParseRunResult:
    """Outcome of a stand-alone parse run."""

    def __init__(self, stage: ParseStageResult, report_path: Path):
        self.stage = stage
        self.report_path = report_path

    @property
    def file_results(self) -> List[FileResult]:
        return self.stage.file_results

    @property
    def has_failures(self) -> bool:
        return bool(self.stage.failed)
