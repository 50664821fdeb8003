"""
Extraction, parsing and serialization of listing documents.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..models.errors import CSLBSyncError, ParseError
from ..models.record_models import RecordType
from ..models.session_models import FileResult, ParseStageResult
from .business_parser import parse_business_listing
from .csv_writer import CSVRecordWriter
from .personnel_parser import parse_personnel_listing
from .text_extractor import PDFTextExtractor

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class ListingProcessor:
    """Turns listing PDFs into CSV files, one document at a time."""

    def __init__(self, extractor: PDFTextExtractor, writer: CSVRecordWriter):
        self.extractor = extractor
        self.writer = writer

    async def process_file(self, pdf_path: Path) -> FileResult:
        """
        Extract, parse and serialize one PDF.

        Raises:
            ExtractionError: If no text could be obtained
            ParseError: If parsing fails or the prefix is unknown
            SerializationError: If the CSV cannot be written
        """
        filename = pdf_path.name
        record_type = RecordType.from_filename(filename)
        if record_type is None:
            raise ParseError(f"Unknown file type: {filename}", filename=filename)

        text = await self.extractor.extract_text(pdf_path)

        try:
            if record_type is RecordType.BUSINESS:
                records: List = parse_business_listing(text, filename)
            else:
                records = parse_personnel_listing(text, filename)
        except Exception as e:
            raise ParseError(
                f"Failed to parse {filename}: {e}", filename=filename, operation="parse"
            ) from e

        csv_path = await self.writer.write_records(
            records, pdf_path.stem, record_type, source_filename=filename
        )

        return FileResult(
            filename=filename,
            success=True,
            record_type=record_type,
            records_parsed=len(records),
            csv_file=csv_path,
        )

    async def process_files(
        self,
        pdf_paths: Sequence[Path],
        delay_seconds: float = 0.0,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ParseStageResult:
        """
        Process documents in order; a failing file never stops the loop.
        """
        stage = ParseStageResult()
        total = len(pdf_paths)
        logger.info(f"Found {total} PDF files to process")

        for index, pdf_path in enumerate(pdf_paths, start=1):
            if progress_callback:
                progress_callback(pdf_path.name, index, total)

            result = await self._process_guarded(pdf_path)
            stage.add(result)

            if result.success:
                logger.info(f"✓ {result.filename} → {result.records_parsed} records")
            else:
                logger.warning(f"✗ {result.filename} → {result.error}")

            if delay_seconds and index < total:
                await asyncio.sleep(delay_seconds)

        return stage

    async def _process_guarded(self, pdf_path: Path) -> FileResult:
        record_type = RecordType.from_filename(pdf_path.name)
        try:
            return await self.process_file(pdf_path)
        except CSLBSyncError as e:
            return FileResult.failed(pdf_path.name, str(e), record_type)
        except Exception as e:
            logger.exception(f"Unexpected error processing {pdf_path.name}")
            return FileResult.failed(
                pdf_path.name, f"Unexpected error processing {pdf_path.name}: {e}", record_type
            )
