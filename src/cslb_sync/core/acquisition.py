"""
Acquisition stage: bookkeeping over the raw document directory.

No network fetch happens here. Files already present count as acquired;
``CSLBDownloader`` is the component that actually retrieves documents.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from ..models.errors import AcquisitionError
from ..models.session_models import DownloadResult, SyncMode
from .directory_manager import DirectoryManager, listing_filename

logger = logging.getLogger(__name__)

NOT_YET_AVAILABLE = "File not found (may not be available yet)"


class AcquisitionStage:
    """Reports which listing documents are present for a run."""

    def __init__(
        self,
        directories: DirectoryManager,
        daily_prefixes: Sequence[str] = ("PL", "PP"),
    ):
        self.directories = directories
        self.daily_prefixes = list(daily_prefixes)

    async def acquire(
        self, mode: SyncMode, today: Optional[date] = None
    ) -> List[DownloadResult]:
        """
        Build the acquisition results for a run.

        Args:
            mode: Run mode; daily runs also check for today's listings
            today: Override the current date (for testing)

        Returns:
            One result per existing PDF, plus a failed result for every
            expected daily listing that is missing

        Raises:
            AcquisitionError: If the working directories are unusable
        """
        logger.info("Step 1: Checking listing documents...")

        self.directories.ensure_directories()
        results: List[DownloadResult] = []

        for pdf_path in self.directories.list_source_pdfs():
            try:
                file_size = pdf_path.stat().st_size
            except OSError as e:
                raise AcquisitionError(
                    f"Cannot stat {pdf_path.name}: {e}",
                    filename=pdf_path.name,
                    operation="acquire",
                ) from e
            results.append(
                DownloadResult(
                    filename=pdf_path.name,
                    success=True,
                    file_size=file_size,
                    already_exists=True,
                )
            )

        if mode is SyncMode.DAILY:
            results.extend(self._missing_daily_listings(today or date.today()))

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        logger.info(f"Found {successful} files, {failed} missing")
        for result in results:
            if not result.success:
                logger.warning(f"  - {result.filename}: {result.error}")

        return results

    def _missing_daily_listings(self, today: date) -> List[DownloadResult]:
        missing = []
        for prefix in self.daily_prefixes:
            filename = listing_filename(prefix, today)
            if not self.directories.raw_path_for(filename).exists():
                missing.append(
                    DownloadResult(filename=filename, success=False, error=NOT_YET_AVAILABLE)
                )
        return missing
