"""
Working directory management and path helpers.
"""

import logging
from datetime import date
from pathlib import Path
from typing import List

from ..models.config_models import StorageConfig
from ..models.errors import AcquisitionError

logger = logging.getLogger(__name__)


def format_listing_date(day: date) -> str:
    """CSLB listing date stamp, e.g. 2025-03-07 -> 250307."""
    return day.strftime("%y%m%d")


def listing_filename(prefix: str, day: date) -> str:
    return f"{prefix}{format_listing_date(day)}.pdf"


class DirectoryManager:
    """Creates the working tree and resolves per-document paths."""

    def __init__(self, storage: StorageConfig):
        self.storage = storage
        self.raw_dir = storage.raw_path
        self.text_dir = storage.text_path
        self.csv_dir = storage.csv_path
        self.archive_dir = storage.archive_path
        self.logs_dir = storage.logs

    def ensure_directories(self) -> List[Path]:
        """
        Create every working directory that is missing.

        Returns:
            The directories that were created by this call

        Raises:
            AcquisitionError: If a directory cannot be created
        """
        created = []
        for directory in self.storage.all_directories():
            if directory.is_dir():
                continue
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise AcquisitionError(
                    f"Cannot create directory {directory}: {e}",
                    operation="ensure_directories",
                ) from e
            logger.info(f"Created directory: {directory}")
            created.append(directory)
        return created

    def list_source_pdfs(self) -> List[Path]:
        """
        List listing PDFs in the raw directory in lexicographic order.

        Raises:
            AcquisitionError: If the raw directory cannot be read
        """
        try:
            entries = list(self.raw_dir.iterdir())
        except OSError as e:
            raise AcquisitionError(
                f"Cannot read raw document directory {self.raw_dir}: {e}",
                operation="list_source_pdfs",
            ) from e

        pdfs = [p for p in entries if p.is_file() and p.suffix.lower() == ".pdf"]
        return sorted(pdfs, key=lambda p: p.name)

    def raw_path_for(self, filename: str) -> Path:
        return self.raw_dir / filename
