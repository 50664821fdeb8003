"""
Retention-based archiving of aged listing files.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

from ..models.session_models import ArchiveResult

logger = logging.getLogger(__name__)


class FileArchiver:
    """Moves files older than the retention window into the archive directory."""

    def __init__(self, archive_dir: Path, retention_days: int = 30):
        self.archive_dir = archive_dir
        self.retention_days = retention_days

    def cutoff(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now()) - timedelta(days=self.retention_days)

    async def archive_old_files(
        self, source_dirs: Iterable[Path], now: Optional[datetime] = None
    ) -> ArchiveResult:
        """
        Archive files whose modification time is strictly before the cutoff.

        Failures are collected in the result; nothing here aborts a run.
        """
        logger.info("Step 3: Archiving old files...")

        cutoff_ts = self.cutoff(now).timestamp()
        result = ArchiveResult()

        try:
            self.archive_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            result.errors.append(f"Archive failed: {e}")
            logger.warning(f"Archive step failed: {e}")
            return result

        for source_dir in source_dirs:
            if not source_dir.is_dir():
                continue
            for file_path in sorted(source_dir.iterdir()):
                if not file_path.is_file():
                    continue
                try:
                    if file_path.stat().st_mtime >= cutoff_ts:
                        continue
                    target = self.archive_dir / file_path.name
                    file_path.replace(target)
                    result.archived_files.append(target)
                    logger.debug(f"Archived {file_path} -> {target}")
                except OSError as e:
                    result.errors.append(f"Archive failed for {file_path.name}: {e}")
                    logger.warning(f"Could not archive {file_path}: {e}")

        logger.info(f"Archived {result.archived_count} old files")
        return result
