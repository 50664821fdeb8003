"""
CSV serialization for parsed listing records.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from ..models.errors import SerializationError
from ..models.record_models import (
    BUSINESS_COLUMNS,
    PERSONNEL_COLUMNS,
    BusinessRecord,
    PersonnelRecord,
    RecordType,
)

logger = logging.getLogger(__name__)

ListingRecord = Union[BusinessRecord, PersonnelRecord]

COLUMNS_BY_TYPE = {
    RecordType.BUSINESS: BUSINESS_COLUMNS,
    RecordType.PERSONNEL: PERSONNEL_COLUMNS,
}


def resolve_column(record: ListingRecord, column: str) -> str:
    """Parsed-field map first, then the record attribute, else empty."""
    value: Any = record.parsed_fields.get(column)
    if value is None or value == "" or value == []:
        value = getattr(record, column, None)

    if value is None:
        return ""
    if isinstance(value, (list, tuple, set)):
        return ";".join(str(v) for v in value)
    return str(value)


def render_csv(records: Sequence[ListingRecord], columns: Sequence[str]) -> str:
    """Render records to CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(columns)
    for record in records:
        writer.writerow([resolve_column(record, column) for column in columns])
    return buffer.getvalue()


class CSVRecordWriter:
    """Writes one CSV per source document into the output directory."""

    def __init__(self, csv_dir: Path):
        self.csv_dir = csv_dir

    def output_path(self, stem: str) -> Path:
        return self.csv_dir / f"{stem}.csv"

    async def write_records(
        self,
        records: List[ListingRecord],
        stem: str,
        record_type: RecordType,
        source_filename: Optional[str] = None,
    ) -> Path:
        """
        Replace ``<csv_dir>/<stem>.csv`` with the given records.

        Raises:
            SerializationError: If the file cannot be written
        """
        csv_path = self.output_path(stem)
        source_filename = source_filename or f"{stem}.pdf"
        temp_path = csv_path.with_suffix(".csv.tmp")
        content = render_csv(records, COLUMNS_BY_TYPE[record_type])

        try:
            self.csv_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            temp_path.replace(csv_path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise SerializationError(
                f"Failed to write {csv_path.name} for {source_filename}: {e}",
                filename=source_filename,
                operation="write_records",
            ) from e

        logger.info(
            f"Saved {record_type.value} data to: {csv_path} ({len(records)} records)"
        )
        return csv_path
