"""
Unit tests for CSV serialization.
"""

import csv
import io
from unittest.mock import patch

import pytest

from cslb_sync.core.csv_writer import CSVRecordWriter, render_csv, resolve_column
from cslb_sync.models.errors import SerializationError
from cslb_sync.models.record_models import (
    BUSINESS_COLUMNS,
    PERSONNEL_COLUMNS,
    BusinessRecord,
    PersonnelRecord,
    RecordType,
)


def business_record(**fields):
    return BusinessRecord(
        license_number="1000001",
        line_number=4,
        raw_text="1000001 ACME CONSTRUCTION INC ACTIVE",
        parsed_fields=fields,
    )


class TestResolveColumn:
    """Test column value lookup."""

    def test_parsed_field_wins(self):
        record = business_record(business_name="ACME")

        assert resolve_column(record, "business_name") == "ACME"

    def test_falls_back_to_attribute(self):
        record = business_record()

        assert resolve_column(record, "license_number") == "1000001"
        assert resolve_column(record, "line_number") == "4"

    def test_missing_value_is_empty(self):
        assert resolve_column(business_record(), "phone") == ""

    def test_lists_are_joined_with_semicolons(self):
        record = business_record(classifications=["C-10", "C-36"])

        assert resolve_column(record, "classifications") == "C-10;C-36"

    def test_personnel_attributes(self):
        record = PersonnelRecord(
            license_number="1000001",
            person_name="SMITH, JOHN",
            line_number=2,
            raw_text="1000001 SMITH, JOHN",
        )

        assert resolve_column(record, "person_name") == "SMITH, JOHN"
        assert resolve_column(record, "title") == ""


class TestRenderCSV:
    """Test CSV text rendering."""

    def test_header_only_for_no_records(self):
        assert render_csv([], PERSONNEL_COLUMNS) == ",".join(PERSONNEL_COLUMNS) + "\n"

    def test_values_with_commas_and_quotes_are_quoted(self):
        record = business_record(business_name='SMITH, "JR" & SONS')

        text = render_csv([record], BUSINESS_COLUMNS)

        assert '"SMITH, ""JR"" & SONS"' in text
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][BUSINESS_COLUMNS.index("business_name")] == 'SMITH, "JR" & SONS'

    def test_plain_values_are_not_quoted(self):
        text = render_csv([business_record(status="ACTIVE")], BUSINESS_COLUMNS)

        assert text.splitlines()[1].startswith("1000001,,ACTIVE,")

    def test_row_count_matches_records(self):
        records = [business_record(), business_record()]

        rows = list(csv.reader(io.StringIO(render_csv(records, BUSINESS_COLUMNS))))

        assert len(rows) == 3
        assert rows[0] == BUSINESS_COLUMNS


class TestCSVRecordWriter:
    """Test CSV file output."""

    @pytest.mark.asyncio
    async def test_writes_csv_named_after_source(self, tmp_path):
        writer = CSVRecordWriter(tmp_path / "csv")

        csv_path = await writer.write_records(
            [business_record(business_name="ACME")], "PL250307", RecordType.BUSINESS
        )

        assert csv_path == tmp_path / "csv" / "PL250307.csv"
        rows = list(csv.reader(io.StringIO(csv_path.read_text(encoding="utf-8"))))
        assert rows[0] == BUSINESS_COLUMNS
        assert rows[1][1] == "ACME"
        assert not (tmp_path / "csv" / "PL250307.csv.tmp").exists()

    @pytest.mark.asyncio
    async def test_rerun_replaces_existing_file(self, tmp_path):
        writer = CSVRecordWriter(tmp_path)
        await writer.write_records([business_record()] * 3, "PL250307", RecordType.BUSINESS)

        csv_path = await writer.write_records([], "PL250307", RecordType.BUSINESS)

        assert csv_path.read_text(encoding="utf-8").count("\n") == 1

    @pytest.mark.asyncio
    async def test_write_failure_raises_serialization_error(self, tmp_path):
        writer = CSVRecordWriter(tmp_path)

        with patch("pathlib.Path.replace", side_effect=OSError("disk full")):
            with pytest.raises(SerializationError) as exc_info:
                await writer.write_records(
                    [], "PP250307", RecordType.PERSONNEL, source_filename="PP250307.pdf"
                )

        assert "PP250307.pdf" in str(exc_info.value)
        assert exc_info.value.filename == "PP250307.pdf"
        assert not (tmp_path / "PP250307.csv.tmp").exists()
