"""
Business listing (PL) parser.

Records span several lines: a line that starts with a license number opens
a record and following lines continue it until the next license line or
the end of the text.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..models.record_models import BusinessRecord
from .field_patterns import LICENSE_LINE, apply_field_patterns

logger = logging.getLogger(__name__)


class ParserState(Enum):
    """Business parser states."""

    IDLE = "idle"
    OPEN = "open"


class BusinessListingParser:
    """
    Two-state machine over the lines of a business listing.

    ``IDLE`` discards lines until a license line appears. ``OPEN`` holds the
    current record; a new license line flushes it and opens the next one,
    other non-blank lines are continuation text.
    """

    def __init__(self) -> None:
        self.state = ParserState.IDLE
        self.current: Optional[BusinessRecord] = None
        self.records: List[BusinessRecord] = []
        self.discarded_lines = 0

    def feed_line(self, line_number: int, line: str) -> None:
        """Process one raw line; ``line_number`` is 1-based."""
        trimmed = line.strip()
        if not trimmed:
            return

        license_match = LICENSE_LINE.match(trimmed)
        if license_match:
            self._flush()
            self._open(license_match.group(1), license_match.group(2), line_number, trimmed)
            return

        if self.state is ParserState.OPEN and self.current is not None:
            self.current.append_continuation(trimmed)
            apply_field_patterns(self.current.parsed_fields, trimmed)
        else:
            self.discarded_lines += 1

    def finish(self) -> List[BusinessRecord]:
        """Flush the open record and return every record in input order."""
        self._flush()
        return self.records

    def _open(self, license_number: str, remainder: str, line_number: int, raw: str) -> None:
        record = BusinessRecord(
            license_number=license_number,
            line_number=line_number,
            raw_text=raw,
        )
        apply_field_patterns(record.parsed_fields, remainder)
        self.current = record
        self.state = ParserState.OPEN

    def _flush(self) -> None:
        if self.state is ParserState.OPEN and self.current is not None:
            self.records.append(self.current)
        self.current = None
        self.state = ParserState.IDLE


def parse_business_lines(lines: Iterable[str]) -> List[BusinessRecord]:
    parser = BusinessListingParser()
    for line_number, line in enumerate(lines, start=1):
        parser.feed_line(line_number, line)
    return parser.finish()


def parse_business_listing(text: str, filename: str = "") -> List[BusinessRecord]:
    """Parse the extracted text of a PL document."""
    logger.debug(f"Parsing business listing: {filename}")
    records = parse_business_lines(text.split("\n"))
    logger.info(f"Parsed {len(records)} contractors from {filename}")
    return records
