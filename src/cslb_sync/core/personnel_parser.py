"""
Personnel listing (PP) parser.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..models.record_models import PersonnelRecord, PersonnelTitle
from .field_patterns import find_dates

logger = logging.getLogger(__name__)

TITLE_ALTERNATION = "|".join(t.value for t in PersonnelTitle)

# License number, then the uppercase name run; anything else ends the name
PERSONNEL_LINE = re.compile(r"^([0-9]+)\s+([A-Z][A-Z\s,.'&/-]*)")
TITLE_IN_NAME = re.compile(rf"\s+\b({TITLE_ALTERNATION})\b")


def split_name_and_title(line: str, name_run: str, run_end: int) -> Tuple[str, Optional[str]]:
    """
    Separate the person name from a role keyword inside the uppercase run.

    A run that stops partway through a word (``KIM Officer``) is cut back to
    the last whole word.
    """
    if run_end < len(line) and line[run_end].isalpha() and " " in name_run:
        name_run = name_run[: name_run.rfind(" ")]

    title = None
    title_match = TITLE_IN_NAME.search(name_run)
    if title_match:
        title = title_match.group(1)
        name_run = name_run[: title_match.start()]

    return name_run.strip().rstrip(",").strip(), title


def parse_personnel_line(line_number: int, line: str) -> Optional[PersonnelRecord]:
    """Parse one line; returns None when it is not a personnel line."""
    trimmed = line.strip()
    if not trimmed:
        return None

    match = PERSONNEL_LINE.match(trimmed)
    if not match:
        return None

    person_name, title = split_name_and_title(trimmed, match.group(2), match.end(2))
    if not person_name:
        return None

    record = PersonnelRecord(
        license_number=match.group(1),
        person_name=person_name,
        title=title,
        line_number=line_number,
        raw_text=trimmed,
    )

    dates = find_dates(trimmed)
    if dates:
        record.association_date = dates[0]
    if len(dates) > 1:
        record.disassociation_date = dates[1]

    return record


def parse_personnel_listing(text: str, filename: str = "") -> List[PersonnelRecord]:
    """Parse the extracted text of a PP document."""
    logger.debug(f"Parsing personnel listing: {filename}")

    personnel = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        record = parse_personnel_line(line_number, line)
        if record is not None:
            personnel.append(record)

    logger.info(f"Parsed {len(personnel)} personnel records from {filename}")
    return personnel
