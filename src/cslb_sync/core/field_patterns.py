"""
Field extraction patterns for CSLB business listings.

Each entry is ``(field name, compiled pattern, extractor)``. Extractors take
the match and return the value to store, or ``None`` to leave the field
untouched. Entries are applied in order to every candidate line.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Pattern

from ..models.record_models import LicenseStatus

STATUS_ALTERNATION = "|".join(s.value for s in LicenseStatus)

# A record starts on a line with a leading license number
LICENSE_LINE = re.compile(r"^([0-9]+)\s+(.+)")

DATE_TOKEN = re.compile(r"(?<!\d)(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})(?!\d)")

STREET_SUFFIXES = (
    "ST|STREET|AVE|AVENUE|BLVD|BOULEVARD|RD|ROAD|DR|DRIVE|CT|COURT|PL|PLACE|WAY|LN|LANE"
)


def _group(index: int) -> Callable[["re.Match[str]"], Optional[str]]:
    def extract(match: "re.Match[str]") -> Optional[str]:
        value = match.group(index)
        return value.strip() if value else None

    return extract


def _whole(match: "re.Match[str]") -> Optional[str]:
    value = match.group(0).strip()
    return value or None


STREET_SUFFIX_WORDS = frozenset(STREET_SUFFIXES.split("|"))


def _city_state_zip(match: "re.Match[str]") -> Optional[str]:
    # The city group can swallow a street address on the same line;
    # keep only the words after the last street suffix.
    words = match.group(1).split()
    for index in range(len(words) - 1, -1, -1):
        if words[index] in STREET_SUFFIX_WORDS:
            words = words[index + 1 :]
            break
    state, postal_code = match.group(2), match.group(3)
    if not words:
        return f"{state} {postal_code}"
    return f"{' '.join(words)}, {state} {postal_code}"


@dataclass(frozen=True)
class FieldPattern:
    """A single field extractor."""

    field: str
    pattern: Pattern[str]
    extract: Callable[["re.Match[str]"], Optional[str]]
    cumulative: bool = False


BUSINESS_FIELD_PATTERNS: List[FieldPattern] = [
    FieldPattern(
        "business_name",
        re.compile(rf"^([A-Z][A-Z0-9\s&.,'-]+?)\s+(?:{STATUS_ALTERNATION})\b"),
        _group(1),
    ),
    FieldPattern(
        "status",
        re.compile(rf"\b({STATUS_ALTERNATION})\b"),
        _group(1),
    ),
    FieldPattern(
        "address",
        re.compile(rf"\d+\s+[A-Z\s]+?\b(?:{STREET_SUFFIXES})\b", re.IGNORECASE),
        _whole,
    ),
    FieldPattern(
        "city_state_zip",
        re.compile(r"([A-Z][A-Z\s]*?),?\s+(CA|CALIFORNIA)\s+(\d{5}(?:-\d{4})?)\b"),
        _city_state_zip,
    ),
    FieldPattern(
        "phone",
        re.compile(r"(?<!\d)\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"),
        _whole,
    ),
    FieldPattern(
        "bond_amount",
        re.compile(r"\$[\d,]+(?:\.\d+)?"),
        _whole,
    ),
    FieldPattern(
        "classifications",
        re.compile(r"\b[ABC]-?\d+\b|\bASB\b|\bHAZ\b"),
        _whole,
        cumulative=True,
    ),
    FieldPattern(
        "expire_date",
        DATE_TOKEN,
        _group(1),
    ),
]


def apply_field_patterns(
    parsed_fields: Dict[str, Any],
    text: str,
    patterns: List[FieldPattern] = BUSINESS_FIELD_PATTERNS,
) -> None:
    """
    Scan ``text`` and update ``parsed_fields`` in place.

    Scalar fields are overwritten by a later match. Cumulative fields keep
    every code seen so far, in first-seen order, without duplicates.
    """
    for entry in patterns:
        if entry.cumulative:
            found = [
                value
                for value in (entry.extract(m) for m in entry.pattern.finditer(text))
                if value
            ]
            if found:
                existing = parsed_fields.get(entry.field, [])
                parsed_fields[entry.field] = list(dict.fromkeys([*existing, *found]))
            continue

        match = entry.pattern.search(text)
        if match:
            value = entry.extract(match)
            if value is not None:
                parsed_fields[entry.field] = value


def find_dates(text: str) -> List[str]:
    return DATE_TOKEN.findall(text)
