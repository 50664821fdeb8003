"""
Record models for parsed CSLB listings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RecordType(Enum):
    """Kind of listing a source document holds."""

    BUSINESS = "business"
    PERSONNEL = "personnel"

    @classmethod
    def from_filename(cls, filename: str) -> Optional["RecordType"]:
        """Infer the record type from a listing filename prefix."""
        prefix = filename[:2].upper()
        if prefix == "PL":
            return cls.BUSINESS
        if prefix == "PP":
            return cls.PERSONNEL
        return None


class LicenseStatus(Enum):
    """License status values printed in business listings."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    EXPIRED = "EXPIRED"
    SUSPENDED = "SUSPENDED"


class PersonnelTitle(Enum):
    """Role keywords printed in personnel listings."""

    OWNER = "OWNER"
    RMO = "RMO"
    RME = "RME"
    PARTNER = "PARTNER"
    OFFICER = "OFFICER"
    MEMBER = "MEMBER"


BUSINESS_COLUMNS: List[str] = [
    "license_number",
    "business_name",
    "status",
    "address",
    "city_state_zip",
    "phone",
    "bond_amount",
    "classifications",
    "expire_date",
    "line_number",
    "raw_text",
]

PERSONNEL_COLUMNS: List[str] = [
    "license_number",
    "person_name",
    "title",
    "association_date",
    "disassociation_date",
    "line_number",
    "raw_text",
]


@dataclass
class BusinessRecord:
    """
    One contractor business from a PL listing.

    Fields found on the license line and its continuation lines are kept in
    ``parsed_fields``. ``classifications`` is stored there as an ordered list
    of unique codes.
    """

    license_number: str
    line_number: int
    raw_text: str
    parsed_fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def business_name(self) -> Optional[str]:
        return self.parsed_fields.get("business_name")

    @property
    def status(self) -> Optional[LicenseStatus]:
        value = self.parsed_fields.get("status")
        return LicenseStatus(value) if value else None

    @property
    def classifications(self) -> List[str]:
        return list(self.parsed_fields.get("classifications", []))

    def append_continuation(self, text: str) -> None:
        """Append a continuation line to the accumulated raw text."""
        self.raw_text = f"{self.raw_text} {text}"


@dataclass
class PersonnelRecord:
    """One person associated with a license in a PP listing."""

    license_number: str
    person_name: str
    line_number: int
    raw_text: str
    title: Optional[str] = None
    association_date: Optional[str] = None
    disassociation_date: Optional[str] = None

    @property
    def parsed_fields(self) -> Dict[str, Any]:
        # Personnel lines are single-shot; every field is a top-level attribute.
        return {}
