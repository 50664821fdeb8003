"""
Input validation utilities for CLI commands
"""

import re
from datetime import date, datetime
from typing import Optional, Tuple

from ...models.session_models import SyncMode

VALID_MODES = [mode.value for mode in SyncMode]
DOWNLOAD_MODES = ["daily", "recent", "date"]


def validate_mode(mode: str) -> Tuple[bool, Optional[str], Optional[SyncMode]]:
    """
    Validate a pipeline run mode

    Returns:
        (is_valid, error_message, mode)
    """
    try:
        return True, None, SyncMode(mode.strip().lower())
    except ValueError:
        return (
            False,
            f"Invalid mode '{mode}'. Valid modes: {', '.join(VALID_MODES)}",
            None,
        )


def validate_listing_filename(filename: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a listing filename given on the command line

    Returns:
        (is_valid, error_message)
    """
    if not filename:
        return False, "Filename cannot be empty"

    if "/" in filename or "\\" in filename:
        return False, "Give a file name from the raw PDF directory, not a path"

    if not filename.lower().endswith(".pdf"):
        return False, f"Not a PDF file: {filename}"

    return True, None


def validate_date_argument(value: Optional[str]) -> Tuple[bool, Optional[str], Optional[date]]:
    """
    Validate a YYYY-MM-DD date argument

    Returns:
        (is_valid, error_message, parsed_date)
    """
    if not value:
        return False, "A date is required (format: YYYY-MM-DD)", None

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", value):
        return False, f"Invalid date format: {value} (expected YYYY-MM-DD)", None

    try:
        return True, None, datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return False, f"Invalid date: {value}", None


def validate_recent_days(value: Optional[str]) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate the optional day count for recent downloads

    Returns:
        (is_valid, error_message, days); days is None when not given
    """
    if value is None:
        return True, None, None

    try:
        days = int(value)
    except ValueError:
        return False, f"Number of days must be an integer: {value}", None

    if days < 1 or days > 90:
        return False, "Number of days must be between 1 and 90", None

    return True, None, days
