"""
Parsing of raw field text into typed values.

Dates are parsed in a fixed, locale-independent set of formats so the
same file yields the same catalog regardless of the machine's locale.
"""

from datetime import date, datetime
from typing import Optional

# Tried in order after ISO 8601
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)


def parse_release_date(raw: Optional[str]) -> Optional[date]:
    """
    Parse a release date, keeping only the calendar date.

    Accepts ISO dates and date-times ("1960-07-11", "1960-07-11T00:00:00"),
    "YYYY/MM/DD" and "MM/DD/YYYY", optionally followed by a time.

    Returns:
        The parsed date, or None if the text is blank or matches no format
    """
    if raw is None or not raw.strip():
        return None

    text = raw.strip()

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def parse_pages(raw: Optional[str]) -> Optional[int]:
    """
    Parse a page count.

    Returns:
        The integer value, or None if the text is not an integer
    """
    if raw is None:
        return None

    try:
        return int(raw.strip())
    except ValueError:
        return None
