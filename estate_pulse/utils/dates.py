"""Normalization of the human-entered date strings found in project data"""

import re
from datetime import date, datetime
from typing import Optional

# Tried in order; the first successful parse wins
LEGACY_DATE_FORMATS = (
    "%Y-%m-%d",
    "%B %d, %Y",  # August 30, 2025
    "%b %d, %Y",  # Aug 30, 2025
    "%d %B %Y",  # 30 August 2025
    "%m/%d/%Y",  # 8/30/2025
    "%Y/%m/%d",
)

_ORDINAL_SUFFIX = re.compile(r"(\d{1,2})(st|nd|rd|th)\b", re.IGNORECASE)
_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T")


def parse_legacy_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a date written in one of the formats staff have historically used.

    Args:
        value: Free-text date such as "August 30th, 2025" or "8/30/2025"

    Returns:
        The parsed date, or None if the text is empty or not recognized
    """
    if not value:
        return None

    text = " ".join(value.strip().split())
    if _ISO_DATETIME.match(text):
        text = text[:10]
    text = _ORDINAL_SUFFIX.sub(r"\1", text)

    for fmt in LEGACY_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_date_text(value: Optional[str]) -> Optional[str]:
    """
    Rewrite a recognized date to ISO ``YYYY-MM-DD``.

    Text that is not a recognizable date ("Q4 2025", "TBD") is returned
    unchanged so no information is lost.
    """
    if value is None:
        return None
    parsed = parse_legacy_date(value)
    if parsed is None:
        return value
    return parsed.isoformat()
