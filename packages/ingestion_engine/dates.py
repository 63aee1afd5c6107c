"""Date normalization for statement dates.

Only two source formats are accepted, tried in order. Anything else is an
unparseable date; callers decide whether that is fatal.
"""

from datetime import date, datetime
from typing import Optional

from .errors import DateParseError

# Closed, ordered list: day-first slashes, then ISO.
DATE_FORMATS = [
    "%d/%m/%Y",
    "%Y-%m-%d",
]

EPOCH = date(1970, 1, 1)


def parse_date(value: str) -> date:
    """Parse a statement date into a calendar date.

    Raises:
        DateParseError: if the string matches no accepted format.
    """
    text = (value or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise DateParseError(value)


def try_parse_date(value: str) -> Optional[date]:
    """Like parse_date, but returns None instead of raising."""
    try:
        return parse_date(value)
    except DateParseError:
        return None


def sort_key_or_epoch(value: str) -> date:
    # Unparseable dates sort as the epoch, i.e. last in a descending sort.
    return try_parse_date(value) or EPOCH
