"""
Calendar date helpers.

All arithmetic is day-granular on datetime.date; there is no time-of-day or
timezone component anywhere in the engine.
"""

from datetime import date, datetime
from typing import Optional

from timeline.lib.constants import ISO_DATE_PATTERN


def is_valid_date(value) -> bool:
    """True for a YYYY-MM-DD string naming a real calendar date, or a date object.

    YAML loads unquoted dates as datetime.date, so those are accepted as-is.
    datetime values are rejected: documents carry dates, not timestamps.
    """
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_iso_date(value) -> date:
    """Convert a validated document date (string or date) to a date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return date.fromisoformat(value)


def format_iso_date(value: date) -> str:
    return value.isoformat()


def month_key(value: date) -> str:
    """YYYY-MM key for the month containing value."""
    return f"{value.year:04d}-{value.month:02d}"


def months_between(start: date, end: date) -> list[str]:
    """Inclusive list of month keys from start's month through end's month.

    Empty when end falls in a month before start.
    """
    months = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        months.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            year += 1
            month = 1
    return months


def days_between(start: date, end: date) -> int:
    """Signed number of days from start to end."""
    return (end - start).days


def days_remaining(end: date, today: Optional[date] = None) -> int:
    """Days until end; negative once end has passed."""
    today = today or date.today()
    return days_between(today, end)


def is_overdue(end: date, status: str, today: Optional[date] = None) -> bool:
    """Past its end date and not finished. Completed/cancelled work is never overdue."""
    if status in ("completed", "cancelled"):
        return False
    return days_remaining(end, today) < 0


def format_date(value: date) -> str:
    """Human-readable date, e.g. 'Jan 5, 2025'."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_month(key: str) -> str:
    """Human-readable month for a YYYY-MM key, e.g. 'January 2025'."""
    year, month = key.split("-")
    return f"{date(int(year), int(month), 1).strftime('%B')} {year}"
