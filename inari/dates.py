"""Date utilities for inari.

Pure functions for calendar arithmetic and timestamp formatting.
"""

import calendar
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

# Zero-argument callable supplying "now"; injected wherever a default time is needed
Clock = Callable[[], datetime]

# Legacy numeric timestamps count seconds from this instant
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Default clock: the current time in UTC."""
    return datetime.now(timezone.utc)


def add_months(moment: datetime, months: int) -> datetime:
    """Add calendar months to a datetime.

    The day of month is clamped to the last day of the target month, so
    January 31st plus one month is February 28th (or 29th).

    Args:
        moment: Starting datetime.
        months: Number of months to add (may be negative).

    Returns:
        Datetime with the same time of day in the target month.
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def whole_days_between(start: datetime, end: datetime) -> int:
    """Count the whole days elapsed between two datetimes.

    Partial days are truncated toward zero.
    """
    delta = end - start
    days = abs(delta).days
    return days if delta >= timedelta(0) else -days


def month_range(year: int, month: int) -> tuple[date, date, str]:
    """Calculate date range and label for a month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        Tuple of (first_day, next_first_day, label) where:
        - first_day: First day of the month
        - next_first_day: First day of the following month
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValueError: If the month is out of range.
    """
    first = date(year, month, 1)
    next_first = (first.replace(day=28) + timedelta(days=4)).replace(day=1)
    label = first.strftime("%B %Y")
    return first, next_first, label


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as an ISO-8601 string."""
    return moment.isoformat()


def parse_timestamp(value: str | int | float) -> datetime:
    """Parse a wire timestamp.

    Strings are read as ISO-8601. Bare numbers are read as seconds since
    2001-01-01T00:00:00Z, the reference-date encoding older clients wrote.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return REFERENCE_DATE + timedelta(seconds=value)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"Not a timestamp: {value!r}")
