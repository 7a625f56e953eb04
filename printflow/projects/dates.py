"""Day-granularity date arithmetic."""

from datetime import date, datetime
from typing import Optional, Union

# Returned by diff_days when there is no usable deadline
NO_DEADLINE_DAYS = 999

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse a deadline value into a calendar date.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and ISO
    datetime strings (only the date part is kept). Empty or malformed input
    returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def today_date(today: DateLike = None) -> date:
    """Normalize 'today' to a local calendar date, dropping any time of day."""
    parsed = parse_date(today)
    return parsed if parsed is not None else date.today()


def diff_days(deadline: DateLike, today: DateLike = None) -> int:
    """
    Whole calendar days from today until ``deadline``.

    Negative when the deadline has passed. Missing or malformed deadlines
    return NO_DEADLINE_DAYS.
    """
    target = parse_date(deadline)
    if target is None:
        return NO_DEADLINE_DAYS
    return target.toordinal() - today_date(today).toordinal()
