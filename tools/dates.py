"""Date helpers shared by the services and the presentation layer."""

from datetime import date, datetime, timezone
from typing import NamedTuple, Optional, Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]


class MonthBounds(NamedTuple):
    """First and last calendar day of a month as YYYY-MM-DD strings."""

    start: str
    end: str


def today() -> str:
    """Current local date as YYYY-MM-DD."""
    return date.today().isoformat()


def utc_timestamp() -> str:
    """Current UTC time as an ISO 8601 string, used for ``created_at``."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO string to a ``date``.

    Strings must be a whole YYYY-MM-DD date or a full ISO datetime.

    Raises:
        ValueError: If a string is not a valid ISO date or datetime.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text).date()


def to_date_string(value: Optional[DateLike]) -> Optional[str]:
    """Normalize a date-like value to YYYY-MM-DD, passing ``None`` through."""
    if value is None:
        return None
    return to_date(value).isoformat()


def month_bounds(target: Optional[DateLike] = None) -> MonthBounds:
    """Get the first and last day of the month containing ``target``.

    Args:
        target: Any day in the month. Defaults to today.

    Returns:
        MonthBounds with ``start`` and ``end`` as YYYY-MM-DD strings.

    Example:
        >>> month_bounds(date(2024, 2, 10))
        MonthBounds(start='2024-02-01', end='2024-02-29')
    """
    day = to_date(target) if target is not None else date.today()
    start = day.replace(day=1)
    # day=31 clamps to the real month length
    end = day + relativedelta(day=31)
    return MonthBounds(start=start.isoformat(), end=end.isoformat())
