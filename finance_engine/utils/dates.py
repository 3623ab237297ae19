"""Calendar-month arithmetic for half-open period bucketing"""

import calendar
from datetime import datetime, timezone


def to_naive_utc(moment: datetime) -> datetime:
    """
    Express ``moment`` as a naive UTC datetime.

    Aware values are converted to UTC and lose their tzinfo; naive
    values are taken to be UTC already and returned unchanged. Every
    datetime the engine stores or compares goes through here.
    """
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def shift_months(moment: datetime, months: int) -> datetime:
    """
    Move ``moment`` by a whole number of calendar months.

    The day is clamped to the length of the target month
    (Jan 31 + 1 month -> Feb 28/29). Time and tzinfo are preserved.
    """
    month_index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def month_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """
    Half-open calendar month containing ``moment``.

    Returns (start, end) where start is midnight UTC on the 1st and end
    is midnight UTC on the 1st of the following month.
    """
    start = to_naive_utc(moment).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, shift_months(start, 1)
