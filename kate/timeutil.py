"""Date and time helpers working on aware datetimes."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone

__all__ = [
    "milliseconds",
    "time_location_of_utc_offset",
    "time_in_utc_offset",
    "get_day_range_of_month",
    "get_time_range_of_day",
    "get_months_of_day_range",
]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MIDNIGHT = {"hour": 0, "minute": 0, "second": 0, "microsecond": 0}


def milliseconds(t: datetime) -> int:
    """Return milliseconds since the Unix epoch, truncated toward zero.

    A naive datetime is taken to be in local time.
    """
    if t.tzinfo is None:
        t = t.astimezone()
    delta = t - _EPOCH
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    return -(-micros // 1000) if micros < 0 else micros // 1000


def time_location_of_utc_offset(utc_offset: int) -> timezone:
    """Return a fixed zone `utc_offset` hours from UTC, named like ``UTC+8``."""
    return timezone(timedelta(hours=utc_offset), f"UTC{utc_offset:+d}")


def time_in_utc_offset(t: datetime, utc_offset: int) -> datetime:
    """Return the same instant expressed in the fixed zone of `utc_offset` hours."""
    return t.astimezone(time_location_of_utc_offset(utc_offset))


def get_day_range_of_month(date: datetime) -> tuple[datetime, datetime]:
    """Return midnight of the first and of the last day of `date`'s month."""
    first = date.replace(day=1, **_MIDNIGHT)
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def get_time_range_of_day(t: datetime) -> tuple[datetime, datetime]:
    """Return [begin, end): midnight of `t`'s day and midnight of the next."""
    begin = t.replace(**_MIDNIGHT)
    return begin, begin + timedelta(days=1)


def get_months_of_day_range(layout: str, begin_day: datetime, end_day: datetime) -> list[str]:
    """Return the distinct `layout`-formatted months of the days in [begin, end].

    `layout` is a strftime format; the result is sorted.
    """
    months = set()
    current = begin_day
    while current <= end_day:
        months.add(current.strftime(layout))
        current += timedelta(days=1)
    return sorted(months)