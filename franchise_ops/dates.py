"""
franchise_ops.dates
===================

Small calendar helpers shared by the allocation and lifecycle modules.
Everything here is pure; callers always pass the reference time in.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Tuple, Union

DateLike = Union[date, datetime]


def add_years(d: date, years: int) -> date:
    """
    Shift *d* by whole years, mapping Feb 29 onto Feb 28 when the target
    year is not a leap year.

    >>> add_years(date(2020, 2, 29), 1)
    datetime.date(2021, 2, 28)
    """
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)


def add_months(d: date, months: int) -> date:
    """Shift *d* by *months*, clamping the day to the target month's end."""
    index = d.month - 1 + months
    year, month = d.year + index // 12, index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return d.replace(year=year, month=month, day=min(d.day, last_day))


def as_date(value: DateLike) -> date:
    """Drop the time part of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def as_datetime(value: DateLike) -> datetime:
    """Promote a date to midnight; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def year_bounds(year: int) -> Tuple[date, date]:
    """First and last day of *year*."""
    return date(year, 1, 1), date(year, 12, 31)


def within(d: DateLike, start: date, end: date) -> bool:
    """Inclusive ``start <= d <= end`` at day granularity."""
    return start <= as_date(d) <= end


def range_within(start: date, end: date, outer_start: date, outer_end: date) -> bool:
    """True when ``[start, end]`` lies entirely inside ``[outer_start, outer_end]``."""
    return within(start, outer_start, outer_end) and within(end, outer_start, outer_end)
