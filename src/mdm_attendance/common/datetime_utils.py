from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import ACADEMIC_YEAR_START_MONTH, FIRST_HALF_END_DAY


def now_local() -> datetime:
    """Current local time.

    Kept behind a function so tests can patch the clock.
    """
    return datetime.now()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def semi_month_bounds(year: int, month: int, half: int) -> tuple[date, date]:
    """First and last day of a half-month (1st-15th or 16th-end)."""
    if half == 1:
        return date(year, month, 1), date(year, month, FIRST_HALF_END_DAY)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, FIRST_HALF_END_DAY + 1), date(year, month, last_day)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def academic_year_start(day: date) -> int:
    if day.month >= ACADEMIC_YEAR_START_MONTH:
        return day.year
    return day.year - 1


def academic_year_label(day: date) -> str:
    """Academic years run June-May, e.g. 2025-06-01 -> '2025-2026'."""
    start = academic_year_start(day)
    return f"{start}-{start + 1}"


def format_day(value: date) -> str:
    """DD/MM/YYYY, the en-IN short date used on every report."""
    return value.strftime("%d/%m/%Y")


def format_timestamp(value: datetime) -> str:
    """DD/MM/YYYY, hh:mm am/pm."""
    return f"{value.strftime('%d/%m/%Y, %I:%M')} {'am' if value.hour < 12 else 'pm'}"
