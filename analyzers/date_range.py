"""Reporting window resolution."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from config import settings


def resolve_date_range(year: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Get the [start, end) window for a reporting year.

    The current year runs from January 1 up to now, so the window grows as
    time passes. Past and future years are fixed and end on December 31.

    Args:
        year: Target year
        now: Current local time (defaults to datetime.now())

    Returns:
        Tuple of (start, end)
    """
    now = now or datetime.now()
    start = datetime(year, 1, 1)

    if year == now.year:
        return start, now

    return start, datetime.combine(date(year, 12, 31), time.max)


@dataclass(frozen=True)
class YearProgress:
    """How far the current year has progressed."""

    day_of_year: int
    days_in_year: int
    year_end_review_available: bool


def year_progress(today: Optional[date] = None) -> YearProgress:
    """Get the day of year and whether the year-end review is open."""
    today = today or date.today()
    day_of_year = today.timetuple().tm_yday
    return YearProgress(
        day_of_year=day_of_year,
        days_in_year=366 if calendar.isleap(today.year) else 365,
        year_end_review_available=day_of_year > settings.YEAR_END_REVIEW_DAY,
    )
