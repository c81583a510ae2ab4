from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

import pytz


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(timezone_name: Optional[str] = None) -> datetime:
    """Current wall-clock time, naive.

    With ``timezone_name`` the time is taken in that zone (e.g. the
    organisation's payroll timezone) instead of the server's local zone.
    Note: Wrapped so tests can patch/mocked easier.
    """
    if not timezone_name:
        return datetime.now()
    tz = pytz.timezone(timezone_name)
    return datetime.now(pytz.UTC).astimezone(tz).replace(tzinfo=None)


def weekday_sunday_first(d: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return d.isoweekday() % 7


def week_number_for(d: date) -> int:
    """ceil(day_of_year / 7), counted from Jan 1 of the same year.

    Stored week numbers use this formula, so it is not the ISO week.
    """
    return math.ceil(d.timetuple().tm_yday / 7)
