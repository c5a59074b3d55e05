from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.constants import DATE_FORMAT, ISO_DATE_FORMAT

DayLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today() -> date:
    return now_local().date()


def to_day(value: DayLike) -> date:
    """Truncate a datetime (or ISO string) to its calendar day.

    Attendance is keyed by day, so every date that reaches storage goes
    through here first.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value[:10])
    raise TypeError(f"Unsupported day value: {value!r}")


def start_of_month(value: DayLike) -> date:
    return to_day(value).replace(day=1)


def format_date(value: DayLike, pattern: str = DATE_FORMAT) -> str:
    if isinstance(value, datetime):
        return value.strftime(pattern)
    return to_day(value).strftime(pattern)
