"""
Calendar-day counting for average balance cycles.

All dates are naive calendar dates with no time-of-day component. The
counting cycle starts on January 1, which maps to day offset 0.

Functions:
- day_of_year: 1-based day number within the year
- days_since_year_start: 0-based offset used as elapsed/target days
- year_end / quick_target: fixed targets offered by the calculator
- parse_date / format_date: ISO YYYY-MM-DD conversion
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Literal

QuickTarget = Literal["q3", "year"]


def _as_date(d: date) -> date:
    if isinstance(d, datetime):
        return d.date()
    return d


def day_of_year(d: date) -> int:
    """
    Day number within the year, January 1 being day 1.

    Example:
        >>> day_of_year(date(2024, 3, 1))
        61
    """
    d = _as_date(d)
    return (d - date(d.year, 1, 1)).days + 1


def days_since_year_start(d: date) -> int:
    """
    Whole days between January 1 and d, clamped to >= 0.

    This is the unit used everywhere for elapsed and target days:
    Jan 1 -> 0, Dec 31 -> 364 (365 in leap years).
    """
    return max(0, day_of_year(d) - 1)


def year_end(d: date) -> date:
    """December 31 of d's year."""
    return date(_as_date(d).year, 12, 31)


def quick_target(kind: QuickTarget, base: date | None = None) -> date:
    """
    Preset target dates offered next to the target date input.

    Args:
        kind: "q3" for September 30, "year" for December 31
        base: Date whose year is used (defaults to today)

    Returns:
        The preset target date
    """
    year = _as_date(base).year if base is not None else date.today().year
    if kind == "q3":
        return date(year, 9, 30)
    return date(year, 12, 31)


def add_days(d: date, days: int) -> date:
    """Calendar date days after d."""
    return _as_date(d) + timedelta(days=days)


def format_date(d: date) -> str:
    """Format as YYYY-MM-DD."""
    return _as_date(d).strftime("%Y-%m-%d")


def parse_date(value: str | date | None) -> date | None:
    """
    Parse an ISO YYYY-MM-DD value.

    Returns None for missing, blank or malformed values so that callers can
    report the record as incomplete instead of failing.
    """
    if value is None:
        return None
    if isinstance(value, date):
        return _as_date(value)

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None
