"""
Calendar helpers for date-dependent recommendation logic.

Key concepts:
  - Day of year: the 1-based ordinal day used to seed the book of the day.
  - Season: derived from the month (see ``season_for_month``).
  - Whole months: calendar-month distance used for reading velocity.

Everything here takes an explicit ``date``; only ``today()`` reads the clock.
"""

from __future__ import annotations

from datetime import date

from mentor_recs.taxonomy.path_taxonomy import Season, season_for_month


def today() -> date:
    """Return the current local calendar date. The engine's default clock."""
    return date.today()


def day_of_year(check_date: date) -> int:
    """Return the 1-based ordinal day of the year (Jan 1 → 1, Dec 31 → 365/366)."""
    return check_date.timetuple().tm_yday


def season_on(check_date: date) -> Season:
    """Return the season ``check_date`` falls in."""
    return season_for_month(check_date.month)


def whole_months_between(start: date, end: date) -> int:
    """Number of complete calendar months from ``start`` to ``end``.

    A month only counts once the day-of-month has been reached again, so
    Jan 31 → Feb 28 is 0 months and Jan 15 → Mar 15 is 2 months.
    Negative when ``end`` precedes ``start``.

    Args:
        start: Earlier date.
        end: Later date.

    Returns:
        Signed whole-month count.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months
