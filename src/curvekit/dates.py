"""
Date utilities for curve calculations.

Provides:
- Tenor parsing into day offsets (30-day months, 365-day years)
- Conversion between calendar dates and day offsets from a valuation date
- Inclusive daily date ranges
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Tuple
import re

from .conventions import DAYS_PER_MONTH, DAYS_PER_WEEK, DAYS_PER_YEAR
from .errors import InvalidTenorError


class DateUtils:
    """Utility class for date manipulation in curve contexts."""

    # Leading integer followed by an optional unit
    TENOR_PATTERN = re.compile(r'^\s*(\d+)\s*([A-Za-z]*)')

    UNIT_DAYS = {
        'Y': DAYS_PER_YEAR,
        'M': DAYS_PER_MONTH,
        'W': DAYS_PER_WEEK,
    }

    @staticmethod
    def parse_tenor(tenor: str) -> Tuple[int, str]:
        """
        Parse a tenor string into (amount, unit).

        Args:
            tenor: Tenor string like "1W", "3M", "2Y" or a bare day count "45"

        Returns:
            Tuple of (amount, unit) where unit is the upper-cased suffix
            (possibly empty)

        Raises:
            InvalidTenorError: If the tenor has no leading integer
        """
        if not isinstance(tenor, str):
            raise InvalidTenorError(tenor)
        match = DateUtils.TENOR_PATTERN.match(tenor)
        if not match:
            raise InvalidTenorError(tenor)

        return int(match.group(1)), match.group(2).upper()

    @staticmethod
    def tenor_to_days(tenor: str) -> int:
        """
        Convert a tenor to a day offset.

        Y => x365, M => x30, W => x7; any other suffix (or none) leaves the
        integer as a literal day count.
        """
        amount, unit = DateUtils.parse_tenor(tenor)
        multiplier = DateUtils.UNIT_DAYS.get(unit[:1], 1)
        return amount * multiplier

    @staticmethod
    def tenor_to_years(tenor: str) -> float:
        """Approximate year fraction for a tenor (Actual/365 on tenor_to_days)."""
        return DateUtils.tenor_to_days(tenor) / float(DAYS_PER_YEAR)

    @staticmethod
    def to_date(d: date) -> date:
        """Calendar date of a date, datetime or pandas Timestamp (time of day dropped)."""
        return d.date() if isinstance(d, datetime) else d

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Signed number of calendar days from start to end."""
        return (DateUtils.to_date(end) - DateUtils.to_date(start)).days

    @staticmethod
    def add_days(start: date, days: int) -> date:
        """Date a given number of days after start."""
        return start + timedelta(days=int(days))

    @staticmethod
    def date_range(start: date, end: date) -> Iterator[date]:
        """
        Iterate calendar days from start to end inclusive.

        Yields nothing if end is before start.
        """
        current = DateUtils.to_date(start)
        end = DateUtils.to_date(end)
        while current <= end:
            yield current
            current += timedelta(days=1)


def tenor_to_days(tenor: str) -> int:
    """
    Convert a tenor label to a day offset.

    Examples:
        >>> tenor_to_days("1Y")
        365
        >>> tenor_to_days("6M")
        180
        >>> tenor_to_days("1W")
        7
    """
    return DateUtils.tenor_to_days(tenor)


__all__ = [
    "DateUtils",
    "tenor_to_days",
]
