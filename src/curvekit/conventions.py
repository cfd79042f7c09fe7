"""
Conventions for curve construction and risk.

Only one day count is supported: Actual/365 on integer day offsets from the
valuation date. Tenor labels use fixed multipliers (30-day months, 7-day
weeks, 365-day years) rather than calendar arithmetic.

The CurveConventions container holds every numeric constant the engine
depends on, so that a host application can see them in one place.
"""

from dataclasses import dataclass
import math


DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
DAYS_PER_WEEK = 7

ONE_BASIS_POINT = 0.01  # in percent
REFERENCE_NOTIONAL = 1_000_000.0
HYBRID_CUTOFF_DAYS = 90
CONVEXITY_FACTOR = 0.01
FORWARD_JUMP_THRESHOLD = 0.1  # in percent, 10bp


@dataclass(frozen=True)
class CurveConventions:
    """
    Container for curve conventions.

    Attributes:
        days_per_year: Denominator for Actual/365 year fractions
        bump_size: Rate bump for DV01, in percent (0.01 = 1bp)
        reference_notional: Notional of each leg of the DV01 reference portfolio
        hybrid_cutoff_days: Below this the HYBRID policy steps, above it interpolates log-linearly
        convexity_factor: Scale of the convexity heuristic
    """
    days_per_year: int = DAYS_PER_YEAR
    bump_size: float = ONE_BASIS_POINT
    reference_notional: float = REFERENCE_NOTIONAL
    hybrid_cutoff_days: int = HYBRID_CUTOFF_DAYS
    convexity_factor: float = CONVEXITY_FACTOR

    @classmethod
    def default(cls) -> "CurveConventions":
        """Standard conventions (Actual/365, 1bp bump, $1MM reference)."""
        return cls()

    def year_fraction(self, days: float) -> float:
        """Year fraction for a day offset."""
        return days / float(self.days_per_year)


DEFAULT_CONVENTIONS = CurveConventions.default()


def year_fraction(days: float) -> float:
    """
    Actual/365 year fraction for a day offset.

    Args:
        days: Day offset from the valuation date

    Returns:
        Year fraction as float
    """
    return days / float(DAYS_PER_YEAR)


def discount_factor(rate: float, days: float) -> float:
    """
    Continuously compounded discount factor.

    Args:
        rate: Rate in percent (5.445 means 5.445%)
        days: Day offset from the valuation date

    Returns:
        exp(-rate/100 * days/365)
    """
    return math.exp(-rate / 100.0 * year_fraction(days))


def rate_from_discount_factor(df: float, days: float) -> float:
    """Inverse of discount_factor; returns a percentage rate."""
    return -math.log(df) / year_fraction(days) * 100.0


__all__ = [
    "DAYS_PER_YEAR",
    "DAYS_PER_MONTH",
    "DAYS_PER_WEEK",
    "ONE_BASIS_POINT",
    "REFERENCE_NOTIONAL",
    "HYBRID_CUTOFF_DAYS",
    "CONVEXITY_FACTOR",
    "FORWARD_JUMP_THRESHOLD",
    "CurveConventions",
    "DEFAULT_CONVENTIONS",
    "year_fraction",
    "discount_factor",
    "rate_from_discount_factor",
]
