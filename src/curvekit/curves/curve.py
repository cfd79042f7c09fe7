"""
Yield curve representation and operations.

The Curve class provides:
- Interpolated rate r(days) under the active interpolation policy
- Discount factor P(0, days)
- Date-based queries relative to the valuation date

A Curve is an immutable snapshot of a point store, an interpolation policy
and the interpolator fitted to them. Policy changes and market-data edits
return a new Curve; nothing is updated in place, so a reader holding a
Curve never sees a partially rebuilt state.
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import logging
import math

import numpy as np

from ..conventions import CurveConventions, DEFAULT_CONVENTIONS
from ..dates import DateUtils
from ..errors import EmptyCurveError
from .interpolation import (
    DEFAULT_POLICY,
    CubicSplineInterpolator,
    InterpolationPolicy,
    Interpolator,
    create_interpolator,
)
from .points import CurvePoint, CurvePointStore, QuoteLike
from .spline import SplineSegment

logger = logging.getLogger(__name__)


class Curve:
    """
    Yield curve with interpolation.

    Stores rate observations at discrete day offsets and interpolates
    between them using the selected policy.

    Attributes:
        valuation_date: Valuation date (day offset 0)
        policy: Active interpolation policy
        currency: Currency code (default "USD")
        conventions: Numeric conventions (Actual/365, hybrid cutoff, ...)

    Conventions:
        - Rates are in percent (5.445 means 5.445%)
        - Discount factors are exp(-rate/100 * days/365)
        - Flat extrapolation before the first and after the last point
    """

    def __init__(
        self,
        points: Union[CurvePointStore, Iterable[QuoteLike]] = (),
        policy: Union[str, InterpolationPolicy] = DEFAULT_POLICY,
        valuation_date: Optional[date] = None,
        currency: str = "USD",
        conventions: CurveConventions = DEFAULT_CONVENTIONS,
    ):
        self._store = points if isinstance(points, CurvePointStore) else CurvePointStore(points)
        self._policy = InterpolationPolicy.from_string(policy)
        self._valuation_date = DateUtils.to_date(valuation_date or date.today())
        self._currency = currency
        self._conventions = conventions

        self._interpolator: Optional[Interpolator] = None
        if len(self._store) >= 2:
            interpolator = create_interpolator(self._policy, conventions.hybrid_cutoff_days)
            interpolator.fit(self._store)
            self._interpolator = interpolator

        logger.debug(
            "Built curve: %d points, policy=%s, valuation_date=%s",
            len(self._store), self._policy.value, self._valuation_date,
        )

    @property
    def store(self) -> CurvePointStore:
        return self._store

    @property
    def points(self) -> Tuple[CurvePoint, ...]:
        return self._store.points

    @property
    def policy(self) -> InterpolationPolicy:
        return self._policy

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def conventions(self) -> CurveConventions:
        return self._conventions

    @property
    def spline_segments(self) -> Tuple[SplineSegment, ...]:
        """Spline coefficients; empty unless the policy is CUBIC_SPLINE."""
        if isinstance(self._interpolator, CubicSplineInterpolator):
            return tuple(self._interpolator.segments)
        return ()

    def __len__(self) -> int:
        return len(self._store)

    def days_from(self, d: date) -> int:
        """Day offset of a date from the valuation date."""
        return DateUtils.days_between(self._valuation_date, d)

    def get_rate(self, days: Union[float, date]) -> float:
        """
        Get interpolated rate.

        Args:
            days: Day offset from the valuation date, or a date

        Returns:
            Rate in percent

        Raises:
            EmptyCurveError: If the curve has no points
        """
        if isinstance(days, date):
            days = self.days_from(days)

        if len(self._store) == 0:
            raise EmptyCurveError("Cannot query a curve with no points")

        first, last = self._store.first, self._store.last
        if days <= first.days:
            return first.rate
        if days >= last.days:
            return last.rate

        return self._interpolator.interpolate(days)

    def __call__(self, days: Union[float, date]) -> float:
        return self.get_rate(days)

    def get_rates(self, days: Iterable[float]) -> np.ndarray:
        """Interpolated rates for several day offsets."""
        return np.array([self.get_rate(d) for d in days], dtype=np.float64)

    def discount_factor(self, days: Union[float, date]) -> float:
        """
        Get discount factor P(0, days).

        Args:
            days: Day offset or date

        Returns:
            exp(-r(days)/100 * days/365)
        """
        if isinstance(days, date):
            days = self.days_from(days)
        rate = self.get_rate(days)
        return math.exp(-rate / 100.0 * self._conventions.year_fraction(days))

    def with_policy(self, policy: Union[str, InterpolationPolicy]) -> "Curve":
        """
        Create a new curve with a different interpolation policy.

        Spline coefficients are rebuilt from scratch when switching to
        CUBIC_SPLINE.
        """
        return Curve(
            self._store,
            policy=policy,
            valuation_date=self._valuation_date,
            currency=self._currency,
            conventions=self._conventions,
        )

    def with_quotes(self, quotes: Iterable[QuoteLike]) -> "Curve":
        """Create a new curve from a replacement quote set, keeping the policy."""
        return Curve(
            quotes,
            policy=self._policy,
            valuation_date=self._valuation_date,
            currency=self._currency,
            conventions=self._conventions,
        )

    def with_rate(self, tenor: Union[int, str], rate: float) -> "Curve":
        """
        Create a new curve with one quoted rate edited.

        Args:
            tenor: Tenor label or point index
            rate: New rate in percent
        """
        return self.with_quotes(self._store.with_rate(tenor, rate))

    def bump_point(self, index: int, bump: float) -> "Curve":
        """
        Create a new curve with a single point's rate shifted.

        Args:
            index: Index of point to bump (0-based)
            bump: Shift in percent (0.01 = 1bp)
        """
        return self.with_quotes(self._store.bumped(index, bump))

    def __repr__(self) -> str:
        return (f"Curve(valuation_date={self._valuation_date}, currency={self._currency}, "
                f"points={len(self._store)}, policy={self._policy.value})")


def create_flat_curve(
    rate: float,
    tenors: Sequence[str] = ("1M", "3M", "6M", "1Y", "2Y", "5Y", "10Y", "30Y"),
    policy: Union[str, InterpolationPolicy] = DEFAULT_POLICY,
    valuation_date: Optional[date] = None,
) -> Curve:
    """
    Create a flat yield curve.

    Args:
        rate: Flat rate in percent
        tenors: Tenor labels to place points at
        policy: Interpolation policy
        valuation_date: Valuation date

    Returns:
        Flat curve
    """
    quotes: List[Tuple[str, float, int]] = [
        (t, rate, DateUtils.tenor_to_days(t)) for t in tenors
    ]
    return Curve(quotes, policy=policy, valuation_date=valuation_date)


__all__ = [
    "Curve",
    "create_flat_curve",
]
