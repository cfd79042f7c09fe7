"""
Interpolation methods for yield curves.

Provides:
- LinearInterpolator: Linear interpolation on rates (debugging baseline)
- LogLinearInterpolator: Geometric interpolation on discount factors (default)
- CubicSplineInterpolator: Natural cubic spline on rates
- StepForwardInterpolator: Flat step from the earlier tenor
- HybridInterpolator: Step at the short end, log-linear beyond a cutoff

All interpolators take day offsets as x-coordinates and return rates in
percent. Flat extrapolation is applied beyond the first and last points.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Union
import logging
import math

import numpy as np

from ..conventions import HYBRID_CUTOFF_DAYS, rate_from_discount_factor
from ..errors import InsufficientDataError
from .points import CurvePoint, CurvePointStore
from .spline import SplineSegment, build_natural_spline

logger = logging.getLogger(__name__)


class InterpolationPolicy(Enum):
    """Interpolation policy enumeration."""
    LINEAR = "LINEAR"
    LOG_LINEAR = "LOG_LINEAR"
    CUBIC_SPLINE = "CUBIC_SPLINE"
    STEP_FORWARD = "STEP_FORWARD"
    HYBRID = "HYBRID"

    @classmethod
    def from_string(cls, s: Union[str, "InterpolationPolicy"]) -> "InterpolationPolicy":
        """Parse policy from string representation."""
        if isinstance(s, cls):
            return s
        mapping = {
            "LINEAR": cls.LINEAR,
            "LIN": cls.LINEAR,
            "LOG_LINEAR": cls.LOG_LINEAR,
            "LOGLINEAR": cls.LOG_LINEAR,
            "CUBIC_SPLINE": cls.CUBIC_SPLINE,
            "CUBICSPLINE": cls.CUBIC_SPLINE,
            "CUBIC": cls.CUBIC_SPLINE,
            "SPLINE": cls.CUBIC_SPLINE,
            "STEP_FORWARD": cls.STEP_FORWARD,
            "STEPFORWARD": cls.STEP_FORWARD,
            "STEP": cls.STEP_FORWARD,
            "HYBRID": cls.HYBRID,
        }
        key = str(s).upper().strip().replace("-", "_").replace(" ", "_")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown interpolation policy: {s}")


DEFAULT_POLICY = InterpolationPolicy.LOG_LINEAR


def linear_rate(p1: CurvePoint, p2: CurvePoint, days: float) -> float:
    """Linear interpolation on rates between two points."""
    t = (days - p1.days) / (p2.days - p1.days)
    return p1.rate + t * (p2.rate - p1.rate)


def log_linear_rate(p1: CurvePoint, p2: CurvePoint, days: float) -> float:
    """
    Geometric interpolation on discount factors, converted back to a rate.

    df = df1 * (df2/df1)^t ;  rate = -ln(df) / (days/365) * 100
    """
    t = (days - p1.days) / (p2.days - p1.days)
    df = p1.discount_factor * math.pow(p2.discount_factor / p1.discount_factor, t)
    return rate_from_discount_factor(df, days)


class Interpolator(ABC):
    """
    Abstract base class for curve interpolation.

    Subclasses implement segment_rate(); bracketing and flat extrapolation
    are shared.
    """

    policy: InterpolationPolicy

    def __init__(self):
        self.store: Optional[CurvePointStore] = None

    def fit(self, store: CurvePointStore) -> None:
        """
        Fit the interpolator to a point store.

        Args:
            store: Sorted curve points

        Raises:
            InsufficientDataError: If the store has fewer than 2 points
        """
        if len(store) < 2:
            raise InsufficientDataError(
                f"Need at least 2 points for interpolation, got {len(store)}"
            )
        self.store = store

    def bracket(self, days: float) -> int:
        """
        Index i of the segment with days_i <= days < days_{i+1}.

        Only meaningful strictly inside the curve.
        """
        times = self.store.days_array
        idx = int(np.searchsorted(times, days, side='right')) - 1
        return max(0, min(idx, len(times) - 2))

    def interpolate(self, days: float) -> float:
        """
        Interpolate the rate at a day offset, flat beyond the end points.

        Args:
            days: Day offset from the valuation date

        Returns:
            Rate in percent
        """
        if self.store is None:
            raise RuntimeError("Interpolator not fitted")

        first, last = self.store.first, self.store.last
        if days <= first.days:
            return first.rate
        if days >= last.days:
            return last.rate

        idx = self.bracket(days)
        if days == self.store[idx].days:
            # Quoted tenors return their own rate
            return self.store[idx].rate
        return self.segment_rate(idx, days)

    def __call__(self, days: float) -> float:
        """Convenience method to call interpolate."""
        return self.interpolate(days)

    @abstractmethod
    def segment_rate(self, index: int, days: float) -> float:
        """
        Rate inside segment `index` (between points index and index + 1).
        """
        pass

    def _segment(self, index: int):
        return self.store[index], self.store[index + 1]


class LinearInterpolator(Interpolator):
    """
    Linear interpolation on rates.

    rate = r1 + t * (r2 - r1), t = (days - d1) / (d2 - d1)
    """

    policy = InterpolationPolicy.LINEAR

    def segment_rate(self, index: int, days: float) -> float:
        p1, p2 = self._segment(index)
        return linear_rate(p1, p2, days)


class LogLinearInterpolator(Interpolator):
    """
    Log-linear interpolation on discount factors.

    Interpolates linearly in log(discount factor) space, which corresponds
    to piecewise constant forward rates. Market convention for discount
    curves.
    """

    policy = InterpolationPolicy.LOG_LINEAR

    def segment_rate(self, index: int, days: float) -> float:
        p1, p2 = self._segment(index)
        return log_linear_rate(p1, p2, days)


class CubicSplineInterpolator(Interpolator):
    """
    Cubic spline interpolation on rates.

    Uses natural cubic splines (second derivative = 0 at boundaries).
    Coefficients are rebuilt from scratch on every fit().
    """

    policy = InterpolationPolicy.CUBIC_SPLINE

    def __init__(self):
        super().__init__()
        self.segments: List[SplineSegment] = []

    def fit(self, store: CurvePointStore) -> None:
        """Fit natural cubic spline."""
        super().fit(store)
        self.segments = build_natural_spline(store.days_array, store.rates_array)

    def segment_rate(self, index: int, days: float) -> float:
        p1, p2 = self._segment(index)
        if index >= len(self.segments):
            logger.warning(
                "No spline coefficients for segment %s-%s, using linear",
                p1.tenor, p2.tenor,
            )
            return linear_rate(p1, p2, days)
        return self.segments[index].evaluate(days - p1.days)


class StepForwardInterpolator(Interpolator):
    """
    Flat step interpolation.

    Returns the earlier tenor's rate across the whole segment; the curve is
    discontinuous exactly at each tenor.
    """

    policy = InterpolationPolicy.STEP_FORWARD

    def segment_rate(self, index: int, days: float) -> float:
        return self.store[index].rate


class HybridInterpolator(Interpolator):
    """
    Step interpolation at the short end, log-linear beyond a cutoff.

    Attributes:
        cutoff_days: Queries below this day offset step; others are log-linear
    """

    policy = InterpolationPolicy.HYBRID

    def __init__(self, cutoff_days: int = HYBRID_CUTOFF_DAYS):
        super().__init__()
        self.cutoff_days = cutoff_days

    def segment_rate(self, index: int, days: float) -> float:
        p1, p2 = self._segment(index)
        if days < self.cutoff_days:
            return p1.rate
        return log_linear_rate(p1, p2, days)


def create_interpolator(
    policy: Union[str, InterpolationPolicy],
    hybrid_cutoff_days: int = HYBRID_CUTOFF_DAYS,
) -> Interpolator:
    """
    Factory function to create an interpolator for a policy.

    Args:
        policy: InterpolationPolicy or its name ("linear", "log_linear", ...)
        hybrid_cutoff_days: Step/log-linear boundary for HYBRID

    Returns:
        Unfitted Interpolator instance
    """
    policy = InterpolationPolicy.from_string(policy)

    if policy == InterpolationPolicy.LINEAR:
        return LinearInterpolator()
    elif policy == InterpolationPolicy.LOG_LINEAR:
        return LogLinearInterpolator()
    elif policy == InterpolationPolicy.CUBIC_SPLINE:
        return CubicSplineInterpolator()
    elif policy == InterpolationPolicy.STEP_FORWARD:
        return StepForwardInterpolator()
    elif policy == InterpolationPolicy.HYBRID:
        return HybridInterpolator(hybrid_cutoff_days)
    else:
        raise ValueError(f"Unknown interpolation policy: {policy}")


__all__ = [
    "InterpolationPolicy",
    "DEFAULT_POLICY",
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "CubicSplineInterpolator",
    "StepForwardInterpolator",
    "HybridInterpolator",
    "linear_rate",
    "log_linear_rate",
    "create_interpolator",
]
