"""
Forward rate calculations.

Forward rate between two spot observations (rates as fractions r, year
fractions t = days/365):

    f(1, 2) = (r2*t2 - r1*t1) / (t2 - t1)

Provides:
- Point-pair forwards between consecutive curve points
- A lazy daily series of one-day-ahead forwards over a date range, with
  detection of day-to-day jumps
- A sampled spot/forward profile for charting
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterator, List, Union
import logging

import numpy as np
import pandas as pd

from ..conventions import FORWARD_JUMP_THRESHOLD, year_fraction
from ..dates import DateUtils
from ..curves.curve import Curve
from ..curves.points import CurvePoint, CurvePointStore

logger = logging.getLogger(__name__)


def forward_rate(rate1: float, days1: float, rate2: float, days2: float) -> float:
    """
    Implied forward rate between two spot rates.

    Args:
        rate1: Spot rate to the earlier date (percent)
        days1: Day offset of the earlier date
        rate2: Spot rate to the later date (percent)
        days2: Day offset of the later date

    Returns:
        Forward rate in percent
    """
    if days2 <= days1:
        raise ValueError("days2 must be greater than days1")

    t1 = year_fraction(days1)
    t2 = year_fraction(days2)
    r1 = rate1 / 100.0
    r2 = rate2 / 100.0
    return ((r2 * t2 - r1 * t1) / (t2 - t1)) * 100.0


def point_forward_rates(curve: Union[Curve, CurvePointStore]) -> List[CurvePoint]:
    """
    Forward rates between consecutive curve points.

    The first point has no predecessor; its forward is its spot rate.

    Returns:
        Copies of the curve points with forward_rate populated
    """
    store = curve.store if isinstance(curve, Curve) else curve
    result = []

    for i, point in enumerate(store):
        if i == 0:
            fwd = point.rate
        else:
            prev = store[i - 1]
            fwd = forward_rate(prev.rate, prev.days, point.rate, point.days)
        result.append(replace(point, forward_rate=fwd))

    return result


@dataclass(frozen=True)
class DailyForward:
    """One-day-ahead forward rate starting on a date."""
    date: date
    forward_rate: float


@dataclass(frozen=True)
class ForwardJump:
    """Absolute change (percent) in the daily forward from the previous day."""
    date: date
    diff: float


class DailyForwardSeries:
    """
    Daily one-day-ahead forward rates over an inclusive date range.

    For each date d in [start_date, end_date] with day offset n from the
    curve's valuation date, the forward is implied by r(n) and r(n + 1).
    The series is lazy and restartable: each iteration re-evaluates the
    curve from the start.
    """

    def __init__(self, curve: Curve, start_date: date, end_date: date):
        self.curve = curve
        self.start_date = DateUtils.to_date(start_date)
        self.end_date = DateUtils.to_date(end_date)

    def __iter__(self) -> Iterator[DailyForward]:
        for d in DateUtils.date_range(self.start_date, self.end_date):
            n = self.curve.days_from(d)
            fwd = forward_rate(
                self.curve.get_rate(n), n,
                self.curve.get_rate(n + 1), n + 1,
            )
            yield DailyForward(date=d, forward_rate=fwd)

    def __len__(self) -> int:
        return max(0, DateUtils.days_between(self.start_date, self.end_date) + 1)

    def to_frame(self) -> pd.DataFrame:
        """Materialise the series as a DataFrame with columns [date, forward_rate]."""
        rows = [{"date": f.date, "forward_rate": f.forward_rate} for f in self]
        return pd.DataFrame(rows, columns=["date", "forward_rate"])

    def jumps(self, threshold: float = FORWARD_JUMP_THRESHOLD) -> List[ForwardJump]:
        """
        Day-to-day forward moves larger than a threshold.

        Args:
            threshold: Minimum absolute change in percent (0.1 = 10bp);
                moves exactly equal to it are not reported

        Returns:
            One ForwardJump per date whose forward differs from the previous
            day's by more than the threshold
        """
        result = []
        prev = None
        for entry in self:
            if prev is not None:
                diff = abs(entry.forward_rate - prev.forward_rate)
                if diff > threshold:
                    result.append(ForwardJump(date=entry.date, diff=diff))
            prev = entry

        if result:
            logger.debug("Found %d forward jumps above %.4f in %r", len(result), threshold, self)
        return result

    def __repr__(self) -> str:
        return f"DailyForwardSeries({self.start_date} to {self.end_date}, {len(self)} days)"


def curve_profile(
    curve: Curve,
    horizon_days: int = 730,
    daily_until: int = 365,
    weekly_step: int = 7,
) -> pd.DataFrame:
    """
    Sample spot rates and one-day forwards for charting.

    Samples every day up to `daily_until`, then every `weekly_step` days up
    to `horizon_days`.

    Returns:
        DataFrame with columns [days, date, spot_rate, forward_rate, discount_factor]
    """
    offsets = []
    n = 0
    while n <= horizon_days:
        offsets.append(n)
        n += 1 if n < daily_until else weekly_step

    spot = curve.get_rates(offsets)
    next_spot = curve.get_rates([n + 1 for n in offsets])
    fwd = [forward_rate(spot[i], n, next_spot[i], n + 1) for i, n in enumerate(offsets)]
    days = np.array(offsets, dtype=np.float64)

    logger.debug("Sampled curve profile at %d offsets", len(offsets))

    return pd.DataFrame({
        "days": offsets,
        "date": [DateUtils.add_days(curve.valuation_date, n) for n in offsets],
        "spot_rate": spot,
        "forward_rate": fwd,
        "discount_factor": np.exp(-spot / 100.0 * days / curve.conventions.days_per_year),
    })


__all__ = [
    "forward_rate",
    "point_forward_rates",
    "DailyForward",
    "ForwardJump",
    "DailyForwardSeries",
    "curve_profile",
]
