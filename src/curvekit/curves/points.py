"""
Curve point storage.

A CurvePointStore is the immutable, sorted set of market observations a
curve is built from. Each point carries its tenor label, its day offset from
the valuation date, its rate in percent and the discount factor derived
from that rate. Edits never mutate a store; they build a new one.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
import math

import numpy as np

from ..conventions import discount_factor, year_fraction
from ..errors import DuplicateTenorError, EmptyCurveError


@dataclass(frozen=True)
class CurveQuote:
    """A raw market quote: tenor label, rate (percent) and day offset."""
    tenor: str
    rate: float
    days: int


@dataclass(frozen=True)
class CurvePoint:
    """
    A single point on the curve.

    Attributes:
        tenor: Tenor label (e.g. "3M")
        days: Day offset from the valuation date
        rate: Rate in percent (5.445 means 5.445%)
        discount_factor: exp(-rate/100 * days/365)
        forward_rate: Point-pair forward rate, populated on enriched views
        dv01: Reference-portfolio DV01, populated on enriched views
    """
    tenor: str
    days: int
    rate: float
    discount_factor: float
    forward_rate: Optional[float] = None
    dv01: Optional[float] = None

    @classmethod
    def from_quote(cls, tenor: str, rate: float, days: int) -> "CurvePoint":
        """Create a point, deriving its discount factor."""
        return cls(
            tenor=tenor,
            days=days,
            rate=rate,
            discount_factor=discount_factor(rate, days),
        )

    @property
    def years(self) -> float:
        """Actual/365 year fraction."""
        return year_fraction(self.days)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "tenor": self.tenor,
            "days": self.days,
            "rate": self.rate,
            "discount_factor": self.discount_factor,
            "forward_rate": self.forward_rate,
            "dv01": self.dv01,
        }


QuoteLike = Union[CurveQuote, CurvePoint, Mapping[str, Any], Sequence[Any]]


def _coerce_quote(item: QuoteLike) -> CurveQuote:
    """Accept quotes as CurveQuote/CurvePoint, dicts or (tenor, rate, days) tuples."""
    if isinstance(item, (CurveQuote, CurvePoint)):
        tenor, rate, days = item.tenor, item.rate, item.days
    elif isinstance(item, Mapping):
        tenor, rate, days = item["tenor"], item["rate"], item["days"]
    else:
        tenor, rate, days = item

    rate = float(rate)
    if not math.isfinite(rate):
        raise ValueError(f"Rate for {tenor} must be finite, got {rate}")
    days_value = float(days)
    if not days_value.is_integer():
        raise ValueError(f"Day offset for {tenor} must be a whole number, got {days}")
    days = int(days_value)
    if days < 0:
        raise ValueError(f"Day offset for {tenor} must be non-negative, got {days}")

    return CurveQuote(tenor=str(tenor), rate=rate, days=days)


class CurvePointStore:
    """
    Sorted, de-duplicated collection of curve points.

    Points are sorted ascending by day offset and each carries its derived
    discount factor. The store is immutable: with_rate() and bumped()
    return new stores.
    """

    def __init__(self, quotes: Iterable[QuoteLike] = ()):
        coerced = [_coerce_quote(q) for q in quotes]
        coerced.sort(key=lambda q: q.days)

        for prev, curr in zip(coerced, coerced[1:]):
            if prev.days == curr.days:
                raise DuplicateTenorError(curr.days, (prev.tenor, curr.tenor))

        self._points: Tuple[CurvePoint, ...] = tuple(
            CurvePoint.from_quote(q.tenor, q.rate, q.days) for q in coerced
        )
        self._days = np.array([p.days for p in self._points], dtype=np.float64)
        self._rates = np.array([p.rate for p in self._points], dtype=np.float64)
        self._dfs = np.array([p.discount_factor for p in self._points], dtype=np.float64)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> CurvePoint:
        return self._points[index]

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurvePointStore):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    @property
    def points(self) -> Tuple[CurvePoint, ...]:
        return self._points

    @property
    def first(self) -> CurvePoint:
        """Earliest point (used for left boundary clamping)."""
        if not self._points:
            raise EmptyCurveError("Curve has no points")
        return self._points[0]

    @property
    def last(self) -> CurvePoint:
        """Latest point (used for right boundary clamping)."""
        if not self._points:
            raise EmptyCurveError("Curve has no points")
        return self._points[-1]

    @property
    def tenors(self) -> List[str]:
        return [p.tenor for p in self._points]

    @property
    def days_array(self) -> np.ndarray:
        """Day offsets as a read-only float array."""
        view = self._days.view()
        view.flags.writeable = False
        return view

    @property
    def rates_array(self) -> np.ndarray:
        """Rates (percent) as a read-only float array."""
        view = self._rates.view()
        view.flags.writeable = False
        return view

    @property
    def discount_factors(self) -> np.ndarray:
        """Discount factors as a read-only float array."""
        view = self._dfs.view()
        view.flags.writeable = False
        return view

    def index_of(self, tenor: str) -> int:
        """
        Index of the point with the given tenor label.

        Raises:
            KeyError: If no point has that tenor
        """
        for i, p in enumerate(self._points):
            if p.tenor == tenor:
                return i
        raise KeyError(f"No curve point with tenor {tenor!r}")

    def to_quotes(self) -> List[CurveQuote]:
        """Raw (tenor, rate, days) quotes the store was built from."""
        return [CurveQuote(p.tenor, p.rate, p.days) for p in self._points]

    def with_rate(self, key: Union[int, str], rate: float) -> "CurvePointStore":
        """
        Create a new store with one point's rate replaced.

        Args:
            key: Point index or tenor label
            rate: New rate in percent

        Returns:
            New store, rebuilt wholesale
        """
        index = self.index_of(key) if isinstance(key, str) else key
        if index < 0 or index >= len(self._points):
            raise IndexError(f"Invalid point index: {index}")

        quotes = self.to_quotes()
        quotes[index] = replace(quotes[index], rate=float(rate))
        return CurvePointStore(quotes)

    def bumped(self, index: int, bump: float) -> "CurvePointStore":
        """
        Create a new store with a single point's rate shifted.

        Args:
            index: Index of point to bump
            bump: Shift in percent (0.01 = 1bp)
        """
        if index < 0 or index >= len(self._points):
            raise IndexError(f"Invalid point index: {index}")
        return self.with_rate(index, self._points[index].rate + bump)

    def __repr__(self) -> str:
        return f"CurvePointStore(points={len(self._points)}, tenors={self.tenors})"


__all__ = [
    "CurveQuote",
    "CurvePoint",
    "CurvePointStore",
]
