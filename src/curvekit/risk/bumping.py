"""
Curve bumping framework for sensitivity calculations.

Per-point DV01 by bump-and-reprice against a reference portfolio: one
par-style position of 1MM notional at every quoted tenor, valued as

    PV = sum_i  N * (1 - DF_i) / t_i,   DF_i = exp(-r_i/100 * t_i)

Discount factors come straight from each point's own rate and day offset,
so the result does not depend on the interpolation policy. Bumping one
point therefore only moves that point's term; the bump is not propagated
through the interpolated curve to other dates. Key-rate durations that
re-interpolate the full curve per tenor are a different measure.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..conventions import CurveConventions, discount_factor, year_fraction
from ..curves.curve import Curve
from ..curves.points import CurvePointStore
from .sensitivities import TenorDV01


@dataclass
class BumpResult:
    """Result of a bump operation."""
    tenor: str
    original_pv: float
    bumped_pv: float
    bump_size: float
    delta_pv: float = field(init=False)

    def __post_init__(self):
        self.delta_pv = self.bumped_pv - self.original_pv

    @property
    def dv01(self) -> float:
        """Absolute PV change per unit bump."""
        return abs(self.delta_pv) / self.bump_size


def reference_portfolio_pv(
    store: CurvePointStore,
    notional: float = 1_000_000.0,
) -> float:
    """
    Value the reference portfolio on a point store.

    Points at day offset 0 have no accrual period and contribute nothing.
    """
    total = 0.0
    for point in store:
        if point.days <= 0:
            continue
        df = discount_factor(point.rate, point.days)
        total += notional * (1.0 - df) / year_fraction(point.days)
    return total


class BumpEngine:
    """
    Engine for point bumping and DV01 calculation.

    Provides methods to:
    1. Create bumped point stores
    2. Reprice the reference portfolio under a bump
    3. Compute per-point DV01
    """

    def __init__(self, base: Union[Curve, CurvePointStore], conventions: Optional[CurveConventions] = None):
        """
        Initialize bump engine.

        Args:
            base: The curve (or bare point store) to bump
            conventions: Bump size and reference notional; defaults to the
                curve's conventions
        """
        if isinstance(base, Curve):
            self.base_store = base.store
            self.conventions = conventions or base.conventions
        else:
            self.base_store = base
            self.conventions = conventions or CurveConventions.default()

    @property
    def bump_size(self) -> float:
        return self.conventions.bump_size

    def point_bump(self, index: int, bump: Optional[float] = None) -> CurvePointStore:
        """
        Bump a single point.

        Args:
            index: Index of point to bump
            bump: Bump in percent (defaults to the 1bp convention)

        Returns:
            Bumped point store
        """
        return self.base_store.bumped(index, self.bump_size if bump is None else bump)

    def base_pv(self) -> float:
        """Reference portfolio PV on the unbumped points."""
        return reference_portfolio_pv(self.base_store, self.conventions.reference_notional)

    def bump_and_reprice(self, index: int) -> BumpResult:
        """
        Reprice the reference portfolio with one point bumped.

        Args:
            index: Index of point to bump

        Returns:
            BumpResult with original and bumped PV
        """
        bumped = self.point_bump(index)
        return BumpResult(
            tenor=self.base_store[index].tenor,
            original_pv=self.base_pv(),
            bumped_pv=reference_portfolio_pv(bumped, self.conventions.reference_notional),
            bump_size=self.bump_size,
        )

    def compute_point_dv01(self) -> List[TenorDV01]:
        """
        DV01 for each curve point.

        dv01_i = |PV(bumped_i) - PV(base)| / bump

        Returns:
            One TenorDV01 per point, in point order; all values >= 0
        """
        return [
            TenorDV01(tenor=result.tenor, dv01=result.dv01)
            for result in (self.bump_and_reprice(i) for i in range(len(self.base_store)))
        ]


__all__ = [
    "BumpEngine",
    "BumpResult",
    "reference_portfolio_pv",
]
