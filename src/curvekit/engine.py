"""
Curve and risk entry points for host applications.

A narrow function surface over Curve, the risk engine and the swap
pricer. Curves are immutable: set_policy() returns a new curve. Inputs may
be plain dicts, as delivered by an API layer.
"""

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .conventions import FORWARD_JUMP_THRESHOLD
from .curves.curve import Curve
from .curves.interpolation import DEFAULT_POLICY, InterpolationPolicy
from .curves.points import CurvePoint, QuoteLike
from .pricers.swaps import SwapDetails, SwapPricer
from .risk.bumping import BumpEngine
from .risk.forwards import DailyForwardSeries, point_forward_rates
from .risk.sensitivities import RiskMetrics


def build_curve(
    points: Iterable[QuoteLike],
    policy: Union[str, InterpolationPolicy] = DEFAULT_POLICY,
    valuation_date: Optional[date] = None,
) -> Curve:
    """
    Build a curve from (tenor, rate, days) quotes.

    Raises:
        DuplicateTenorError: If two quotes share a day offset
    """
    return Curve(points, policy=policy, valuation_date=valuation_date)


def set_policy(curve: Curve, policy: Union[str, InterpolationPolicy]) -> Curve:
    """New curve with another interpolation policy (spline rebuilt for CUBIC_SPLINE)."""
    return curve.with_policy(policy)


def get_rate(curve: Curve, days: Union[float, date]) -> float:
    """Interpolated rate (percent) at a day offset or date."""
    return curve.get_rate(days)


def get_forward_rates(curve: Curve) -> List[Dict[str, Any]]:
    """Forward rate between each point and its predecessor, in point order."""
    return [
        {"tenor": p.tenor, "forward_rate": p.forward_rate}
        for p in point_forward_rates(curve)
    ]


def get_daily_forward_series(curve: Curve, start_date: date, end_date: date) -> DailyForwardSeries:
    """Lazy, restartable one-day forward series over [start_date, end_date]."""
    return DailyForwardSeries(curve, start_date, end_date)


def get_forward_jumps(
    curve: Curve,
    start_date: date,
    end_date: date,
    threshold: float = FORWARD_JUMP_THRESHOLD,
) -> List[Dict[str, Any]]:
    """Dates in [start_date, end_date] where the daily forward moves by more than threshold (percent)."""
    return [
        {"date": jump.date, "diff": jump.diff}
        for jump in DailyForwardSeries(curve, start_date, end_date).jumps(threshold)
    ]


def compute_dv01(curve: Curve) -> List[Dict[str, Any]]:
    """Reference-portfolio DV01 per curve point, in point order."""
    return [item.to_dict() for item in BumpEngine(curve).compute_point_dv01()]


def _swap_from_mapping(trade: Mapping[str, Any]) -> SwapDetails:
    """Accept both snake_case and camelCase trade payloads."""
    def pick(*keys, default=None):
        for k in keys:
            if k in trade:
                return trade[k]
        if default is None:
            raise KeyError(f"Swap is missing field {keys[0]!r}")
        return default

    return SwapDetails(
        notional=float(pick("notional")),
        maturity=str(pick("maturity")),
        fixed_rate=float(pick("fixed_rate", "fixedRate")),
        floating_index=str(pick("floating_index", "floatingIndex", default="SOFR")),
        direction=pick("direction", "pay_receive", "payReceive", default="PAY"),
    )


def price_swap(curve: Curve, swap: Union[SwapDetails, Mapping[str, Any]]) -> RiskMetrics:
    """
    Price a swap and compute its risk.

    Raises:
        InvalidTenorError: If the maturity cannot be parsed
    """
    if not isinstance(swap, SwapDetails):
        swap = _swap_from_mapping(swap)
    return SwapPricer(curve).price(swap)


def get_curve_data(curve: Curve, include_risk: bool = False) -> List[CurvePoint]:
    """
    Curve points for display.

    With include_risk, each point also carries its forward rate and DV01.
    """
    if not include_risk:
        return list(curve.points)

    forwards = point_forward_rates(curve)
    dv01s = BumpEngine(curve).compute_point_dv01()
    return [
        replace(fwd, dv01=risk.dv01)
        for fwd, risk in zip(forwards, dv01s)
    ]


__all__ = [
    "build_curve",
    "set_policy",
    "get_rate",
    "get_forward_rates",
    "get_daily_forward_series",
    "get_forward_jumps",
    "compute_dv01",
    "price_swap",
    "get_curve_data",
]
