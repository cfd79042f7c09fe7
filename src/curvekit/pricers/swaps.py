"""
Interest rate swap pricing engine.

Prices a single fixed-for-floating swap against one curve with a
single-period approximation (no accrual schedule):

    DF        = exp(-r(T)/100 * T/365)
    PV_float  = N * (1 - DF)
    PV_fixed  = N * K/100 * years * DF
    PV_swap   = PV_float - PV_fixed        (pay fixed)
              = PV_fixed - PV_float        (receive fixed)

Risk is reported as the reference-portfolio DV01 ladder scaled to the swap
notional, plus the convexity heuristic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Union
import logging
import math

from ..conventions import year_fraction
from ..dates import DateUtils
from ..curves.curve import Curve
from ..risk.bumping import BumpEngine
from ..risk.sensitivities import RiskMetrics, TenorDV01, convexity_heuristic

logger = logging.getLogger(__name__)


class SwapDirection(Enum):
    """Direction of the fixed leg."""
    PAY = "PAY"
    RECEIVE = "RECEIVE"

    @classmethod
    def from_string(cls, s: Union[str, "SwapDirection"]) -> "SwapDirection":
        """Parse direction from string representation."""
        if isinstance(s, cls):
            return s
        key = str(s).upper().strip()
        if key in ("PAY", "PAYER"):
            return cls.PAY
        if key in ("RECEIVE", "REC", "RECEIVER"):
            return cls.RECEIVE
        raise ValueError(f"Unknown swap direction: {s}")


@dataclass
class SwapDetails:
    """
    A vanilla fixed-for-floating swap.

    Attributes:
        notional: Notional amount (positive)
        maturity: Maturity tenor (e.g. "5Y")
        fixed_rate: Fixed rate in percent
        floating_index: Floating index name (informational only)
        direction: PAY or RECEIVE the fixed leg
    """
    notional: float
    maturity: str
    fixed_rate: float
    floating_index: str = "SOFR"
    direction: SwapDirection = SwapDirection.PAY

    def __post_init__(self):
        if not self.notional > 0:
            raise ValueError(f"Notional must be positive, got {self.notional}")
        self.direction = SwapDirection.from_string(self.direction)


@dataclass
class SwapLegValues:
    """Single-period valuation of both swap legs."""
    maturity_days: int
    rate: float
    discount_factor: float
    floating_leg_pv: float
    fixed_leg_pv: float
    direction: SwapDirection

    @property
    def years(self) -> float:
        return year_fraction(self.maturity_days)

    @property
    def net_pv(self) -> float:
        """Net PV to the holder of the swap in its direction."""
        if self.direction == SwapDirection.PAY:
            return self.floating_leg_pv - self.fixed_leg_pv
        else:
            return -(self.floating_leg_pv - self.fixed_leg_pv)


class SwapPricer:
    """
    Swap pricing engine against a single curve.

    Attributes:
        curve: Curve used for both the floating leg and discounting
    """

    def __init__(self, curve: Curve):
        self.curve = curve

    def leg_values(self, swap: SwapDetails) -> SwapLegValues:
        """
        Value both legs of a swap.

        Raises:
            InvalidTenorError: If the maturity tenor cannot be parsed
            EmptyCurveError: If the curve has no points
        """
        maturity_days = DateUtils.tenor_to_days(swap.maturity)
        rate = self.curve.get_rate(maturity_days)
        years = year_fraction(maturity_days)
        df = math.exp(-rate / 100.0 * years)

        return SwapLegValues(
            maturity_days=maturity_days,
            rate=rate,
            discount_factor=df,
            floating_leg_pv=swap.notional * (1.0 - df),
            fixed_leg_pv=swap.notional * swap.fixed_rate / 100.0 * years * df,
            direction=swap.direction,
        )

    def present_value(self, swap: SwapDetails) -> float:
        """Swap PV (positive = in-the-money for the swap's direction)."""
        return self.leg_values(swap).net_pv

    def dv01_by_tenor(self, swap: SwapDetails) -> List[TenorDV01]:
        """Reference DV01 ladder scaled by notional / reference notional."""
        engine = BumpEngine(self.curve)
        scale = swap.notional / engine.conventions.reference_notional
        return [
            TenorDV01(tenor=item.tenor, dv01=item.dv01 * scale)
            for item in engine.compute_point_dv01()
        ]

    def price(self, swap: SwapDetails) -> RiskMetrics:
        """
        Price a swap and compute its risk.

        Args:
            swap: Swap details

        Returns:
            RiskMetrics with PV, total and per-tenor DV01, and convexity
        """
        legs = self.leg_values(swap)
        ladder = self.dv01_by_tenor(swap)

        metrics = RiskMetrics(
            pv=legs.net_pv,
            dv01=sum(item.dv01 for item in ladder),
            dv01_by_tenor=ladder,
            convexity=convexity_heuristic(
                swap.notional, legs.maturity_days, self.curve.conventions.convexity_factor
            ),
        )
        logger.debug(
            "Priced %s %s swap %s @ %.4f%%: pv=%.2f dv01=%.2f",
            swap.direction.value, swap.maturity, swap.floating_index,
            swap.fixed_rate, metrics.pv, metrics.dv01,
        )
        return metrics


def price_swap(curve: Curve, swap: SwapDetails) -> RiskMetrics:
    """
    Price a swap against a curve.

    Args:
        curve: Discount/projection curve
        swap: Swap details

    Returns:
        RiskMetrics
    """
    return SwapPricer(curve).price(swap)


__all__ = [
    "SwapDirection",
    "SwapDetails",
    "SwapLegValues",
    "SwapPricer",
    "price_swap",
]
