"""
Risk package - sensitivity calculations and forward rates.

Provides:
- Point-pair and daily forward rates
- Bump-and-reprice DV01 per curve point
- Risk metric containers and the convexity heuristic
"""

from .forwards import (
    forward_rate,
    point_forward_rates,
    DailyForward,
    DailyForwardSeries,
    ForwardJump,
    curve_profile,
)
from .bumping import (
    BumpEngine,
    BumpResult,
    reference_portfolio_pv,
)
from .sensitivities import (
    TenorDV01,
    RiskMetrics,
    convexity_heuristic,
)

__all__ = [
    "forward_rate",
    "point_forward_rates",
    "DailyForward",
    "DailyForwardSeries",
    "ForwardJump",
    "curve_profile",
    "BumpEngine",
    "BumpResult",
    "reference_portfolio_pv",
    "TenorDV01",
    "RiskMetrics",
    "convexity_heuristic",
]
