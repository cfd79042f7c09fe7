"""
Risk sensitivity containers and heuristics.

Provides:
- TenorDV01: DV01 of a single curve point
- RiskMetrics: PV, aggregate and per-tenor DV01, convexity for a position
- convexity_heuristic: the simplified convexity figure reported with swaps
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from ..conventions import CONVEXITY_FACTOR, year_fraction


@dataclass(frozen=True)
class TenorDV01:
    """DV01 attributed to one curve point."""
    tenor: str
    dv01: float

    def to_dict(self) -> Dict[str, Any]:
        return {"tenor": self.tenor, "dv01": self.dv01}


@dataclass
class RiskMetrics:
    """
    Risk metrics for a single position.

    Attributes:
        pv: Present value (signed)
        dv01: Sum of per-tenor DV01 (non-negative)
        dv01_by_tenor: Per-point DV01 in curve point order
        convexity: Heuristic convexity (see convexity_heuristic)
    """
    pv: float
    dv01: float
    dv01_by_tenor: List[TenorDV01] = field(default_factory=list)
    convexity: float = 0.0

    @property
    def dv01_map(self) -> Dict[str, float]:
        """DV01 keyed by tenor."""
        return {t.tenor: t.dv01 for t in self.dv01_by_tenor}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "pv": self.pv,
            "dv01": self.dv01,
            "dv01_by_tenor": [t.to_dict() for t in self.dv01_by_tenor],
            "convexity": self.convexity,
        }

    def dv01_frame(self) -> pd.DataFrame:
        """Per-tenor DV01 as a DataFrame with columns [tenor, dv01]."""
        return pd.DataFrame(
            [t.to_dict() for t in self.dv01_by_tenor],
            columns=["tenor", "dv01"],
        )


def convexity_heuristic(
    notional: float,
    maturity_days: float,
    factor: float = CONVEXITY_FACTOR,
) -> float:
    """
    Simplified convexity: notional * years^2 * 0.01.

    This is a scale indicator only, not a second derivative of price with
    respect to yield.
    """
    years = year_fraction(maturity_days)
    return notional * years * years * factor


__all__ = [
    "TenorDV01",
    "RiskMetrics",
    "convexity_heuristic",
]
