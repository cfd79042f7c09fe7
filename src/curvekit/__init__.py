"""
curvekit: Yield Curve Construction & Rate Risk Engine

A modular library for:
- Building continuous yield curves from sparse tenor quotes
- Five interpolation policies (linear, log-linear, natural cubic spline,
  step-forward, hybrid)
- Discount factors, point-pair and daily forward rates
- Per-tenor DV01 by bump-and-reprice and simplified swap valuation

Scope: single-curve, Actual/365 on day offsets; no schedules or calendars.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import CurveConventions, DEFAULT_CONVENTIONS, year_fraction, discount_factor
from .dates import DateUtils, tenor_to_days
from .errors import (
    CurveError,
    EmptyCurveError,
    DuplicateTenorError,
    DegenerateSegmentError,
    InvalidTenorError,
    InsufficientDataError,
)

# Curves
from .curves import (
    Curve,
    CurveQuote,
    CurvePoint,
    CurvePointStore,
    InterpolationPolicy,
    SplineSegment,
    build_natural_spline,
    create_flat_curve,
)

# Risk
from .risk import (
    BumpEngine,
    DailyForward,
    DailyForwardSeries,
    ForwardJump,
    RiskMetrics,
    TenorDV01,
    curve_profile,
    point_forward_rates,
)

# Pricers
from .pricers import SwapDetails, SwapDirection, SwapPricer

# Market state
from .market_state import CurveState, MarketState

# Quotes
from .quotes import load_curve_quotes, quotes_from_records

# Entry points
from .engine import (
    build_curve,
    set_policy,
    get_rate,
    get_forward_rates,
    get_daily_forward_series,
    get_forward_jumps,
    compute_dv01,
    price_swap,
    get_curve_data,
)

__all__ = [
    # Version
    "__version__",
    # Conventions
    "CurveConventions",
    "DEFAULT_CONVENTIONS",
    "year_fraction",
    "discount_factor",
    # Dates
    "DateUtils",
    "tenor_to_days",
    # Errors
    "CurveError",
    "EmptyCurveError",
    "DuplicateTenorError",
    "DegenerateSegmentError",
    "InvalidTenorError",
    "InsufficientDataError",
    # Curves
    "Curve",
    "CurveQuote",
    "CurvePoint",
    "CurvePointStore",
    "InterpolationPolicy",
    "SplineSegment",
    "build_natural_spline",
    "create_flat_curve",
    # Risk
    "BumpEngine",
    "DailyForward",
    "DailyForwardSeries",
    "ForwardJump",
    "RiskMetrics",
    "TenorDV01",
    "curve_profile",
    "point_forward_rates",
    # Pricers
    "SwapDetails",
    "SwapDirection",
    "SwapPricer",
    # Market state
    "CurveState",
    "MarketState",
    # Quotes
    "load_curve_quotes",
    "quotes_from_records",
    # Entry points
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
