"""
Curves package - yield curve construction and interpolation.

Provides:
- CurvePointStore: Sorted, immutable market observations with discount factors
- build_natural_spline: Natural cubic spline coefficients (Thomas algorithm)
- Interpolators for the five interpolation policies
- Curve: Immutable curve snapshot answering rate queries
"""

from .points import CurveQuote, CurvePoint, CurvePointStore
from .spline import SplineSegment, build_natural_spline
from .interpolation import (
    InterpolationPolicy,
    DEFAULT_POLICY,
    Interpolator,
    LinearInterpolator,
    LogLinearInterpolator,
    CubicSplineInterpolator,
    StepForwardInterpolator,
    HybridInterpolator,
    create_interpolator,
)
from .curve import Curve, create_flat_curve

__all__ = [
    "CurveQuote",
    "CurvePoint",
    "CurvePointStore",
    "SplineSegment",
    "build_natural_spline",
    "InterpolationPolicy",
    "DEFAULT_POLICY",
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "CubicSplineInterpolator",
    "StepForwardInterpolator",
    "HybridInterpolator",
    "create_interpolator",
    "Curve",
    "create_flat_curve",
]
