"""
Natural cubic spline coefficients.

Builds one cubic polynomial per pair of adjacent points,

    S_i(x) = a_i + b_i*x + c_i*x^2 + d_i*x^3,   x = days - days_i

such that the spline passes through every point, has continuous first and
second derivatives at interior knots, and zero second derivative at both
ends (natural boundary condition). The tridiagonal system for the c_i is
solved with the Thomas algorithm.
"""

from dataclasses import dataclass
from typing import List, Sequence
import logging

import numpy as np

from ..errors import DegenerateSegmentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplineSegment:
    """Cubic coefficients for one segment, in local offset x = days - days_i."""
    a: float
    b: float
    c: float
    d: float

    def evaluate(self, x: float) -> float:
        return self.a + x * (self.b + x * (self.c + x * self.d))

    def derivative(self, x: float) -> float:
        return self.b + x * (2.0 * self.c + 3.0 * self.d * x)


def build_natural_spline(days: Sequence[float], rates: Sequence[float]) -> List[SplineSegment]:
    """
    Build natural cubic spline segments.

    Args:
        days: Knot day offsets, strictly ascending
        rates: Knot rates (percent)

    Returns:
        List of len(days) - 1 segments

    Raises:
        DegenerateSegmentError: Fewer than 2 points, or a zero-width segment
    """
    x = np.asarray(days, dtype=np.float64)
    y = np.asarray(rates, dtype=np.float64)

    if len(x) != len(y):
        raise ValueError("Days and rates must have same length")

    n = len(x)
    if n < 2:
        raise DegenerateSegmentError(f"Need at least 2 points for a spline, got {n}")

    h = np.diff(x)
    if np.any(h < 0):
        raise ValueError("Days must be sorted ascending")
    if np.any(h == 0):
        i = int(np.argmax(h == 0))
        raise DegenerateSegmentError(f"Zero-width segment between knots {i} and {i + 1}")

    if n == 2:
        # Degenerates to a straight line
        slope = (y[1] - y[0]) / h[0]
        return [SplineSegment(float(y[0]), float(slope), 0.0, 0.0)]

    alpha = np.zeros(n)
    for i in range(1, n - 1):
        alpha[i] = 3.0 / h[i] * (y[i + 1] - y[i]) - 3.0 / h[i - 1] * (y[i] - y[i - 1])

    # Forward elimination
    l = np.ones(n)
    mu = np.zeros(n)
    z = np.zeros(n)
    for i in range(1, n - 1):
        l[i] = 2.0 * (x[i + 1] - x[i - 1]) - h[i - 1] * mu[i - 1]
        mu[i] = h[i] / l[i]
        z[i] = (alpha[i] - h[i - 1] * z[i - 1]) / l[i]

    # Back substitution, c[0] = c[n-1] = 0
    c = np.zeros(n)
    for j in range(n - 2, 0, -1):
        c[j] = z[j] - mu[j] * c[j + 1]

    segments = []
    for j in range(n - 1):
        b = (y[j + 1] - y[j]) / h[j] - h[j] * (c[j + 1] + 2.0 * c[j]) / 3.0
        d = (c[j + 1] - c[j]) / (3.0 * h[j])
        segments.append(SplineSegment(float(y[j]), float(b), float(c[j]), float(d)))

    logger.debug("Built natural cubic spline with %d segments", len(segments))
    return segments


__all__ = [
    "SplineSegment",
    "build_natural_spline",
]
