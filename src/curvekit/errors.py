"""
Error taxonomy for curve construction and risk.

All errors derive from CurveError, which is itself a ValueError, so callers
catching ValueError for malformed input keep working. None of these are
transient: they signal bad input and are never retried.
"""


class CurveError(ValueError):
    """Base class for curve construction and query errors."""


class EmptyCurveError(CurveError):
    """Raised when a curve with zero points is queried."""


class DuplicateTenorError(CurveError):
    """Raised when two input points share the same day offset."""

    def __init__(self, days: int, tenors=None):
        self.days = days
        self.tenors = tuple(tenors or ())
        if self.tenors:
            message = f"Duplicate day offset {days} for tenors {', '.join(self.tenors)}"
        else:
            message = f"Duplicate day offset {days}"
        super().__init__(message)


class DegenerateSegmentError(CurveError):
    """Raised when a spline is requested with < 2 points or a zero-width segment."""


class InvalidTenorError(CurveError):
    """Raised when a tenor label has no leading integer."""

    def __init__(self, tenor):
        self.tenor = tenor
        super().__init__(f"Invalid tenor: {tenor!r}. Expected a leading integer like '3M', '5Y'")


class InsufficientDataError(CurveError):
    """Raised when interpolation between two points is required but fewer exist."""


__all__ = [
    "CurveError",
    "EmptyCurveError",
    "DuplicateTenorError",
    "DegenerateSegmentError",
    "InvalidTenorError",
    "InsufficientDataError",
]
