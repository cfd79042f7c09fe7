"""
Pricers package - instrument pricing.

Provides a single-curve pricer for vanilla fixed-for-floating swaps.
"""

from .swaps import (
    SwapDirection,
    SwapDetails,
    SwapLegValues,
    SwapPricer,
    price_swap,
)

__all__ = [
    "SwapDirection",
    "SwapDetails",
    "SwapLegValues",
    "SwapPricer",
    "price_swap",
]
