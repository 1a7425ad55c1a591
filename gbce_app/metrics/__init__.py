"""Indicator math: dividend yield, P/E ratio, VWAP and the GBCE All Share Index"""

from .dividend import calculate_dividend_yield, calculate_pe_ratio
from .share_index import calculate_share_index
from .vwap import calculate_vwap

__all__ = [
    "calculate_dividend_yield",
    "calculate_pe_ratio",
    "calculate_vwap",
    "calculate_share_index",
]
