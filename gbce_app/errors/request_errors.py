"""
Request error classifications.

These are caused by what the caller asked for (bad input, unknown symbol,
nothing to aggregate) and are safe to report back without intervention.
"""

from typing import Optional

from .base import GBCEServiceError


class InvalidArgumentError(GBCEServiceError):
    """Null, absent or out-of-range input: symbol, price or trade."""

    kind = "invalid_argument"

    def __init__(self, message: str, argument: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.argument = argument


class NotFoundError(GBCEServiceError):
    """No instrument matches the requested symbol."""

    kind = "not_found"

    def __init__(self, message: str, symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol


class NoDataError(GBCEServiceError):
    """Aggregation requested over an empty trade set."""

    kind = "no_data"

    def __init__(self, message: str, symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
