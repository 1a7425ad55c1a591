"""
Input validation for trades, symbols and prices.

Validation runs eagerly, before any catalog, cache or ledger access, so a
rejected request never leaves partial side effects behind.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from ..errors import InvalidArgumentError
from .models import Trade, TradeIndicator


def normalize_symbol(symbol: Any, argument: str = "symbol") -> str:
    """
    Normalize a stock symbol to its lookup key.

    Args:
        symbol: Raw symbol supplied by the caller
        argument: Argument name reported in the error

    Returns:
        Upper-cased, stripped symbol

    Raises:
        InvalidArgumentError: If symbol is None, not a string or blank
    """
    if symbol is None:
        raise InvalidArgumentError("stock symbol cannot be null", argument=argument)

    if not isinstance(symbol, str):
        raise InvalidArgumentError(
            f"stock symbol must be a string, got {type(symbol).__name__}",
            argument=argument
        )

    key = symbol.strip().upper()
    if not key:
        raise InvalidArgumentError("stock symbol cannot be empty", argument=argument)

    return key


def validate_price(price: Any, allow_zero: bool = False, argument: str = "price") -> Decimal:
    """
    Coerce and validate a price.

    Floats are converted through their string form so 10.1 stays 10.1.

    Raises:
        InvalidArgumentError: If price is None, not numeric, not finite,
            negative, or zero when allow_zero is False
    """
    if price is None:
        raise InvalidArgumentError("price cannot be null", argument=argument)

    if isinstance(price, bool):
        raise InvalidArgumentError("price must be numeric, got bool", argument=argument)

    try:
        value = price if isinstance(price, Decimal) else Decimal(str(price))
    except (InvalidOperation, ValueError):
        raise InvalidArgumentError(f"price is not a number: {price!r}", argument=argument)

    if not value.is_finite():
        raise InvalidArgumentError(f"price must be finite: {price!r}", argument=argument)

    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "greater than zero"
        raise InvalidArgumentError(
            f"price must be {bound}, got {value}",
            argument=argument,
            context={"price": str(value)}
        )

    return value


def validate_trade(trade: Any) -> Trade:
    """
    Check a trade is well formed before it is recorded.

    Raises:
        InvalidArgumentError: On a null trade or any malformed field
    """
    if trade is None:
        raise InvalidArgumentError("trade cannot be null", argument="trade")

    if not isinstance(trade, Trade):
        raise InvalidArgumentError(
            f"expected Trade, got {type(trade).__name__}",
            argument="trade"
        )

    normalize_symbol(trade.symbol, argument="trade.symbol")

    quantity = trade.quantity
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise InvalidArgumentError(
            f"share quantity must be a positive integer, got {quantity!r}",
            argument="trade.quantity"
        )

    if not isinstance(trade.indicator, TradeIndicator):
        raise InvalidArgumentError(
            f"trade indicator must be BUY or SELL, got {trade.indicator!r}",
            argument="trade.indicator"
        )

    trade.price = validate_price(trade.price, allow_zero=True, argument="trade.price")

    if trade.id is not None:
        raise InvalidArgumentError(
            f"trade already recorded with id={trade.id}",
            argument="trade.id"
        )

    return trade
