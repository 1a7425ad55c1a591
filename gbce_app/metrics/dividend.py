"""Dividend yield and P/E ratio calculations"""

from decimal import Decimal

from ..data.models import Instrument, StockType
from ..errors import InternalError, InvalidArgumentError
from .arithmetic import divide, exact_context, strip_trailing_zeros


def dividend_per_share(instrument: Instrument) -> Decimal:
    """
    Annual dividend amount the yield is based on

    COMMON:    last_dividend
    PREFERRED: fixed_dividend * par_value

    Raises:
        InternalError: If the instrument type is outside the known set
    """
    if instrument.type == StockType.COMMON:
        return instrument.last_dividend
    if instrument.type == StockType.PREFERRED:
        return exact_context().multiply(instrument.fixed_dividend, instrument.par_value)

    raise InternalError(
        f"invalid stock type={instrument.type} for symbol={instrument.symbol}",
        context={"symbol": instrument.symbol, "type": str(instrument.type)}
    )


def _check_price(price: Decimal) -> None:
    if price is None or price <= 0:
        raise InvalidArgumentError(f"price must be greater than zero, got {price}", argument="price")


def calculate_dividend_yield(instrument: Instrument, price: Decimal, scale: int = 10) -> Decimal:
    """
    Calculate dividend yield for a market price

    yield = dividend_per_share / price

    Args:
        instrument: Instrument reference data
        price: Market price, must be positive
        scale: Decimal places of the result

    Returns:
        Dividend yield rounded half up to `scale` places, trailing zeros removed
    """
    _check_price(price)
    dividend = dividend_per_share(instrument)

    return strip_trailing_zeros(divide(dividend, price, scale))


def calculate_pe_ratio(instrument: Instrument, price: Decimal, scale: int = 10) -> Decimal:
    """
    Calculate price / dividend yield

    The yield is dividend / price, so the ratio is evaluated as
    price * price / dividend with a single rounding at the end.

    Raises:
        InvalidArgumentError: If the price is not positive or the dividend is zero
    """
    _check_price(price)
    dividend = dividend_per_share(instrument)

    if dividend == 0:
        raise InvalidArgumentError(
            f"dividend cannot be zero when calculating P/E ratio for symbol={instrument.symbol}",
            argument="dividend",
            context={"price": str(price), "symbol": instrument.symbol}
        )

    price_squared = exact_context().multiply(price, price)
    return strip_trailing_zeros(divide(price_squared, dividend, scale))
