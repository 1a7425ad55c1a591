"""GBCE All Share Index calculation"""

import decimal
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..errors import InvalidArgumentError, NoDataError
from .arithmetic import round_half_up

# Guard digits on top of the requested precision for ln/exp
_GUARD_DIGITS = 10


def calculate_share_index(prices: Iterable[Decimal], scale: int = 2, precision: int = 34) -> Decimal:
    """
    Calculate the geometric mean of trade prices

    index = (p1 * p2 * ... * pn) ^ (1/n) = exp(sum(ln p_i) / n)

    The log form never builds the product, so it does not overflow for
    large n. A zero price makes the whole product, and the index, zero.

    Args:
        prices: Trade prices, non-negative
        scale: Decimal places of the result
        precision: Significant digits for the ln/exp computation

    Raises:
        NoDataError: If there are no prices
        InvalidArgumentError: If a price is negative
    """
    prices = list(prices)
    if not prices:
        raise NoDataError("no trades available for share index")

    if any(p < 0 for p in prices):
        raise InvalidArgumentError("trade prices cannot be negative", argument="price")

    if any(p == 0 for p in prices):
        return round_half_up(Decimal(0), scale)

    ctx = decimal.Context(prec=precision + _GUARD_DIGITS, rounding=ROUND_HALF_UP)
    log_sum = Decimal(0)
    for price in prices:
        log_sum = ctx.add(log_sum, price.ln(ctx))

    mean_log = ctx.divide(log_sum, Decimal(len(prices)))
    return round_half_up(mean_log.exp(ctx), scale)
