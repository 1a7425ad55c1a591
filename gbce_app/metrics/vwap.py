"""Volume Weighted Stock Price calculation"""

from decimal import Decimal
from typing import Sequence

from ..data.models import Trade
from ..errors import NoDataError
from .arithmetic import divide, exact_context


def calculate_vwap(trades: Sequence[Trade], scale: int = 0) -> Decimal:
    """
    Calculate Volume Weighted Stock Price

    VWAP = sum(price_i * quantity_i) / sum(quantity_i)

    Sums and the division are exact; the quotient is rounded half up
    once, to `scale` places (a whole unit by default).

    Args:
        trades: Trades to aggregate
        scale: Decimal places of the result

    Raises:
        NoDataError: If there are no trades or the total quantity is zero
    """
    if not trades:
        raise NoDataError("no trades available for volume weighted stock price")

    ctx = exact_context()
    notional = Decimal(0)
    quantity = Decimal(0)
    for trade in trades:
        notional = ctx.add(notional, ctx.multiply(trade.price, Decimal(trade.quantity)))
        quantity = ctx.add(quantity, Decimal(trade.quantity))

    if quantity == 0:
        raise NoDataError("total traded quantity is zero")

    return divide(notional, quantity, scale)
