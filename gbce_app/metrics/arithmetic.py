"""Decimal helpers with explicit scale and rounding."""

import decimal
from decimal import ROUND_HALF_UP, Decimal


def exact_context() -> decimal.Context:
    """Context for exact addition and multiplication. Never divide in it."""
    return decimal.Context(
        prec=decimal.MAX_PREC,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        rounding=ROUND_HALF_UP,
    )


def quantum(scale: int) -> Decimal:
    """Decimal('1') for scale 0, Decimal('0.01') for scale 2."""
    return Decimal(1).scaleb(-scale)


def _to_integer(value: Decimal, shift: int) -> int:
    return int(value.scaleb(shift, context=exact_context()))


def divide(numerator: Decimal, denominator: Decimal, scale: int) -> Decimal:
    """
    Divide and round half up to a fixed number of decimal places.

    The quotient is never materialised at a finite precision: both operands
    are scaled to integers and the remainder of one integer division decides
    the last digit, so ROUND_HALF_UP is applied exactly once.

    Raises:
        ZeroDivisionError: If the denominator is zero
    """
    if denominator == 0:
        raise ZeroDivisionError("decimal division by zero")

    # Smallest power of ten that makes both operands integral
    shift = max(0, -numerator.as_tuple().exponent, -denominator.as_tuple().exponent)
    num = _to_integer(numerator, shift + scale)
    den = _to_integer(denominator, shift)

    negative = (num < 0) != (den < 0)
    quotient, remainder = divmod(abs(num), abs(den))
    if 2 * remainder >= abs(den):
        quotient += 1

    result = Decimal(-quotient if negative else quotient)
    return result.scaleb(-scale, context=exact_context())


def round_half_up(value: Decimal, scale: int) -> Decimal:
    """Quantize to `scale` places, ROUND_HALF_UP."""
    return value.quantize(quantum(scale), context=exact_context())


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """Drop trailing fractional zeros without switching to exponent notation."""
    ctx = exact_context()
    if value == value.to_integral_value(context=ctx):
        return value.quantize(Decimal(1), context=ctx)
    return value.normalize(ctx)
