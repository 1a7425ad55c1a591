"""
Trade payload parsers for converting raw JSON trade messages to Trade objects.

Payload shape:
    {"symbol": "POP", "quantity": 100, "indicator": "BUY",
     "price": "101.25", "timestamp": "2024-03-01T10:15:00Z"}

Prices must be JSON strings or integers. A fractional JSON number has already
been decoded to a binary float, so it is rejected rather than recorded with
lost digits. Timestamps may be ISO-8601 strings or epoch milliseconds; they
default to now.
"""

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Union

import orjson

from ..errors import InvalidArgumentError
from .models import Trade, TradeIndicator

REQUIRED_FIELDS = ("symbol", "quantity", "indicator", "price")


class ParseError(InvalidArgumentError):
    """Raised when a trade payload cannot be parsed."""
    pass


def parse_json_payload(raw_data: Union[str, bytes]) -> dict[str, Any]:
    """
    Parse raw JSON into a dictionary.

    Args:
        raw_data: Raw JSON string or bytes

    Returns:
        Parsed dictionary

    Raises:
        ParseError: If the JSON is invalid or not an object
    """
    try:
        payload = orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", argument="payload")

    if not isinstance(payload, dict):
        raise ParseError(
            f"Trade payload must be a JSON object, got {type(payload).__name__}",
            argument="payload"
        )

    return payload


def parse_timestamp(value: Any) -> datetime:
    """Parse ISO-8601 strings or epoch milliseconds into a UTC datetime."""
    if value is None:
        return datetime.now(UTC)

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)

    if isinstance(value, bool):
        raise ParseError(f"Invalid timestamp: {value!r}", argument="timestamp")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise ParseError(f"Invalid epoch timestamp {value}: {e}", argument="timestamp")

    if isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ParseError(f"Invalid ISO timestamp {value!r}: {e}", argument="timestamp")
        return ts if ts.tzinfo else ts.replace(tzinfo=UTC)

    raise ParseError(f"Unsupported timestamp type: {type(value).__name__}", argument="timestamp")


def parse_trade(payload: dict[str, Any]) -> Trade:
    """
    Convert a trade payload dictionary into a Trade.

    Args:
        payload: Decoded trade payload

    Returns:
        Unrecorded Trade (no id yet)

    Raises:
        ParseError: If required fields are missing or have invalid values
    """
    missing = [name for name in REQUIRED_FIELDS if payload.get(name) is None]
    if missing:
        raise ParseError(
            f"Trade payload missing fields: {', '.join(missing)}",
            argument="payload",
            context={"missing_fields": missing}
        )

    symbol = payload["symbol"]
    if not isinstance(symbol, str) or not symbol.strip():
        raise ParseError(f"Invalid symbol: {symbol!r}", argument="symbol")

    quantity = payload["quantity"]
    if isinstance(quantity, str) and quantity.strip().isdigit():
        quantity = int(quantity.strip())
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ParseError(f"Invalid quantity: {payload['quantity']!r}", argument="quantity")

    try:
        indicator = TradeIndicator(str(payload["indicator"]).strip().upper())
    except ValueError:
        raise ParseError(f"Invalid indicator: {payload['indicator']!r}", argument="indicator")

    raw_price = payload["price"]
    if isinstance(raw_price, bool):
        raise ParseError(f"Invalid price: {raw_price!r}", argument="price")
    if isinstance(raw_price, float):
        raise ParseError(
            f"Fractional price {raw_price!r} must be sent as a string to keep its precision",
            argument="price"
        )
    try:
        price = Decimal(str(raw_price))
    except (InvalidOperation, ValueError):
        raise ParseError(f"Invalid price: {raw_price!r}", argument="price")
    if not price.is_finite() or price < 0:
        raise ParseError(f"Invalid price: {raw_price!r}", argument="price")

    return Trade(
        symbol=symbol.strip(),
        quantity=quantity,
        indicator=indicator,
        price=price,
        timestamp=parse_timestamp(payload.get("timestamp")),
    )


def parse_trade_payload(raw_data: Union[str, bytes]) -> Trade:
    """Parse a raw JSON trade message into a Trade."""
    return parse_trade(parse_json_payload(raw_data))
