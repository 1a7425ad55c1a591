"""Tests for trade payload parsing and input validators."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from gbce_app.data.models import Trade, TradeIndicator
from gbce_app.data.parsers import (
    ParseError,
    parse_json_payload,
    parse_timestamp,
    parse_trade,
    parse_trade_payload,
)
from gbce_app.data.validators import normalize_symbol, validate_price, validate_trade
from gbce_app.errors import InvalidArgumentError


class TestParseJsonPayload:
    def test_valid_json_object(self):
        assert parse_json_payload(b'{"symbol": "TEA"}') == {"symbol": "TEA"}

    def test_invalid_json(self):
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_json_payload("{not json")

    def test_non_object(self):
        with pytest.raises(ParseError, match="JSON object"):
            parse_json_payload("[1, 2, 3]")

    def test_parse_error_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            parse_json_payload("")


class TestParseTimestamp:
    def test_default_is_now(self):
        before = datetime.now(UTC)
        assert parse_timestamp(None) >= before

    def test_iso_with_zulu(self):
        ts = parse_timestamp("2024-03-01T10:15:00Z")
        assert ts == datetime(2024, 3, 1, 10, 15, tzinfo=UTC)

    def test_naive_iso_assumed_utc(self):
        ts = parse_timestamp("2024-03-01T10:15:00")
        assert ts.tzinfo is UTC

    def test_epoch_millis(self):
        ts = parse_timestamp(1709288100000)
        assert ts == datetime(2024, 3, 1, 10, 15, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["yesterday", True, [1]])
    def test_invalid(self, value):
        with pytest.raises(ParseError):
            parse_timestamp(value)


class TestParseTrade:
    def test_complete_payload(self):
        trade = parse_trade_payload(
            '{"symbol": " pop ", "quantity": 100, "indicator": "sell",'
            ' "price": "101.25", "timestamp": "2024-03-01T10:15:00Z"}'
        )

        assert trade.symbol == "pop"
        assert trade.quantity == 100
        assert trade.indicator == TradeIndicator.SELL
        assert trade.price == Decimal("101.25")
        assert trade.id is None
        assert trade.aged_out is False

    def test_integer_price(self):
        trade = parse_trade_payload(b'{"symbol": "POP", "quantity": 1, "indicator": "BUY", "price": 101}')
        assert trade.price == Decimal("101")

    def test_fractional_json_number_price_rejected(self):
        with pytest.raises(ParseError, match="as a string") as exc_info:
            parse_trade_payload(
                b'{"symbol": "POP", "quantity": 1, "indicator": "BUY", "price": 10.123456789012345678}'
            )

        assert exc_info.value.argument == "price"

    def test_string_price_keeps_every_digit(self):
        trade = parse_trade_payload(
            b'{"symbol": "POP", "quantity": 1, "indicator": "BUY", "price": "10.123456789012345678"}'
        )
        assert trade.price == Decimal("10.123456789012345678")

    def test_quantity_as_digit_string(self):
        trade = parse_trade({"symbol": "TEA", "quantity": "7", "indicator": "BUY", "price": "1"})
        assert trade.quantity == 7

    def test_zero_price_allowed(self):
        trade = parse_trade({"symbol": "TEA", "quantity": 1, "indicator": "BUY", "price": 0})
        assert trade.price == Decimal("0")

    def test_missing_fields(self):
        with pytest.raises(ParseError) as exc_info:
            parse_trade({"symbol": "TEA", "price": "1"})

        assert exc_info.value.context["missing_fields"] == ["quantity", "indicator"]

    @pytest.mark.parametrize("field,value", [
        ("symbol", "   "),
        ("symbol", 12),
        ("quantity", 0),
        ("quantity", -5),
        ("quantity", 1.5),
        ("quantity", True),
        ("indicator", "HOLD"),
        ("price", "abc"),
        ("price", "-1"),
        ("price", "NaN"),
        ("price", False),
        ("price", 10.5),
    ])
    def test_invalid_field(self, field, value):
        payload = {"symbol": "TEA", "quantity": 1, "indicator": "BUY", "price": "1"}
        payload[field] = value

        with pytest.raises(ParseError) as exc_info:
            parse_trade(payload)

        assert exc_info.value.argument == field


class TestNormalizeSymbol:
    @pytest.mark.parametrize("raw,expected", [("pop", "POP"), (" Gin ", "GIN"), ("ALE", "ALE")])
    def test_normalization(self, raw, expected):
        assert normalize_symbol(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", 42])
    def test_invalid(self, raw):
        with pytest.raises(InvalidArgumentError) as exc_info:
            normalize_symbol(raw)

        assert exc_info.value.argument == "symbol"


class TestValidatePrice:
    def test_float_goes_through_string_form(self):
        assert validate_price(10.1) == Decimal("10.1")

    def test_zero_only_when_allowed(self):
        assert validate_price(0, allow_zero=True) == Decimal("0")
        with pytest.raises(InvalidArgumentError):
            validate_price(0)

    @pytest.mark.parametrize("price", [None, True, "ten", "Infinity", -1])
    def test_invalid(self, price):
        with pytest.raises(InvalidArgumentError):
            validate_price(price, allow_zero=True)


class TestValidateTrade:
    def test_valid_trade_price_coerced(self):
        trade = Trade(symbol="POP", quantity=1, indicator=TradeIndicator.BUY, price=10.5)

        assert validate_trade(trade).price == Decimal("10.5")

    def test_not_a_trade(self):
        with pytest.raises(InvalidArgumentError):
            validate_trade({"symbol": "POP"})

    @pytest.mark.parametrize("changes,argument", [
        ({"symbol": None}, "trade.symbol"),
        ({"quantity": 0}, "trade.quantity"),
        ({"quantity": True}, "trade.quantity"),
        ({"indicator": "BUY"}, "trade.indicator"),
        ({"price": None}, "trade.price"),
        ({"price": Decimal("-1")}, "trade.price"),
        ({"id": "already-set"}, "trade.id"),
    ])
    def test_malformed_trade(self, make_trade, changes, argument):
        trade = make_trade()
        for name, value in changes.items():
            setattr(trade, name, value)

        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_trade(trade)

        assert exc_info.value.argument == argument
