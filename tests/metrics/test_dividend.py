"""Tests for dividend yield and P/E ratio calculations"""

import dataclasses
from decimal import Decimal

import pytest

from gbce_app.data.models import REFERENCE_INSTRUMENTS, Instrument, StockType
from gbce_app.errors import InternalError, InvalidArgumentError
from gbce_app.metrics.dividend import calculate_dividend_yield, calculate_pe_ratio

INSTRUMENTS = {i.symbol: i for i in REFERENCE_INSTRUMENTS}


class TestDividendYield:
    """Test calculate_dividend_yield"""

    @pytest.mark.parametrize("symbol", ["TEA", "POP", "ALE", "JOE"])
    @pytest.mark.parametrize("price", ["1", "2", "4", "12.5", "100"])
    def test_common_yield_is_last_dividend_over_price(self, symbol, price):
        """Test COMMON: last_dividend / price"""
        instrument = INSTRUMENTS[symbol]
        price = Decimal(price)

        result = calculate_dividend_yield(instrument, price)

        assert result == instrument.last_dividend / price

    @pytest.mark.parametrize("price", ["1", "2", "4", "12.5", "100"])
    def test_preferred_yield_uses_fixed_dividend_and_par(self, price):
        """Test PREFERRED: fixed_dividend * par_value / price"""
        gin = INSTRUMENTS["GIN"]
        price = Decimal(price)

        result = calculate_dividend_yield(gin, price)

        assert result == gin.fixed_dividend * gin.par_value / price

    def test_ale_at_unit_price(self):
        """Test ALE at price 1 yields 23"""
        assert calculate_dividend_yield(INSTRUMENTS["ALE"], Decimal("1")) == Decimal("23")

    def test_gin_at_unit_price(self):
        """Test GIN at price 1 yields 2"""
        assert calculate_dividend_yield(INSTRUMENTS["GIN"], Decimal("1")) == Decimal("2")

    def test_non_terminating_quotient_rounded_half_up(self):
        """Test 8 / 3 is rounded half up to the requested scale"""
        result = calculate_dividend_yield(INSTRUMENTS["POP"], Decimal("3"))

        assert result == Decimal("2.6666666667")

    def test_custom_scale(self):
        """Test the scale argument"""
        result = calculate_dividend_yield(INSTRUMENTS["POP"], Decimal("3"), scale=2)

        assert result == Decimal("2.67")
        assert result.as_tuple().exponent == -2

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-1")])
    def test_non_positive_price_rejected(self, price):
        """Test division by zero never reaches the arithmetic"""
        with pytest.raises(InvalidArgumentError):
            calculate_dividend_yield(INSTRUMENTS["POP"], price)

    def test_unknown_stock_type(self):
        """Test a type outside COMMON/PREFERRED is an internal error"""
        other = dataclasses.replace(INSTRUMENTS["ALE"], type="OTHER")

        with pytest.raises(InternalError) as exc_info:
            calculate_dividend_yield(other, Decimal("1"))

        assert exc_info.value.recoverable is False


class TestPERatio:
    """Test calculate_pe_ratio"""

    def test_price_over_dividend_yield(self):
        """Test P/E = price / (dividend / price)"""
        assert calculate_pe_ratio(INSTRUMENTS["POP"], Decimal("4")) == Decimal("2")
        assert calculate_pe_ratio(INSTRUMENTS["GIN"], Decimal("1")) == Decimal("0.5")

    def test_rounded_half_up(self):
        """Test JOE at 5: 25 / 13 rounded to scale"""
        assert calculate_pe_ratio(INSTRUMENTS["JOE"], Decimal("5")) == Decimal("1.9230769231")

    def test_not_derived_from_rounded_yield(self):
        """Test POP at 7 is exactly 49 / 8, not 7 / 1.1428571429"""
        result = calculate_pe_ratio(INSTRUMENTS["POP"], Decimal("7"))

        assert result == Decimal("6.125")
        assert str(result) == "6.125"

    def test_tiny_yield_is_not_zero(self):
        """Test a yield below the ratio scale still gives a P/E"""
        price = Decimal(10**12)

        assert calculate_dividend_yield(INSTRUMENTS["POP"], price) == 0
        assert calculate_pe_ratio(INSTRUMENTS["POP"], price) == Decimal("125000000000000000000000")

    def test_zero_dividend_rejected(self):
        """Test TEA with last dividend 0 cannot have a P/E"""
        with pytest.raises(InvalidArgumentError):
            calculate_pe_ratio(INSTRUMENTS["TEA"], Decimal("10"))

    def test_zero_fixed_dividend_preferred(self):
        """Test a preferred stock with zero fixed dividend cannot have a P/E"""
        gin = Instrument("GIN", StockType.PREFERRED, Decimal("8"), Decimal("0"), Decimal("100"))

        with pytest.raises(InvalidArgumentError):
            calculate_pe_ratio(gin, Decimal("1"))

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-2")])
    def test_non_positive_price_rejected(self, price):
        """Test the price is validated before dividing"""
        with pytest.raises(InvalidArgumentError):
            calculate_pe_ratio(INSTRUMENTS["POP"], price)


class TestTrailingZeros:
    """Test ratio results drop trailing fractional zeros"""

    @pytest.mark.parametrize("symbol,price,expected", [
        ("TEA", "100", "0"),
        ("ALE", "1", "23"),
        ("GIN", "4", "0.5"),
        ("POP", "3", "2.6666666667"),
    ])
    def test_yield_text(self, symbol, price, expected):
        """Test the rendered yield"""
        assert str(calculate_dividend_yield(INSTRUMENTS[symbol], Decimal(price))) == expected

    def test_large_integral_ratio_not_in_exponent_form(self):
        """Test whole results keep plain notation"""
        assert str(calculate_pe_ratio(INSTRUMENTS["POP"], Decimal("40"))) == "200"
