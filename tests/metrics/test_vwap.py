"""Tests for volume weighted stock price calculations"""

from decimal import Decimal

import pytest

from gbce_app.errors import NoDataError
from gbce_app.metrics.vwap import calculate_vwap


class TestVWAP:
    """Test calculate_vwap"""

    def test_single_trade(self, make_trade):
        """Test one trade of price 10, quantity 1 gives 10"""
        assert calculate_vwap([make_trade(quantity=1, price="10")]) == Decimal("10")

    def test_equal_prices_differing_quantities(self, make_trade):
        """Test equal prices give that price regardless of quantity"""
        trades = [make_trade(quantity=1, price="10"), make_trade(quantity=7, price="10")]

        assert calculate_vwap(trades) == Decimal("10")

    def test_weighted_by_quantity(self, make_trade):
        """Test (10*1 + 20*3) / 4 = 17.5 rounds half up to 18"""
        trades = [make_trade(quantity=1, price="10"), make_trade(quantity=3, price="20")]

        assert calculate_vwap(trades) == Decimal("18")

    def test_rounds_half_up_once_at_the_end(self, make_trade):
        """Test per-term rounding would give a different answer"""
        # Rounding each price first gives (10 + 10 + 11) / 3 = 10
        trades = [make_trade(quantity=1, price=p) for p in ("10.4", "10.4", "10.7")]

        assert calculate_vwap(trades) == Decimal("11")

    def test_rounds_down_below_half(self, make_trade):
        """Test 31 / 3 rounds to 10"""
        trades = [make_trade(quantity=2, price="10"), make_trade(quantity=1, price="11")]

        assert calculate_vwap(trades) == Decimal("10")

    def test_whole_unit_result(self, make_trade):
        """Test the result has no fractional digits"""
        result = calculate_vwap([make_trade(quantity=3, price="10.49")])

        assert result == Decimal("10")
        assert result.as_tuple().exponent == 0

    def test_custom_scale(self, make_trade):
        """Test a non-default scale"""
        trades = [make_trade(quantity=2, price="10"), make_trade(quantity=1, price="11")]

        assert calculate_vwap(trades, scale=2) == Decimal("10.33")

    def test_large_values_stay_exact(self, make_trade):
        """Test huge notionals are summed without precision loss"""
        big = "12345678901234567890.123456789"
        trades = [make_trade(quantity=10**12, price=big), make_trade(quantity=10**12, price=big)]

        assert calculate_vwap(trades) == Decimal("12345678901234567890")

    def test_many_significant_digits_not_pre_rounded(self, make_trade):
        """Test a price wider than any working precision rounds only at the end"""
        trades = [make_trade(quantity=1, price="123456789012345678901234567890123.46")]

        assert calculate_vwap(trades) == Decimal("123456789012345678901234567890123")

    def test_just_below_half_rounds_down(self, make_trade):
        """Test 2.4999... never becomes 2.5 before the final rounding"""
        trades = [make_trade(quantity=1, price="2.4999999999999999999999999999999999")]

        assert calculate_vwap(trades) == Decimal("2")

    def test_empty_trades(self):
        """Test no trades raises NoDataError"""
        with pytest.raises(NoDataError):
            calculate_vwap([])
