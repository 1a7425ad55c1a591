#!/usr/bin/env python3
"""
Basic Usage Example - GBCE trade indicators

This script records a handful of trades for the reference instruments and
shows how to:
- Build the engine from the config directory
- Record trades, both as objects and as raw JSON messages
- Calculate dividend yield, P/E ratio, VWAP and the All Share Index
- Watch a recent-trades bucket age out of the VWAP window

Run: python examples/basic_usage.py
"""

import time
from decimal import Decimal

from gbce_app.data.models import Trade, TradeIndicator
from gbce_app.engine import CalculationEngine
from gbce_app.errors import GBCEServiceError, NoDataError


def print_ratios(engine: CalculationEngine, symbol: str, price: Decimal) -> None:
    """Print dividend yield and P/E ratio for a market price."""
    print(f"📊 {symbol} @ {price}")
    print(f"  Dividend yield: {engine.dividend_yield(symbol, price)}")
    try:
        print(f"  P/E ratio: {engine.pe_ratio(symbol, price)}")
    except GBCEServiceError as e:
        print(f"  P/E ratio: n/a ({e.kind}: {e.message})")


def main():
    # Short window so the example finishes quickly
    overrides = {
        "cache": {"trade_ttl_ms": 1000, "sweep_interval_ms": 200},
        "logging": {"level": "WARNING"},
    }

    with CalculationEngine.create(overrides=overrides, setup_logging=True) as engine:
        print("🚀 Recording trades...")
        engine.record_trade(Trade("POP", 100, TradeIndicator.BUY, Decimal("101.25")))
        engine.record_trade(Trade("POP", 50, TradeIndicator.SELL, Decimal("99.50")))
        engine.record_trade(Trade("GIN", 10, TradeIndicator.BUY, Decimal("120")))
        engine.record_trade_payload(
            b'{"symbol": "ALE", "quantity": 25, "indicator": "BUY", "price": "61.40"}'
        )

        for symbol, price in (("POP", Decimal("100")), ("GIN", Decimal("120")), ("TEA", Decimal("95"))):
            print_ratios(engine, symbol, price)

        print(f"\n📈 POP VWAP: {engine.vwap('POP')}")
        print(f"📈 All Share Index: {engine.share_index()}")

        print("\n⏳ Waiting for the recent-trades window to pass...")
        time.sleep(1.5)

        try:
            engine.vwap("POP")
        except NoDataError as e:
            print(f"  VWAP unavailable: {e.message}")

        print(f"📈 All Share Index (full ledger): {engine.share_index()}")
        print(f"\n📋 Summary: {engine.market_summary()}")


if __name__ == "__main__":
    main()
