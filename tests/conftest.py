"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

import pytest

from gbce_app.catalog.stock_catalog import StockCatalog
from gbce_app.config.defaults import get_default_config
from gbce_app.data.models import Trade, TradeIndicator
from gbce_app.engine import CalculationEngine
from gbce_app.persistence.trade_store import TradeStore

TTL_MS = 2000


class FakeClock:
    """Manually advanced monotonic clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_trade() -> Callable[..., Trade]:
    """Factory for unrecorded trades."""
    def _make(symbol: str = "POP", quantity: int = 1, price="10",
              indicator: TradeIndicator = TradeIndicator.BUY) -> Trade:
        return Trade(
            symbol=symbol,
            quantity=quantity,
            indicator=indicator,
            price=Decimal(str(price)),
            timestamp=datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc),
        )
    return _make


@pytest.fixture
def store(fake_clock):
    """Trade store on a fake clock with lazy expiry only."""
    trade_store = TradeStore(ttl_ms=TTL_MS, sweep_interval_ms=None, clock=fake_clock)
    yield trade_store
    trade_store.close()


@pytest.fixture
def engine(store):
    """Engine over the reference instrument table and the fake-clock store."""
    calc_engine = CalculationEngine(StockCatalog(), store, get_default_config())
    yield calc_engine
    calc_engine.close()
