"""Append-only in-memory trade ledger for audit trails and aggregation."""

import threading
import time
import uuid
from typing import Any, Callable, Iterable, Optional

from ..cache.recent_trades import EvictionEvent, RecentTradeCache
from ..config.defaults import CacheParams
from ..data.models import Trade
from ..data.validators import normalize_symbol, validate_trade
from ..errors import InvalidArgumentError
from ..logging.config import get_cache_logger


class TradeStore:
    """
    Ledger of every trade ever recorded, fronted by a recent-trades cache.

    Trades are never deleted. When the cache evicts a symbol's bucket the
    trades in it are flagged aged-out here, which removes them from the
    per-symbol view while keeping them in the full ledger.
    """

    def __init__(
        self,
        ttl_ms: int = 2000,
        sweep_interval_ms: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.logger = get_cache_logger(__name__)
        self._lock = threading.RLock()

        self._ledger: list[Trade] = []
        self._by_symbol: dict[str, list[Trade]] = {}

        # The cache shares the ledger lock so eviction, aged-out marking and
        # reloads from the ledger are one atomic step
        self.cache = RecentTradeCache(
            ttl_ms=ttl_ms,
            loader=self.trades_for_symbol,
            clock=clock,
            sweep_interval_ms=sweep_interval_ms,
            lock=self._lock,
        )
        self.cache.add_eviction_listener(self._on_eviction)
        self.cache.start()

    @classmethod
    def from_config(
        cls,
        params: CacheParams,
        clock: Callable[[], float] = time.monotonic,
    ) -> "TradeStore":
        """Create a store from cache parameters."""
        return cls(
            ttl_ms=params.trade_ttl_ms,
            sweep_interval_ms=params.sweep_interval_ms,
            clock=clock,
        )

    def record(self, trade: Trade) -> str:
        """
        Record a trade in the recent-trades cache and the ledger.

        Args:
            trade: Unrecorded trade

        Returns:
            System generated trade id

        Raises:
            InvalidArgumentError: If the trade is None, malformed or already recorded
        """
        validate_trade(trade)
        key = normalize_symbol(trade.symbol, argument="trade.symbol")

        trade_id = str(uuid.uuid4())

        with self._lock:
            if trade.id is not None:
                raise InvalidArgumentError(
                    f"trade already recorded with id={trade.id}",
                    argument="trade.id"
                )

            # Ledger entry is published only after the cache upsert succeeded
            self.cache.upsert(key, trade)
            trade.assign_id(trade_id)
            self._ledger.append(trade)
            self._by_symbol.setdefault(key, []).append(trade)

        self.logger.info(
            "Trade recorded",
            trade_id=trade_id,
            symbol=key,
            quantity=trade.quantity,
            indicator=trade.indicator.value,
            price=str(trade.price)
        )

        return trade_id

    def trades_for_symbol(self, symbol: str) -> list[Trade]:
        """All ledger trades for a symbol that have not aged out, in record order."""
        key = normalize_symbol(symbol)

        with self._lock:
            # Lazy-expiry mode has no sweeper, age out stale buckets first
            self.cache.sweep()
            return [t for t in self._by_symbol.get(key, []) if not t.aged_out]

    def all_trades(self) -> list[Trade]:
        """The entire ledger, aged-out trades included."""
        with self._lock:
            return list(self._ledger)

    def recent_trades(self, symbol: Optional[str] = None) -> list[Trade]:
        """Trades inside the retention window, for one symbol or all of them."""
        if symbol is None:
            return self.cache.snapshot_all()
        return self.cache.get(symbol)

    def mark_aged_out(self, trades: Iterable[Trade]) -> int:
        """
        Flag trades as aged out. Already aged-out trades are left untouched.

        Returns:
            Number of trades whose flag changed
        """
        changed = 0
        with self._lock:
            for trade in trades:
                if trade.mark_aged_out():
                    changed += 1
        return changed

    def _on_eviction(self, event: EvictionEvent) -> None:
        changed = 0

        with self._lock:
            for trade in event.trades:
                try:
                    if trade.mark_aged_out():
                        changed += 1
                except Exception as e:
                    # Continue with the remaining trades
                    self.logger.error(
                        "Failed to mark trade aged out",
                        symbol=event.symbol,
                        trade=repr(trade),
                        error=str(e)
                    )

        if changed:
            self.logger.info(
                "Trades aged out",
                symbol=event.symbol,
                aged_out=changed,
                cause=event.cause
            )

    def get_stats(self) -> dict[str, Any]:
        """Ledger statistics."""
        with self._lock:
            self.cache.sweep()
            aged_out = sum(1 for t in self._ledger if t.aged_out)
            return {
                "total_trades": len(self._ledger),
                "aged_out_trades": aged_out,
                "live_trades": len(self._ledger) - aged_out,
                "symbols": sorted(self._by_symbol),
                "cached_buckets": len(self.cache),
            }

    def close(self) -> None:
        """Stop the cache sweeper."""
        self.cache.stop()

    def __enter__(self) -> "TradeStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
