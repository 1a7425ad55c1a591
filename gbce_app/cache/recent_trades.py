"""
Recent-trades cache with write-time based bucket expiry.

Each symbol owns one bucket of trades. Writing to a bucket resets its
deadline to now + TTL; once the deadline passes the whole bucket is removed
and every registered eviction listener is told about the removed trades.
Expiry is checked lazily on every access and, optionally, by a background
sweeper thread.

Bucket removal, deadline reset and listener notification all happen under
one re-entrant lock, so an eviction is reported exactly once and never for a
bucket a concurrent writer has just repopulated.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..data.models import Trade
from ..data.validators import normalize_symbol
from ..errors import ExecutionFailureError, GBCEServiceError
from ..logging.config import get_cache_logger, log_eviction

EVICTION_EXPIRED = "expired"
EVICTION_EXPLICIT = "explicit"

TradeLoader = Callable[[str], list[Trade]]


@dataclass(frozen=True)
class EvictionEvent:
    """A bucket removed from the cache."""
    symbol: str
    trades: tuple[Trade, ...]
    cause: str


EvictionListener = Callable[[EvictionEvent], None]


class _Bucket:
    __slots__ = ("trades", "expires_at")

    def __init__(self, trades: list[Trade], expires_at: float):
        self.trades = trades
        self.expires_at = expires_at


class RecentTradeCache:
    """Per-symbol trade buckets that age out TTL after their last write."""

    def __init__(
        self,
        ttl_ms: int = 2000,
        loader: Optional[TradeLoader] = None,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval_ms: Optional[int] = None,
        lock: Optional[threading.RLock] = None,
    ):
        """
        Args:
            ttl_ms: Retention window measured from the bucket's last write
            loader: Computes a bucket for a symbol that has none cached
            clock: Monotonic clock in seconds
            sweep_interval_ms: Background sweep period, None or 0 for lazy expiry only
            lock: Re-entrant lock to share with the owner of the loader
        """
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")

        self.ttl_ms = ttl_ms
        self.loader = loader
        self.clock = clock
        self.sweep_interval_ms = sweep_interval_ms
        self.logger = get_cache_logger(__name__)

        self._ttl_seconds = ttl_ms / 1000.0
        self._buckets: dict[str, _Bucket] = {}
        self._listeners: list[EvictionListener] = []
        self._lock = lock if lock is not None else threading.RLock()

        self._stop_event = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    def add_eviction_listener(self, listener: EvictionListener) -> None:
        """Register a callback fired once for every removed bucket."""
        with self._lock:
            self._listeners.append(listener)

    def get(self, symbol: str) -> list[Trade]:
        """
        Get the live trades for a symbol.

        Loads and caches the bucket when none is cached. Never returns None.

        Raises:
            InvalidArgumentError: If symbol is None or blank
            ExecutionFailureError: If the loader fails
        """
        key = normalize_symbol(symbol)

        with self._lock:
            now = self.clock()
            self._expire_if_stale(key, now)

            bucket = self._buckets.get(key)
            if bucket is None:
                trades = self._load(key)
                bucket = _Bucket(list(trades), now + self._ttl_seconds)
                self._buckets[key] = bucket
                self.logger.debug("Trade bucket loaded", symbol=key, trade_count=len(trades))

            return list(bucket.trades)

    def peek(self, symbol: str) -> Optional[list[Trade]]:
        """Get the live bucket for a symbol without loading, None if absent."""
        key = normalize_symbol(symbol)

        with self._lock:
            self._expire_if_stale(key, self.clock())
            bucket = self._buckets.get(key)
            return list(bucket.trades) if bucket is not None else None

    def upsert(self, symbol: str, trade: Trade) -> None:
        """Append a trade to the symbol's bucket and reset its deadline."""
        key = normalize_symbol(symbol)

        with self._lock:
            now = self.clock()
            # An expired bucket is evicted first so its trades age out
            self._expire_if_stale(key, now)

            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = _Bucket([], now)
                self._buckets[key] = bucket

            bucket.trades.append(trade)
            bucket.expires_at = now + self._ttl_seconds

    def snapshot_all(self) -> list[Trade]:
        """Flatten every live bucket into one list."""
        with self._lock:
            self._expire_all(self.clock())

            trades: list[Trade] = []
            for bucket in self._buckets.values():
                trades.extend(bucket.trades)
            return trades

    def sweep(self) -> int:
        """
        Remove every expired bucket.

        Returns:
            Number of buckets evicted
        """
        with self._lock:
            return self._expire_all(self.clock())

    def invalidate(self, symbol: str) -> bool:
        """Explicitly remove a symbol's bucket. Returns False if none was cached."""
        key = normalize_symbol(symbol)

        with self._lock:
            if key not in self._buckets:
                return False
            self._evict(key, EVICTION_EXPLICIT)
            return True

    def invalidate_all(self) -> int:
        """Explicitly remove every bucket."""
        with self._lock:
            keys = list(self._buckets)
            for key in keys:
                self._evict(key, EVICTION_EXPLICIT)
            return len(keys)

    def symbols(self) -> list[str]:
        """Symbols with a cached bucket, expired or not."""
        with self._lock:
            return list(self._buckets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def start(self) -> None:
        """Start the background sweeper if a sweep interval is configured."""
        if not self.sweep_interval_ms:
            return

        with self._lock:
            if self._sweeper is not None and self._sweeper.is_alive():
                return

            self._stop_event.clear()
            self._sweeper = threading.Thread(
                target=self._run_sweeper,
                name="recent-trade-sweeper",
                daemon=True,
            )
            self._sweeper.start()

        self.logger.info(
            "Recent trade sweeper started",
            ttl_ms=self.ttl_ms,
            sweep_interval_ms=self.sweep_interval_ms
        )

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the background sweeper."""
        self._stop_event.set()

        sweeper = self._sweeper
        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join(timeout)
        self._sweeper = None

    @property
    def is_sweeping(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def _run_sweeper(self) -> None:
        interval = self.sweep_interval_ms / 1000.0

        while not self._stop_event.wait(interval):
            try:
                evicted = self.sweep()
            except Exception as e:
                # Keep sweeping, there is no caller to propagate to
                self.logger.error("Sweep failed", error=str(e), exc_info=True)
                continue

            if evicted:
                self.logger.debug("Sweep completed", evicted_buckets=evicted)

    def _load(self, key: str) -> list[Trade]:
        if self.loader is None:
            return []

        try:
            trades = self.loader(key)
        except GBCEServiceError:
            raise
        except Exception as e:
            self.logger.error(
                "Exception occurred when loading trades into cache",
                symbol=key,
                error=str(e),
                exc_info=True
            )
            raise ExecutionFailureError(
                f"failed to load recent trades for symbol={key}: {e}",
                operation="recent_trades_load",
                cause=e,
                context={"symbol": key}
            ) from e

        return list(trades) if trades is not None else []

    def _expire_if_stale(self, key: str, now: float) -> None:
        bucket = self._buckets.get(key)
        if bucket is not None and now >= bucket.expires_at:
            self._evict(key, EVICTION_EXPIRED)

    def _expire_all(self, now: float) -> int:
        expired = [key for key, bucket in self._buckets.items() if now >= bucket.expires_at]
        for key in expired:
            self._evict(key, EVICTION_EXPIRED)
        return len(expired)

    def _evict(self, key: str, cause: str) -> None:
        # Caller holds the lock
        bucket = self._buckets.pop(key)
        event = EvictionEvent(symbol=key, trades=tuple(bucket.trades), cause=cause)

        if event.trades:
            log_eviction(self.logger, key, len(event.trades), cause)
        else:
            self.logger.debug("Empty trade bucket evicted", symbol=key, cause=cause)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                self.logger.error(
                    "Eviction listener failed",
                    symbol=key,
                    cause=cause,
                    error=str(e),
                    exc_info=True
                )
