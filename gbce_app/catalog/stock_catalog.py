"""Read-through, size-bounded instrument cache."""

import threading
from collections import OrderedDict
from typing import Any, Optional

from ..data.models import Instrument
from ..data.validators import normalize_symbol
from ..errors import ExecutionFailureError, NotFoundError
from ..logging.config import get_logger
from .sources import InstrumentSource, StaticInstrumentSource


class StockCatalog:
    """
    Case-insensitive instrument lookup backed by an LRU cache.

    A miss loads the instrument from the data source; hits are served from
    the cache until capacity pressure evicts the least recently used entry.
    Failed lookups are never cached.
    """

    def __init__(self, source: Optional[InstrumentSource] = None, max_size: int = 5):
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.source = source or StaticInstrumentSource()
        self.max_size = max_size
        self.logger = get_logger(__name__)

        self._cache: "OrderedDict[str, Instrument]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def lookup(self, symbol: str) -> Instrument:
        """
        Get the instrument for a symbol.

        Raises:
            InvalidArgumentError: If symbol is None or blank
            NotFoundError: If the data source has no such instrument
            ExecutionFailureError: If the data source fails unexpectedly
        """
        key = normalize_symbol(symbol)

        with self._lock:
            instrument = self._cache.get(key)
            if instrument is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                return instrument
            self._misses += 1

        # Load outside the lock, the source may be slow
        instrument = self._load(key)

        with self._lock:
            self._cache[key] = instrument
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_size:
                evicted, _ = self._cache.popitem(last=False)
                self.logger.debug("Instrument evicted from catalog cache", symbol=evicted)

        return instrument

    def _load(self, key: str) -> Instrument:
        self.logger.info(
            "Initial fetch, loading instrument from data source",
            symbol=key
        )
        try:
            return self.source.load_by_symbol(key)
        except NotFoundError:
            self.logger.warning("No instrument found", symbol=key)
            raise
        except Exception as e:
            self.logger.error(
                "Instrument load failed",
                symbol=key,
                error=str(e),
                exc_info=True
            )
            raise ExecutionFailureError(
                f"failed to load instrument for symbol={key}: {e}",
                operation="catalog_load",
                cause=e,
                context={"symbol": key}
            ) from e

    def cached_symbols(self) -> list[str]:
        """Symbols currently cached, least recently used first."""
        with self._lock:
            return list(self._cache)

    def clear(self) -> None:
        """Drop every cached instrument."""
        with self._lock:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Cache hit/miss statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
            }
