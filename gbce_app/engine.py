"""
Main calculation engine.

Exposes the public operation surface of the service: recording trades and
calculating dividend yield, P/E ratio, volume weighted stock price and the
GBCE All Share Index. Every operation validates its input before touching
the catalog, the cache or the ledger.
"""

import time
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional, Union

import structlog

from .catalog.sources import InstrumentSource, StaticInstrumentSource
from .catalog.stock_catalog import StockCatalog
from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.models import Trade
from .data.parsers import parse_trade_payload
from .data.validators import normalize_symbol, validate_price
from .errors import InvalidArgumentError, NoDataError
from .logging.config import configure_logging, get_calculation_logger, log_calculation
from .metrics.dividend import calculate_dividend_yield, calculate_pe_ratio
from .metrics.share_index import calculate_share_index
from .metrics.vwap import calculate_vwap
from .persistence.trade_store import TradeStore

logger = structlog.get_logger(__name__)


class CalculationEngine:
    """
    Coordinator for trade recording and indicator calculations.

    Data flow:
    record_trade → TradeStore (ledger + recent-trades cache)
    vwap → recent-trades cache, dividend_yield / pe_ratio → StockCatalog,
    share_index → full ledger
    """

    def __init__(
        self,
        catalog: StockCatalog,
        store: TradeStore,
        config: Optional[DefaultConfig] = None
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.config = config or get_default_config()
        self.logger = get_calculation_logger(__name__)

    @classmethod
    def create(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        source: Optional[InstrumentSource] = None,
        clock: Optional[Callable[[], float]] = None,
        setup_logging: bool = False,
    ) -> "CalculationEngine":
        """
        Build an engine with configuration from the config directory.

        Args:
            config_dir: Directory holding settings.yaml and instruments.yaml
            overrides: Explicit configuration overrides
            source: Instrument source, defaults to the configured table
            clock: Monotonic clock for the recent-trades cache
            setup_logging: Configure structlog from the logging section
        """
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        config = loader.build_config(overrides)

        if setup_logging:
            configure_logging(level=config.logging.level, format_json=config.logging.format_json)

        if source is None:
            source = StaticInstrumentSource.from_config(loader)

        catalog = StockCatalog(source, max_size=config.cache.catalog_max_size)
        store = TradeStore.from_config(config.cache, clock=clock or time.monotonic)

        logger.info(
            "Calculation engine initialized",
            trade_ttl_ms=config.cache.trade_ttl_ms,
            sweep_interval_ms=config.cache.sweep_interval_ms,
            catalog_max_size=config.cache.catalog_max_size
        )

        return cls(catalog, store, config)

    def record_trade(self, trade: Trade) -> str:
        """
        Record a trade for auditing and aggregation.

        Returns:
            System generated trade id

        Raises:
            InvalidArgumentError: If trade is None or malformed
        """
        if trade is None:
            raise InvalidArgumentError("trade cannot be null", argument="trade")

        self.logger.debug("Recording trade", trade=repr(trade))
        trade_id = self.store.record(trade)

        self.logger.info("Trade successfully registered", trade_id=trade_id)
        return trade_id

    def record_trade_payload(self, raw_data: Union[str, bytes]) -> str:
        """Parse a raw JSON trade message and record it."""
        return self.record_trade(parse_trade_payload(raw_data))

    def dividend_yield(self, symbol: str, price: Any) -> Decimal:
        """
        Calculate the dividend yield for a market price.

        Raises:
            InvalidArgumentError: If symbol or price is missing, or price <= 0
            NotFoundError: If the symbol is unknown
            InternalError: If the instrument has an unknown stock type
        """
        key = normalize_symbol(symbol)
        market_price = validate_price(price)

        instrument = self.catalog.lookup(key)
        result = calculate_dividend_yield(
            instrument,
            market_price,
            scale=self.config.calculation.ratio_scale
        )

        log_calculation(
            self.logger, "dividend_yield", key, result,
            context={"price": str(market_price), "stock_type": instrument.type.value}
        )
        return result

    def pe_ratio(self, symbol: str, price: Any) -> Decimal:
        """
        Calculate the P/E ratio: price / dividend yield.

        Evaluated from the instrument's dividend directly, so the result is
        not affected by how the yield itself is rounded.

        Raises:
            InvalidArgumentError: On invalid input or a zero dividend
            NotFoundError: If the symbol is unknown
            InternalError: If the instrument has an unknown stock type
        """
        key = normalize_symbol(symbol)
        market_price = validate_price(price)

        instrument = self.catalog.lookup(key)
        result = calculate_pe_ratio(
            instrument,
            market_price,
            scale=self.config.calculation.ratio_scale
        )

        log_calculation(
            self.logger, "pe_ratio", key, result,
            context={"price": str(market_price), "stock_type": instrument.type.value}
        )
        return result

    def vwap(self, symbol: str) -> Decimal:
        """
        Calculate the volume weighted stock price over recent trades.

        Raises:
            InvalidArgumentError: If symbol is missing
            NoDataError: If the symbol has no trades in the retention window
        """
        key = normalize_symbol(symbol)
        trades = self.store.recent_trades(key)

        if not trades:
            raise NoDataError(
                f"no data found for symbol={key} to perform weighted stock price calculation",
                symbol=key
            )

        params = self.config.calculation
        result = calculate_vwap(trades, scale=params.vwap_scale)

        log_calculation(self.logger, "vwap", key, result, context={"trade_count": len(trades)})
        return result

    def share_index(self) -> Decimal:
        """
        Calculate the GBCE All Share Index over every recorded trade.

        Raises:
            NoDataError: If no trades have been recorded
        """
        trades = self.store.all_trades()

        if not trades:
            raise NoDataError("no trades found, cannot calculate share index")

        params = self.config.calculation
        result = calculate_share_index(
            (t.price for t in trades),
            scale=params.index_scale,
            precision=params.index_precision
        )

        log_calculation(self.logger, "share_index", None, result, context={"trade_count": len(trades)})
        return result

    def recent_trades(self, symbol: str) -> list[Trade]:
        """Trades for a symbol inside the retention window."""
        return self.store.recent_trades(normalize_symbol(symbol))

    def market_summary(self) -> dict[str, Any]:
        """
        Snapshot of current indicators.

        Includes VWAP per symbol with live trades, the share index when any
        trade exists, and ledger statistics.
        """
        live_symbols = sorted({normalize_symbol(t.symbol) for t in self.store.recent_trades()})

        vwaps: dict[str, str] = {}
        for symbol in live_symbols:
            try:
                vwaps[symbol] = str(self.vwap(symbol))
            except NoDataError:
                # bucket aged out between the snapshot and the read
                continue

        try:
            index: Optional[str] = str(self.share_index())
        except NoDataError:
            index = None

        return {
            "vwap": vwaps,
            "share_index": index,
            "store": self.store.get_stats(),
            "catalog": self.catalog.stats(),
        }

    def close(self) -> None:
        """Release background resources."""
        self.store.close()

    def __enter__(self) -> "CalculationEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
