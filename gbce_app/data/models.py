"""
Canonical data models for trades and instrument reference data.

Trades are the only mutable records in the system: the store assigns their
id once and the eviction process flips their aged-out flag once. Instruments
are immutable reference data.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..errors import InternalError


class TradeIndicator(str, Enum):
    """Side of a trade."""
    BUY = "BUY"
    SELL = "SELL"


class StockType(str, Enum):
    """Instrument type, drives the dividend yield formula."""
    COMMON = "COMMON"
    PREFERRED = "PREFERRED"


@dataclass(eq=False)
class Trade:
    """A single recorded trade, identified by its system generated id."""
    symbol: str                         # Stock symbol as supplied by the caller
    quantity: int                       # Number of shares, positive
    indicator: TradeIndicator           # BUY or SELL
    price: Decimal                      # Trade price, non-negative
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: Optional[str] = None            # Assigned by TradeStore.record
    aged_out: bool = False              # Set once the recent-trades bucket expires

    def __post_init__(self):
        """Coerce prices given as int or str into Decimal."""
        if self.price is not None and not isinstance(self.price, Decimal) \
                and isinstance(self.price, (int, str)) and not isinstance(self.price, bool):
            self.price = Decimal(str(self.price))

    def assign_id(self, trade_id: str) -> None:
        """Assign the system id. Ids are immutable once set."""
        if self.id is not None:
            raise InternalError(
                f"trade already has id={self.id}",
                context={"existing_id": self.id, "new_id": trade_id}
            )
        self.id = trade_id

    def mark_aged_out(self) -> bool:
        """
        Flag the trade as aged out of the recent-trades window.

        Returns:
            True if the flag changed, False if it was already set
        """
        if self.aged_out:
            return False
        self.aged_out = True
        return True


@dataclass(frozen=True)
class Instrument:
    """Static reference data for a tradable stock."""
    symbol: str
    type: StockType
    last_dividend: Decimal
    fixed_dividend: Decimal     # Rate, only meaningful for PREFERRED stock
    par_value: Decimal


# Reference deployment instrument table
REFERENCE_INSTRUMENTS: tuple[Instrument, ...] = (
    Instrument("TEA", StockType.COMMON, Decimal("0"), Decimal("0"), Decimal("100")),
    Instrument("POP", StockType.COMMON, Decimal("8"), Decimal("0"), Decimal("100")),
    Instrument("ALE", StockType.COMMON, Decimal("23"), Decimal("0"), Decimal("60")),
    Instrument("GIN", StockType.PREFERRED, Decimal("8"), Decimal("0.02"), Decimal("100")),
    Instrument("JOE", StockType.COMMON, Decimal("13"), Decimal("0"), Decimal("250")),
)
