"""
Instrument data sources queried by the stock catalog on a cache miss.

The reference deployment serves a fixed five-instrument table; a real data
source only has to implement load_by_symbol.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional

from ..data.models import REFERENCE_INSTRUMENTS, Instrument
from ..errors import NotFoundError
from ..logging.config import get_logger

if TYPE_CHECKING:
    from ..config.loader import ConfigLoader

logger = get_logger(__name__)


class InstrumentSource(ABC):
    """Authoritative provider of instrument reference data."""

    @abstractmethod
    def load_by_symbol(self, symbol: str) -> Instrument:
        """
        Load the instrument for a normalized (upper-case) symbol.

        Raises:
            NotFoundError: If no instrument matches
        """


class StaticInstrumentSource(InstrumentSource):
    """In-memory instrument table."""

    def __init__(self, instruments: Optional[Iterable[Instrument]] = None):
        if instruments is None:
            instruments = REFERENCE_INSTRUMENTS
        self._instruments = {inst.symbol.upper(): inst for inst in instruments}

    @classmethod
    def from_config(cls, loader: "ConfigLoader") -> "StaticInstrumentSource":
        """Build from instruments.yaml, falling back to the reference table when it is absent."""
        instruments = loader.load_instruments()
        if not instruments:
            logger.info(
                "No instrument table configured, using reference instruments",
                config_dir=str(loader.config_dir)
            )
            return cls()

        logger.info("Loaded instrument table", instrument_count=len(instruments))
        return cls(instruments)

    def load_by_symbol(self, symbol: str) -> Instrument:
        instrument = self._instruments.get(symbol.upper())
        if instrument is None:
            raise NotFoundError(f"no stocks found for symbol={symbol}", symbol=symbol)
        return instrument

    def symbols(self) -> list[str]:
        """All symbols known to this source."""
        return sorted(self._instruments)
