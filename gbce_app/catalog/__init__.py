"""Instrument reference data: data sources and the cached stock catalog."""

from .sources import InstrumentSource, StaticInstrumentSource
from .stock_catalog import StockCatalog

__all__ = [
    "InstrumentSource",
    "StaticInstrumentSource",
    "StockCatalog",
]
