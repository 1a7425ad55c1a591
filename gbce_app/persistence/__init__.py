"""In-memory trade ledger."""

from .trade_store import TradeStore

__all__ = ["TradeStore"]
