"""TTL-windowed recent-trades cache."""

from .recent_trades import EvictionEvent, RecentTradeCache

__all__ = ["EvictionEvent", "RecentTradeCache"]
