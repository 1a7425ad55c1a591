"""Default configuration parameters for the GBCE trade indicator service."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CacheParams:
    """Recent-trades cache and instrument catalog parameters."""
    trade_ttl_ms: int = 2000          # Recent-trades bucket retention window
    sweep_interval_ms: Optional[int] = 500  # Background expiry sweep period, None or 0 disables the sweeper
    catalog_max_size: int = 5         # Max instruments held by the catalog cache


@dataclass(frozen=True)
class CalculationParams:
    """Decimal arithmetic parameters."""
    index_precision: int = 34         # Significant digits for the share index ln/exp
    ratio_scale: int = 10             # Decimal places kept for dividend yield and P/E
    vwap_scale: int = 0               # VWAP is rounded to a whole unit
    index_scale: int = 2              # GBCE All Share Index decimal places


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    cache: CacheParams
    calculation: CalculationParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        cache=CacheParams(),
        calculation=CalculationParams(),
        logging=LoggingParams(),
    )
