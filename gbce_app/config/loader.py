"""Configuration loader with defaults < settings file < explicit override precedence."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.models import Instrument, StockType
from ..errors import InvalidArgumentError
from .defaults import (
    CacheParams,
    CalculationParams,
    DefaultConfig,
    LoggingParams,
    get_default_config,
)
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading from the config directory."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path) as f:
            data = yaml.safe_load(f)

        return data or {}

    def load_settings(self) -> dict[str, Any]:
        """Load settings.yaml overrides, empty if the file is missing."""
        return self._read_yaml("settings.yaml")

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. settings.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_settings())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and materialise the configuration dataclasses."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise InvalidArgumentError(
                "Invalid configuration: " + "; ".join(error_msgs),
                argument="config",
                context={"errors": error_msgs}
            )

        return DefaultConfig(
            cache=self._section(CacheParams, merged["cache"]),
            calculation=self._section(CalculationParams, merged["calculation"]),
            logging=self._section(LoggingParams, merged["logging"]),
        )

    def _section(self, params_cls: type, values: dict[str, Any]) -> Any:
        """Build a params dataclass, ignoring keys it does not declare."""
        known = {k: v for k, v in values.items() if k in params_cls.__dataclass_fields__}
        return params_cls(**known)

    def load_instruments(self) -> list[Instrument]:
        """Load the instrument table from instruments.yaml, empty if missing."""
        records = self._read_yaml("instruments.yaml").get("instruments", [])

        errors = ConfigValidator.validate_instruments(records)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise InvalidArgumentError(
                "Invalid instrument table: " + "; ".join(error_msgs),
                argument="instruments",
                context={"errors": error_msgs}
            )

        return [self._record_to_instrument(record) for record in records]

    def _record_to_instrument(self, record: dict[str, Any]) -> Instrument:
        try:
            return Instrument(
                symbol=str(record["symbol"]).strip().upper(),
                type=StockType(str(record["type"]).upper()),
                last_dividend=Decimal(str(record.get("last_dividend", 0))),
                fixed_dividend=Decimal(str(record.get("fixed_dividend", 0))),
                par_value=Decimal(str(record["par_value"])),
            )
        except (KeyError, ValueError, InvalidOperation) as e:
            raise InvalidArgumentError(
                f"Invalid instrument record {record!r}: {e}",
                argument="instruments"
            ) from e

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
