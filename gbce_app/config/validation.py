"""Configuration validation utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

_STOCK_TYPES = ("COMMON", "PREFERRED")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _as_decimal(value: Any):
    if isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_cache_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cache parameters."""
        errors = []

        if "trade_ttl_ms" in params:
            value = params["trade_ttl_ms"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="trade_ttl_ms",
                    message="Must be a positive integer",
                    value=value
                ))

        if "sweep_interval_ms" in params:
            value = params["sweep_interval_ms"]
            if value is not None and (
                    not isinstance(value, int) or isinstance(value, bool) or value < 0):
                errors.append(ValidationError(
                    field="sweep_interval_ms",
                    message="Must be null or a non-negative integer",
                    value=value
                ))

        if "catalog_max_size" in params:
            value = params["catalog_max_size"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="catalog_max_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_calculation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate decimal arithmetic parameters."""
        errors = []

        if "index_precision" in params:
            value = params["index_precision"]
            if not _is_positive_int(value) or value < 10:
                errors.append(ValidationError(
                    field="index_precision",
                    message="Must be an integer of at least 10",
                    value=value
                ))

        for name in ("ratio_scale", "vwap_scale", "index_scale"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in (
                    "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                errors.append(ValidationError(
                    field="level",
                    message="Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_instruments(records: list[dict[str, Any]]) -> list[ValidationError]:
        """Validate raw instrument table records."""
        errors = []
        seen = set()

        for i, record in enumerate(records):
            prefix = f"instruments[{i}]"

            if not isinstance(record, dict):
                errors.append(ValidationError(
                    field=prefix,
                    message="Must be a mapping",
                    value=record
                ))
                continue

            symbol = record.get("symbol")
            if not isinstance(symbol, str) or not symbol.strip():
                errors.append(ValidationError(
                    field=f"{prefix}.symbol",
                    message="Must be a non-empty string",
                    value=symbol
                ))
            elif symbol.strip().upper() in seen:
                errors.append(ValidationError(
                    field=f"{prefix}.symbol",
                    message="Duplicate symbol",
                    value=symbol
                ))
            else:
                seen.add(symbol.strip().upper())

            stock_type = record.get("type")
            if not isinstance(stock_type, str) or stock_type.upper() not in _STOCK_TYPES:
                errors.append(ValidationError(
                    field=f"{prefix}.type",
                    message="Must be COMMON or PREFERRED",
                    value=stock_type
                ))

            for name in ("last_dividend", "fixed_dividend"):
                value = record.get(name, 0)
                number = _as_decimal(value)
                if number is None or number < 0:
                    errors.append(ValidationError(
                        field=f"{prefix}.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

            par_value = record.get("par_value")
            number = _as_decimal(par_value)
            if number is None or number <= 0:
                errors.append(ValidationError(
                    field=f"{prefix}.par_value",
                    message="Must be a positive number",
                    value=par_value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "cache" in config:
            errors.extend(ConfigValidator.validate_cache_params(config["cache"]))

        if "calculation" in config:
            errors.extend(ConfigValidator.validate_calculation_params(config["calculation"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
