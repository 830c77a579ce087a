"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any

MAX_TIMEOUT_SECONDS = 30.0
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_exchange_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate the venue list."""
        errors = []

        if "names" in params:
            value = params["names"]
            if not isinstance(value, (list, tuple)) or not value:
                errors.append(ValidationError(
                    field="exchanges.names",
                    message="Must be a non-empty list of venue names",
                    value=value
                ))
            elif not all(isinstance(name, str) and name.strip() for name in value):
                errors.append(ValidationError(
                    field="exchanges.names",
                    message="Venue names must be non-empty strings",
                    value=value
                ))
            elif len({name.strip().lower() for name in value}) != len(value):
                errors.append(ValidationError(
                    field="exchanges.names",
                    message="Venue names must be unique (case-insensitive)",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_price_gateway_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate price gateway parameters."""
        errors = []

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if (not _is_number(value) or not math.isfinite(value)
                    or value <= 0 or value > MAX_TIMEOUT_SECONDS):
                errors.append(ValidationError(
                    field="price_gateway.timeout_seconds",
                    message=f"Must be a positive number no larger than {MAX_TIMEOUT_SECONDS:g}",
                    value=value
                ))

        if "fallback_price" in params:
            value = params["fallback_price"]
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                errors.append(ValidationError(
                    field="price_gateway.fallback_price",
                    message="Must be a positive number",
                    value=value
                ))

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="price_gateway.base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "coin_aliases" in params:
            value = params["coin_aliases"]
            if not isinstance(value, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                errors.append(ValidationError(
                    field="price_gateway.coin_aliases",
                    message="Must be a mapping of strings to strings",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_server_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate server parameters."""
        errors = []

        if "port" in params:
            value = params["port"]
            if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 65535:
                errors.append(ValidationError(
                    field="server.port",
                    message="Must be an integer between 1 and 65535",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {sorted(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in ("exchanges", "price_gateway", "server", "logging"):
            if section in config and not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
        if errors:
            return errors

        if "exchanges" in config:
            errors.extend(ConfigValidator.validate_exchange_params(config["exchanges"]))

        if "price_gateway" in config:
            errors.extend(ConfigValidator.validate_price_gateway_params(config["price_gateway"]))

        if "server" in config:
            errors.extend(ConfigValidator.validate_server_params(config["server"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
