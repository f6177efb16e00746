"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

_SEATS = ("N", "E", "S", "W")
_VULNERABILITIES = ("None", "NS", "EW", "Both")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_trainer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate drill setup parameters."""
        errors = []

        if "trainee_seat" in params:
            value = params["trainee_seat"]
            if value not in _SEATS:
                errors.append(ValidationError(
                    field="trainee_seat",
                    message=f"Must be one of {', '.join(_SEATS)}",
                    value=value
                ))

        if "vulnerability" in params:
            value = params["vulnerability"]
            if value not in _VULNERABILITIES:
                errors.append(ValidationError(
                    field="vulnerability",
                    message=f"Must be one of {', '.join(_VULNERABILITIES)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_deal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate deal generator parameters."""
        errors = []

        # bool is an int subclass; reject it explicitly
        if "max_attempts" in params:
            value = params["max_attempts"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="max_attempts",
                    message="Must be a positive integer",
                    value=value
                ))

        if "seed" in params:
            value = params["seed"]
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                errors.append(ValidationError(
                    field="seed",
                    message="Must be an integer or null",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_evaluation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rule evaluation parameters."""
        errors = []

        if "max_or_branches" in params:
            value = params["max_or_branches"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 2:
                errors.append(ValidationError(
                    field="max_or_branches",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        if "max_or_depth" in params:
            value = params["max_or_depth"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="max_or_depth",
                    message="Must be a positive integer",
                    value=value
                ))

        if "skip_illegal_calls" in params:
            value = params["skip_illegal_calls"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="skip_illegal_calls",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(_LOG_LEVELS)}",
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
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "trainer" in config:
            errors.extend(ConfigValidator.validate_trainer_params(config["trainer"]))

        if "deal" in config:
            errors.extend(ConfigValidator.validate_deal_params(config["deal"]))

        if "evaluation" in config:
            errors.extend(ConfigValidator.validate_evaluation_params(config["evaluation"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
