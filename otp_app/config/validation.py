"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

SUPPORTED_FORMATS = ("yaml", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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
    def validate_fetch_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fetch transport parameters."""
        errors = []

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="fetch.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "retry_attempts" in params:
            value = params["retry_attempts"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="fetch.retry_attempts",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "retry_delay_seconds" in params:
            value = params["retry_delay_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="fetch.retry_delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "headers" in params:
            value = params["headers"]
            if not isinstance(value, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                errors.append(ValidationError(
                    field="fetch.headers",
                    message="Must be a mapping of strings to strings",
                    value=value
                ))

        if "follow_redirects" in params:
            value = params["follow_redirects"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="fetch.follow_redirects",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_resolver_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate resolution pass parameters."""
        errors = []

        if "concurrent" in params:
            value = params["concurrent"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="resolver.concurrent",
                    message="Must be a boolean",
                    value=value
                ))

        if "max_concurrent_fetches" in params:
            value = params["max_concurrent_fetches"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="resolver.max_concurrent_fetches",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if isinstance(config.get("fetch"), dict):
            errors.extend(ConfigValidator.validate_fetch_params(config["fetch"]))

        if isinstance(config.get("resolver"), dict):
            errors.extend(ConfigValidator.validate_resolver_params(config["resolver"]))

        document = config.get("document")
        document_format = document.get("format") if isinstance(document, dict) else None
        if document_format is not None and document_format not in SUPPORTED_FORMATS:
            errors.append(ValidationError(
                field="document.format",
                message=f"Must be one of {', '.join(SUPPORTED_FORMATS)}",
                value=document_format
            ))

        logging_config = config.get("logging")
        level = logging_config.get("level") if isinstance(logging_config, dict) else None
        if level is not None and (not isinstance(level, str) or level.upper() not in LOG_LEVELS):
            errors.append(ValidationError(
                field="logging.level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}",
                value=level
            ))

        return errors
