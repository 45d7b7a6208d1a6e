"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    DefaultConfig,
    DocumentParams,
    FetchParams,
    LoggingParams,
    ResolverParams,
    get_default_config,
)
from .validation import ConfigValidator, ValidationError

CONFIG_FILENAME = "otp.yaml"

_SECTIONS = {
    "fetch": FetchParams,
    "resolver": ResolverParams,
    "document": DocumentParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path.cwd() / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the config directory, empty if absent."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ValueError(f"{config_file} must contain a mapping at the top level")
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Caller overrides (highest priority)
        2. Config file overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the effective configuration."""
        config = self.merge_config(overrides)

        errors = self._unknown_keys(config) + ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value!r})" for err in errors)
            raise ValueError(f"Invalid configuration: {details}")

        return DefaultConfig(**{
            name: params_type(**config[name]) for name, params_type in _SECTIONS.items()
        })

    def _unknown_keys(self, config: dict[str, Any]) -> list[ValidationError]:
        """Report sections and keys that no parameter dataclass declares."""
        errors = []
        for section, values in config.items():
            if section not in _SECTIONS:
                errors.append(ValidationError(field=section, message="Unknown section", value=values))
                continue
            if not isinstance(values, dict):
                errors.append(ValidationError(field=section, message="Must be a mapping", value=values))
                continue
            known = {f.name for f in fields(_SECTIONS[section])}
            for key in values:
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}", message="Unknown setting", value=values[key]
                    ))
        return errors

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
