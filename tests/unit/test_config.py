"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from otp_app.config.defaults import DefaultConfig, FetchParams, get_default_config
from otp_app.config.loader import ConfigLoader
from otp_app.config.validation import ConfigValidator


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config.fetch.timeout_seconds == 30.0
        assert config.fetch.retry_attempts == 2
        assert config.resolver.concurrent is False
        assert config.resolver.max_concurrent_fetches == 8
        assert config.document.format == "yaml"
        assert config.logging.level == "INFO"

    def test_params_are_frozen(self) -> None:
        """Test that parameter objects cannot be mutated."""
        params = FetchParams()
        with pytest.raises(AttributeError):
            params.timeout_seconds = 1.0  # type: ignore[misc]


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        """Test config merging with defaults only."""
        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["fetch"]["timeout_seconds"] == 30.0
        assert config["resolver"]["concurrent"] is False

    def test_merge_config_with_overrides(self, tmp_path: Path) -> None:
        """Test that caller overrides win and other defaults remain."""
        config = ConfigLoader.create(tmp_path).merge_config({"fetch": {"timeout_seconds": 5.0}})

        assert config["fetch"]["timeout_seconds"] == 5.0
        assert config["fetch"]["retry_attempts"] == 2

    def test_file_precedence(self, tmp_path: Path) -> None:
        """Test defaults < file < overrides."""
        (tmp_path / "otp.yaml").write_text(
            "fetch:\n  timeout_seconds: 10\n  retry_attempts: 4\nresolver:\n  concurrent: true\n"
        )
        config = ConfigLoader.create(tmp_path).load({"fetch": {"retry_attempts": 1}})

        assert isinstance(config, DefaultConfig)
        assert config.fetch.timeout_seconds == 10
        assert config.fetch.retry_attempts == 1
        assert config.resolver.concurrent is True
        assert config.document.format == "yaml"

    def test_empty_file(self, tmp_path: Path) -> None:
        (tmp_path / "otp.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).load_file_config() == {}

    def test_non_mapping_file_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "otp.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            ConfigLoader.create(tmp_path).load()

    def test_invalid_values_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError) as exc_info:
            ConfigLoader.create(tmp_path).load({"resolver": {"max_concurrent_fetches": 0}})
        assert "resolver.max_concurrent_fetches" in str(exc_info.value)

    def test_unknown_keys_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError) as exc_info:
            ConfigLoader.create(tmp_path).load({"fetch": {"timeout": 3}, "cache": {}})
        message = str(exc_info.value)
        assert "fetch.timeout" in message
        assert "cache" in message


class TestConfigValidator:
    """Test suite for configuration validator."""

    def test_valid_defaults(self) -> None:
        config = ConfigLoader.create(Path("/nonexistent")).merge_config()
        assert ConfigValidator.validate_config(config) == []

    def test_fetch_params(self) -> None:
        errors = ConfigValidator.validate_fetch_params({
            "timeout_seconds": -1,
            "retry_attempts": 1.5,
            "retry_delay_seconds": "soon",
            "headers": {"X-Token": 42},
            "follow_redirects": "yes",
        })
        assert [error.field for error in errors] == [
            "fetch.timeout_seconds",
            "fetch.retry_attempts",
            "fetch.retry_delay_seconds",
            "fetch.headers",
            "fetch.follow_redirects",
        ]

    def test_resolver_params(self) -> None:
        errors = ConfigValidator.validate_resolver_params({"concurrent": 1, "max_concurrent_fetches": True})
        assert {error.field for error in errors} == {"resolver.concurrent", "resolver.max_concurrent_fetches"}

    def test_document_format_and_log_level(self) -> None:
        errors = ConfigValidator.validate_config({
            "document": {"format": "toml"},
            "logging": {"level": "VERBOSE"},
        })
        assert {error.field for error in errors} == {"document.format", "logging.level"}
        assert errors[0].value == "toml"
