"""Unit tests for structured logging helpers."""

import logging

import structlog
from structlog.testing import capture_logs

from otp_app.logging import configure_logging, get_logger, get_resolution_logger, log_fetch


class TestLogFetch:
    """Test the standardized fetch event."""

    def test_fetched_reference(self) -> None:
        with capture_logs() as logs:
            log_fetch(get_logger("test"), "https://x.example/a", cache_hit=False,
                      type_name="ZoneSystem", byte_count=120, duration_ms=1.23456)

        assert logs == [{
            "event": "Reference fetched",
            "log_level": "info",
            "locator": "https://x.example/a",
            "cache_hit": False,
            "value_type": "ZoneSystem",
            "byte_count": 120,
            "duration_ms": 1.235,
        }]

    def test_cache_hit_logged_at_debug(self) -> None:
        with capture_logs() as logs:
            log_fetch(get_logger("test"), "https://x.example/a", cache_hit=True, type_name="ZoneSystem")

        assert logs[0]["log_level"] == "debug"
        assert "byte_count" not in logs[0]

    def test_resolution_logger_binds_subsystem(self) -> None:
        with capture_logs() as logs:
            get_resolution_logger("test").info("event")
        assert logs[0]["subsystem"] == "resolution"


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_json_output(self, capsys) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        root.handlers = []
        try:
            configure_logging(level="DEBUG", format_json=True, include_timestamp=False)
            get_logger("otp.test").info("configured", answer=42)
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
            structlog.reset_defaults()

        err = capsys.readouterr().err
        assert '"event": "configured"' in err
        assert '"answer": 42' in err
