"""
Tests for the logging system.

This module tests the logger functionality including configuration,
context management, numpy coercion, and output formatting.
"""

import json
import logging
import tempfile
from pathlib import Path

import numpy as np
import pytest
import structlog

from stockta.config import LoggingSettings
from stockta.utils import (
    LogConfig,
    add_context,
    clear_context,
    get_logger,
    set_log_level,
    setup_logging,
)


@pytest.fixture
def temp_log_file():
    """Create a temporary log file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".log") as f:
        log_path = f.name
    yield log_path
    Path(log_path).unlink(missing_ok=True)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    structlog.reset_defaults()

    yield

    clear_context()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)


def _read_entries(path: str) -> list[dict]:
    return [json.loads(line) for line in Path(path).read_text().splitlines() if line.strip()]


class TestLogConfig:
    """Tests for LogConfig dataclass."""

    def test_default_config(self):
        config = LogConfig()
        assert config.level == "INFO"
        assert config.format == "pretty"
        assert config.file_path is None
        assert config.include_timestamp is True
        assert config.include_caller_info is True
        assert config.console_output is True
        assert config.environment == "dev"
        assert config.app_version == "0.1.0"

    def test_from_logging_settings(self):
        config = LoggingSettings(level="DEBUG", format="json", environment="prod").to_log_config()
        assert config.level == "DEBUG"
        assert config.format == "json"
        assert config.environment == "prod"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_pretty_logging(self):
        setup_logging(LogConfig(level="INFO", format="pretty"))
        logger = get_logger(__name__)
        logger.info("pretty_message", bars=30)

    def test_setup_with_file_output(self, temp_log_file):
        setup_logging(LogConfig(level="INFO", format="json", file_path=temp_log_file))

        get_logger(__name__).info("test_message", key="value")

        log_path = Path(temp_log_file)
        assert log_path.exists()
        assert log_path.stat().st_size > 0

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_setup_with_different_levels(self, level):
        setup_logging(LogConfig(level=level))
        assert logging.getLogger().level == getattr(logging, level)

    def test_file_directory_creation(self, tmp_path):
        log_file = tmp_path / "logs" / "subdir" / "stockta.log"
        setup_logging(LogConfig(file_path=str(log_file)))

        get_logger(__name__).info("test")

        assert log_file.parent.exists()
        assert log_file.exists()


class TestContextManagement:
    """Tests for context management functionality."""

    def test_add_context_basic(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file))
        logger = get_logger(__name__)

        with add_context(symbol="AAPL", timeframe="6mo"):
            logger.info("analysis_computed")

        entry = _read_entries(temp_log_file)[0]
        assert entry["symbol"] == "AAPL"
        assert entry["timeframe"] == "6mo"

    def test_add_context_nested(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file))
        logger = get_logger(__name__)

        with add_context(symbol="MSFT"):
            with add_context(timeframe="1y"):
                logger.info("nested_message")
            logger.info("outer_message")

        inner, outer = _read_entries(temp_log_file)
        assert inner["symbol"] == "MSFT"
        assert inner["timeframe"] == "1y"
        assert outer["symbol"] == "MSFT"
        assert "timeframe" not in outer

    def test_explicit_keys_take_precedence(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file))

        with add_context(symbol="AAPL"):
            get_logger(__name__).info("override", symbol="GOOG")

        assert _read_entries(temp_log_file)[0]["symbol"] == "GOOG"

    def test_context_cleanup(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file))
        logger = get_logger(__name__)

        with add_context(temp_context="value"):
            pass
        logger.info("after_context")

        assert "temp_context" not in _read_entries(temp_log_file)[0]

    def test_clear_context(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file))
        logger = get_logger(__name__)

        with add_context(key1="value1"):
            clear_context()
            logger.info("after_clear")

        assert "key1" not in _read_entries(temp_log_file)[0]


class TestProcessors:
    """Tests for the custom structlog processors."""

    def test_numpy_values_are_serialized(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file))

        get_logger(__name__).info(
            "indicator_value", rsi=np.float64(71.5), bars=np.int64(250), periods=[np.int64(20)]
        )

        entry = _read_entries(temp_log_file)[0]
        assert entry["rsi"] == 71.5
        assert entry["bars"] == 250
        assert entry["periods"] == [20]

    def test_long_strings_are_truncated(self, temp_log_file):
        setup_logging(LogConfig(format="json", file_path=temp_log_file, max_string_length=10))

        get_logger(__name__).info("long", detail="x" * 50)

        assert _read_entries(temp_log_file)[0]["detail"] == "x" * 10 + "... [truncated]"

    def test_app_info_added(self, temp_log_file):
        setup_logging(
            LogConfig(
                format="json",
                file_path=temp_log_file,
                environment="test",
                app_version="1.2.3",
            )
        )

        get_logger(__name__).info("test_message")

        entry = _read_entries(temp_log_file)[0]
        assert entry["app"] == "stockta"
        assert entry["environment"] == "test"
        assert entry["version"] == "1.2.3"
        assert entry["level"] == "info"


class TestLogLevels:
    """Tests for different log levels."""

    def test_log_level_filtering(self, temp_log_file):
        setup_logging(LogConfig(level="WARNING", format="json", file_path=temp_log_file))
        logger = get_logger(__name__)

        logger.debug("debug_message")
        logger.info("info_message")
        logger.warning("warning_message")

        log_content = Path(temp_log_file).read_text()
        assert "debug_message" not in log_content
        assert "info_message" not in log_content
        assert "warning_message" in log_content

    def test_set_log_level(self, temp_log_file):
        setup_logging(LogConfig(level="INFO", format="json", file_path=temp_log_file))
        logger = get_logger(__name__)

        logger.debug("debug1")
        set_log_level("DEBUG")
        logger.debug("debug2")

        log_content = Path(temp_log_file).read_text()
        assert "debug1" not in log_content
        assert "debug2" in log_content
