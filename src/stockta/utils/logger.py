"""
Structured logging for stockta.

This module configures structlog for console and file output, JSON and pretty
formatting, and contextual information such as the symbol being analyzed.
Library modules only call get_logger; configuring output is left to the
application through setup_logging.

Example Usage:
    ```python
    from stockta.utils.logger import setup_logging, get_logger, add_context, LogConfig

    setup_logging(LogConfig(level="DEBUG", format="pretty"))

    logger = get_logger(__name__)
    logger.info("analysis_started", bars=250)

    with add_context(symbol="AAPL", timeframe="6mo"):
        logger.info("rating_computed", label="Buy", score=66.7)
    ```
"""

from contextlib import contextmanager
from dataclasses import dataclass
import logging
from pathlib import Path
import sys
from typing import Any, Literal

import numpy as np
import structlog
from structlog.types import EventDict, Processor

# Context shared by every log entry emitted inside add_context
_context_vars: dict[str, Any] = {}


@dataclass
class LogConfig:
    """Configuration for the logging system.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format - "json" for production, "pretty" for development
        file_path: Optional path to log file. If None, only logs to console
        include_timestamp: Whether to include timestamps in logs
        include_caller_info: Whether to include caller file/line information
        console_output: Whether to output to console (default: True)
        max_string_length: Maximum length for string values before truncation
        environment: Environment name (dev, staging, prod)
        app_version: Application version string
    """

    level: str = "INFO"
    format: Literal["json", "pretty"] = "pretty"
    file_path: str | None = None
    include_timestamp: bool = True
    include_caller_info: bool = True
    console_output: bool = True
    max_string_length: int = 1000
    environment: str = "dev"
    app_version: str = "0.1.0"


def add_app_info(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application-level information to log entries."""
    event_dict["app"] = "stockta"
    event_dict["environment"] = getattr(add_app_info, "environment", "unknown")
    event_dict["version"] = getattr(add_app_info, "version", "unknown")
    return event_dict


def add_analysis_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the active analysis context (symbol, timeframe, ...) to log entries.

    Keys passed explicitly to the log call take precedence over context keys.
    """
    for key, value in _context_vars.items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def coerce_numpy(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Convert numpy scalars to builtin numbers so every renderer can emit them.

    Indicator values are frequently numpy floats; the JSON renderer rejects them.
    """

    def coerce_value(value: Any) -> Any:
        if isinstance(value, np.generic):
            return value.item()
        if isinstance(value, dict):
            return {k: coerce_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return type(value)(coerce_value(item) for item in value)
        return value

    return {key: coerce_value(value) for key, value in event_dict.items()}


def add_log_level_name(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add human-readable log level name."""
    if "level" in event_dict:
        event_dict["level_name"] = event_dict["level"]
    return event_dict


def truncate_strings(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Truncate long string values to prevent log bloat.

    Args:
        logger: The logger instance
        method_name: The logging method name
        event_dict: The event dictionary

    Returns:
        Updated event dictionary with truncated strings
    """
    max_length = getattr(truncate_strings, "max_length", 1000)

    def truncate_value(value: Any) -> Any:
        if isinstance(value, str) and len(value) > max_length:
            return f"{value[:max_length]}... [truncated]"
        if isinstance(value, dict):
            return {k: truncate_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return type(value)(truncate_value(item) for item in value)
        return value

    return {key: truncate_value(value) for key, value in event_dict.items()}


def _build_processors(config: LogConfig) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_log_level_name,
        add_app_info,
        add_analysis_context,
        coerce_numpy,
        truncate_strings,
    ]

    if config.include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if config.include_caller_info:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    processors.append(structlog.processors.StackInfoRenderer())
    processors.append(structlog.processors.format_exc_info)
    return processors


def setup_logging(config: LogConfig) -> None:
    """Setup the logging system with the given configuration.

    This function initializes structlog with appropriate processors and handlers
    based on the provided configuration.

    Args:
        config: LogConfig instance with logging configuration

    Example:
        ```python
        setup_logging(LogConfig(level="INFO", format="json", file_path="logs/stockta.log"))
        ```
    """
    add_app_info.environment = config.environment
    add_app_info.version = config.app_version
    truncate_strings.max_length = config.max_string_length

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout if config.console_output else None,
        level=getattr(logging, config.level.upper()),
    )
    logging.getLogger().setLevel(getattr(logging, config.level.upper()))

    processors = _build_processors(config)

    if config.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(getattr(logging, config.level.upper()))
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)


@contextmanager
def add_context(**kwargs: Any):
    """Context manager to add contextual information to all log entries.

    Any key-value pairs provided will be automatically added to all log entries
    made within the context. The previous context is restored on exit.

    Args:
        **kwargs: Key-value pairs to add as context

    Example:
        ```python
        with add_context(symbol="MSFT"):
            logger.info("analysis_computed")  # Will include symbol
        ```
    """
    previous_context = _context_vars.copy()
    _context_vars.update(kwargs)

    try:
        yield
    finally:
        _context_vars.clear()
        _context_vars.update(previous_context)


def set_log_level(level: str) -> None:
    """Change the logging level at runtime.

    Args:
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)


def clear_context() -> None:
    """Clear all contextual variables."""
    _context_vars.clear()
