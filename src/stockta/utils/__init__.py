"""
Utility modules for stockta.

This package provides common utilities, currently the structured logging setup.
"""

from .logger import (
    LogConfig,
    add_context,
    clear_context,
    get_logger,
    set_log_level,
    setup_logging,
)

__all__ = [
    "LogConfig",
    "setup_logging",
    "get_logger",
    "add_context",
    "set_log_level",
    "clear_context",
]
