"""
Configuration module for stockta.

Exports the main Settings class and get_settings function for application-wide
configuration management.
"""

from .settings import AnalysisSettings, LoggingSettings, Settings, get_settings

__all__ = ["Settings", "AnalysisSettings", "LoggingSettings", "get_settings"]
