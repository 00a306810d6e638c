"""
Shared pytest fixtures for the stockta test suite.

This module provides fixtures for:
- Reference bar series (constant, ramp, short, random walk)
- Analyzer instances
- Test settings overrides
"""

import os

import pytest

from factories import constant_series, ramp_series, random_walk_series
from stockta.analysis import TechnicalAnalyzer
from stockta.config import AnalysisSettings, LoggingSettings, Settings
from stockta.data import BarSeries

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep TA_/LOG_ variables from the host out of settings under test."""
    for key in list(os.environ):
        if key.startswith(("TA_", "LOG_")):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def test_settings() -> Settings:
    """Override settings for testing environment."""
    return Settings(
        analysis=AnalysisSettings(),
        logging=LoggingSettings(level="DEBUG"),
    )


# ============================================================================
# Bar Series Fixtures
# ============================================================================


@pytest.fixture
def constant_bars() -> BarSeries:
    """30 bars at close=100, high=101, low=99."""
    return constant_series(30)


@pytest.fixture
def ramp_bars() -> BarSeries:
    """40 bars with close = 100 + i."""
    return ramp_series(40)


@pytest.fixture
def short_bars() -> BarSeries:
    """5 bars, below every windowed indicator's minimum."""
    return ramp_series(5)


@pytest.fixture
def sample_bars() -> BarSeries:
    """120 bars of reproducible random walk."""
    return random_walk_series(120)


@pytest.fixture
def analyzer() -> TechnicalAnalyzer:
    """Analyzer with default parameters."""
    return TechnicalAnalyzer()
