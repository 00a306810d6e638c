"""
stockta: technical indicators, trading signals and technical rating for daily
OHLCV bar series.
"""

from stockta.analysis import TechnicalAnalysis, TechnicalAnalyzer
from stockta.data import Bar, BarSeries, MalformedBarError

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "BarSeries",
    "MalformedBarError",
    "TechnicalAnalyzer",
    "TechnicalAnalysis",
]
