"""
Analysis module for stockta.

Provides the technical indicator battery (moving averages, oscillators,
volatility bands, MACD, volume measures and price levels), the signal
synthesizer, the technical rating aggregator and the analyzer facade tying
them together.
"""

from .analyzer import IndicatorToggles, TechnicalAnalysis, TechnicalAnalyzer
from .levels import (
    FibonacciLevel,
    PivotPoints,
    SupportResistance,
    fibonacci_levels,
    pivot_points,
    support_resistance,
)
from .moving_average import ema, exponential_average, sma
from .oscillators import adx, cci, rsi, stochastic
from .rating import RatingLabel, TechnicalRating, rate
from .signals import Action, IndicatorKind, Reading, Signal, generate_signals
from .trend import macd
from .volatility import bollinger_bands
from .volume import obv, vwap

__all__ = [
    # Facade
    "TechnicalAnalyzer",
    "TechnicalAnalysis",
    "IndicatorToggles",
    # Indicators
    "sma",
    "ema",
    "exponential_average",
    "rsi",
    "stochastic",
    "cci",
    "adx",
    "bollinger_bands",
    "macd",
    "obv",
    "vwap",
    # Levels
    "FibonacciLevel",
    "PivotPoints",
    "SupportResistance",
    "fibonacci_levels",
    "pivot_points",
    "support_resistance",
    # Signals and rating
    "Signal",
    "IndicatorKind",
    "Reading",
    "Action",
    "generate_signals",
    "RatingLabel",
    "TechnicalRating",
    "rate",
]
