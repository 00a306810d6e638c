"""
Indicator Constants for the stockta technical analysis engine.

This module defines the default lookback periods, classification thresholds,
warm-up offsets and rating bands used throughout the indicator engine.

All constants are immutable (Final) to prevent accidental modification during runtime.
"""

from typing import Final


# =============================================================================
# Default Periods
# =============================================================================

DEFAULT_OSCILLATOR_PERIOD: Final[int] = 14
"""
Lookback period shared by RSI, Stochastic and ADX.
"""

DEFAULT_BAND_PERIOD: Final[int] = 20
"""
Lookback period shared by Bollinger Bands and CCI.
"""

DEFAULT_STD_DEV_MULTIPLIER: Final[float] = 2.0
"""
Width of the Bollinger envelope in population standard deviations.
"""

DEFAULT_SMA_PERIODS: Final[tuple[int, ...]] = (20, 50)
DEFAULT_EMA_PERIODS: Final[tuple[int, ...]] = (12, 26)


# =============================================================================
# MACD
# =============================================================================

MACD_FAST_PERIOD: Final[int] = 12
MACD_SLOW_PERIOD: Final[int] = 26
MACD_SIGNAL_PERIOD: Final[int] = 9

MACD_SIGNAL_START: Final[int] = 34
"""
First bar index at which the signal line and histogram are reported.
Earlier points are dominated by the EMA seed.
"""


# =============================================================================
# Oscillator Thresholds
# =============================================================================

RSI_OVERBOUGHT: Final[float] = 70.0
RSI_OVERSOLD: Final[float] = 30.0

RSI_ZERO_LOSS_RS: Final[float] = 100.0
"""
Relative strength used when the window holds gains but no losses.
"""

RSI_FLAT: Final[float] = 50.0
"""
RSI reported for a window with neither gains nor losses.
"""

STOCHASTIC_OVERBOUGHT: Final[float] = 80.0
STOCHASTIC_OVERSOLD: Final[float] = 20.0

STOCHASTIC_FLAT: Final[float] = 50.0
"""
%K reported when the window's highest high equals its lowest low.
"""

CCI_CONSTANT: Final[float] = 0.015
CCI_OVERBOUGHT: Final[float] = 100.0
CCI_OVERSOLD: Final[float] = -100.0

ADX_STRONG: Final[float] = 25.0
ADX_MODERATE: Final[float] = 20.0


# =============================================================================
# Levels
# =============================================================================

FIBONACCI_RATIOS: Final[tuple[tuple[str, float], ...]] = (
    ("0%", 0.0),
    ("23.6%", 0.236),
    ("38.2%", 0.382),
    ("50%", 0.5),
    ("61.8%", 0.618),
    ("78.6%", 0.786),
    ("100%", 1.0),
)

SUPPORT_RESISTANCE_MIN_BARS: Final[int] = 20
SUPPORT_RESISTANCE_MAX_LEVELS: Final[int] = 3
LEVEL_DECIMALS: Final[int] = 2


# =============================================================================
# Technical Rating
# =============================================================================

RATING_STRONG_BUY: Final[float] = 70.0
RATING_BUY: Final[float] = 55.0
RATING_NEUTRAL: Final[float] = 45.0
RATING_SELL: Final[float] = 30.0

RATING_DEFAULT_SCORE: Final[float] = 50.0
"""
Score reported when no indicator produced a signal.
"""

RATING_COLORS: Final[dict[str, str]] = {
    "Strong Buy": "#4caf50",
    "Buy": "#8bc34a",
    "Neutral": "#ff9800",
    "Sell": "#ff6b6b",
    "Strong Sell": "#f44336",
}
