"""MACD trend-following oscillator."""

import pandas as pd

from stockta.analysis.moving_average import exponential_average
from stockta.analysis.windows import empty_frame
from stockta.config.constants import (
    MACD_FAST_PERIOD,
    MACD_SIGNAL_PERIOD,
    MACD_SIGNAL_START,
    MACD_SLOW_PERIOD,
)
from stockta.data import BarSeries


def macd(series: BarSeries) -> pd.DataFrame:
    """Calculate Moving Average Convergence Divergence.

    ``macd = EMA12 - EMA26`` of closes, ``signal`` is the 9-period EMA of the
    MACD line and ``histogram = macd - signal``. All three EMAs are seeded at
    their first value, so points are only reported from bar index 34 on.

    Args:
        series: Input bars

    Returns:
        DataFrame with macd, signal and histogram columns; empty when the
        series has 34 bars or fewer
    """
    columns = ["macd", "signal", "histogram"]
    if len(series) <= MACD_SIGNAL_START:
        return empty_frame(columns)

    close = series.close
    macd_line = exponential_average(close, MACD_FAST_PERIOD) - exponential_average(
        close, MACD_SLOW_PERIOD
    )
    signal_line = exponential_average(macd_line, MACD_SIGNAL_PERIOD)

    frame = pd.DataFrame(
        {
            "macd": macd_line,
            "signal": signal_line,
            "histogram": macd_line - signal_line,
        }
    )
    return frame.iloc[MACD_SIGNAL_START:]
