"""Simple and exponential moving averages of closing prices."""

import pandas as pd

from stockta.analysis.windows import check_period, empty_series, sliding_windows
from stockta.data import BarSeries


def exponential_average(values: pd.Series, period: int) -> pd.Series:
    """Recursive EMA seeded at the first value, k = 2 / (period + 1).

    Args:
        values: Series to smooth (closes, or a derived line such as MACD)
        period: EMA span

    Returns:
        Series of the same length as values
    """
    check_period(period)
    return values.ewm(span=period, adjust=False).mean()


def sma(series: BarSeries, period: int = 20) -> pd.Series:
    """Calculate the Simple Moving Average of closes.

    Args:
        series: Input bars
        period: Window length (default: 20)

    Returns:
        Series named ``sma`` with one point per bar from index period - 1 on;
        empty when the series is shorter than period
    """
    check_period(period)
    windows = sliding_windows(series.values("close"), period)
    return pd.Series(windows.mean(axis=1), index=series.dates[period - 1:], name="sma")


def ema(series: BarSeries, period: int = 12) -> pd.Series:
    """Calculate the Exponential Moving Average of closes.

    The EMA has no warm-up gap: it is seeded at the first close and emits one
    point per bar. Early values lean toward the seed and should be treated as
    low-confidence.

    Args:
        series: Input bars
        period: EMA span (default: 12)

    Returns:
        Series named ``ema``; empty when the series is shorter than period
    """
    check_period(period)
    if len(series) < period:
        return empty_series("ema")
    return exponential_average(series.close, period).rename("ema")
