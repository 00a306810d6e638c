"""Bollinger Bands volatility envelope."""

import pandas as pd

from stockta.analysis.moving_average import sma
from stockta.analysis.windows import check_period, empty_frame, sliding_windows
from stockta.config.constants import DEFAULT_BAND_PERIOD, DEFAULT_STD_DEV_MULTIPLIER
from stockta.data import BarSeries

BOLLINGER_COLUMNS = ["upper", "middle", "lower", "price", "bandwidth"]


def bollinger_bands(
    series: BarSeries,
    period: int = DEFAULT_BAND_PERIOD,
    std_dev_multiplier: float = DEFAULT_STD_DEV_MULTIPLIER,
) -> pd.DataFrame:
    """Calculate Bollinger Bands.

    The middle band is the SMA of closes; upper and lower bands sit
    ``std_dev_multiplier`` population standard deviations away from it.
    ``bandwidth = (upper - lower) / middle``.

    Args:
        series: Input bars
        period: Moving average period (default: 20)
        std_dev_multiplier: Standard deviation multiplier (default: 2.0)

    Returns:
        DataFrame with upper, middle, lower, price and bandwidth columns;
        empty when N < period

    Raises:
        ValueError: If period is not positive or the multiplier is negative
    """
    check_period(period)
    if std_dev_multiplier < 0:
        raise ValueError(f"std_dev_multiplier must be non-negative, got {std_dev_multiplier}")
    if len(series) < period:
        return empty_frame(BOLLINGER_COLUMNS)

    middle = sma(series, period)
    std = sliding_windows(series.values("close"), period).std(axis=1)

    upper = middle + std_dev_multiplier * std
    lower = middle - std_dev_multiplier * std

    return pd.DataFrame(
        {
            "upper": upper,
            "middle": middle,
            "lower": lower,
            "price": series.close.iloc[period - 1:],
            "bandwidth": (upper - lower) / middle,
        },
        index=middle.index,
    )
