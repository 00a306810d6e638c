"""Volume-weighted indicators: On-Balance Volume and VWAP."""

import numpy as np
import pandas as pd

from stockta.analysis.windows import empty_series
from stockta.data import BarSeries


def obv(series: BarSeries) -> pd.Series:
    """Calculate On-Balance Volume.

    Starts at 0 and adds the bar's volume on an up close, subtracts it on a
    down close, and carries the total unchanged otherwise.

    Returns:
        Integer series named ``obv`` with one point per bar
    """
    if series.empty:
        return empty_series("obv").astype("int64")

    direction = np.sign(series.close.diff()).fillna(0)
    return (direction * series.volume).cumsum().astype("int64").rename("obv")


def vwap(series: BarSeries) -> pd.Series:
    """Calculate the cumulative Volume Weighted Average Price.

    Accumulates from the first bar of the series with no session reset.
    While cumulative volume is still zero the bar's typical price is used.

    Returns:
        Series named ``vwap`` with one point per bar
    """
    if series.empty:
        return empty_series("vwap")

    typical_price = series.typical_price
    volume = series.volume.astype("float64")
    cumulative_volume = volume.cumsum()
    cumulative_tpv = (typical_price * volume).cumsum()

    vwap_values = (cumulative_tpv / cumulative_volume).where(cumulative_volume > 0, typical_price)
    return vwap_values.rename("vwap")
