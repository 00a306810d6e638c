"""Momentum and trend-strength oscillators: RSI, Stochastic, CCI and ADX.

Every oscillator averages over plain trailing windows that are recomputed for
each bar. None of them applies Wilder's smoothing:

- RSI uses the simple mean of gains and losses in each window.
- Stochastic %D is reported equal to %K.
- ADX reports the windowed DX of the latest window.

Degenerate windows resolve to fixed sentinels instead of NaN or infinity.
"""

import numpy as np
import pandas as pd

from stockta.analysis.windows import check_period, empty_frame, empty_series, sliding_windows
from stockta.config.constants import (
    CCI_CONSTANT,
    DEFAULT_BAND_PERIOD,
    DEFAULT_OSCILLATOR_PERIOD,
    RSI_FLAT,
    RSI_ZERO_LOSS_RS,
    STOCHASTIC_FLAT,
)
from stockta.data import BarSeries

# Mean deviations this small relative to the mean typical price count as zero
_ZERO_TOLERANCE = 1e-12


# ==================== RSI ====================


def rsi(series: BarSeries, period: int = DEFAULT_OSCILLATOR_PERIOD) -> pd.Series:
    """Calculate the Relative Strength Index.

    For bar ``i >= period`` the window holds the ``period`` close-to-close
    deltas ending at ``i``. ``RS = avgGain / avgLoss``; a window with gains but
    no losses uses ``RS = 100`` and a window with neither reports 50.

    Args:
        series: Input bars
        period: Number of deltas per window (default: 14)

    Returns:
        Series named ``rsi`` with N - period points, bounded to [0, 100];
        empty when N < period + 1
    """
    check_period(period)
    close = series.values("close")
    if len(close) < period + 1:
        return empty_series("rsi")

    windows = sliding_windows(np.diff(close), period)
    avg_gain = np.where(windows > 0, windows, 0.0).sum(axis=1) / period
    avg_loss = -np.where(windows < 0, windows, 0.0).sum(axis=1) / period

    with np.errstate(divide="ignore", invalid="ignore"):
        rs = np.where(avg_loss == 0, RSI_ZERO_LOSS_RS, avg_gain / avg_loss)
    values = 100 - 100 / (1 + rs)
    values = np.where((avg_gain == 0) & (avg_loss == 0), RSI_FLAT, values)

    return pd.Series(values, index=series.dates[period:], name="rsi")


# ==================== Stochastic Oscillator ====================


def stochastic(series: BarSeries, period: int = DEFAULT_OSCILLATOR_PERIOD) -> pd.DataFrame:
    """Calculate the Stochastic Oscillator.

    ``%K = (close - lowestLow) / (highestHigh - lowestLow) * 100`` over the
    trailing window. %D is not separately smoothed and equals %K. A window
    whose high equals its low reports %K = 50.

    Args:
        series: Input bars
        period: Window length (default: 14)

    Returns:
        DataFrame with ``k`` and ``d`` columns; empty when N < period
    """
    check_period(period)
    if len(series) < period:
        return empty_frame(["k", "d"])

    highest = sliding_windows(series.values("high"), period).max(axis=1)
    lowest = sliding_windows(series.values("low"), period).min(axis=1)
    close = series.values("close")[period - 1:]
    price_range = highest - lowest

    with np.errstate(divide="ignore", invalid="ignore"):
        k = np.where(price_range == 0, STOCHASTIC_FLAT, (close - lowest) / price_range * 100)

    return pd.DataFrame({"k": k, "d": k}, index=series.dates[period - 1:])


# ==================== CCI ====================


def cci(series: BarSeries, period: int = DEFAULT_BAND_PERIOD) -> pd.Series:
    """Calculate the Commodity Channel Index.

    ``CCI = (TP - SMA(TP)) / (0.015 * meanAbsoluteDeviation(TP))`` with
    ``TP = (high + low + close) / 3``. Zero mean deviation yields CCI = 0.

    Args:
        series: Input bars
        period: Window length (default: 20)

    Returns:
        Series named ``cci``; empty when N < period
    """
    check_period(period)
    if len(series) < period:
        return empty_series("cci")

    tp = series.typical_price.to_numpy(dtype="float64")
    windows = sliding_windows(tp, period)
    mean = windows.mean(axis=1)
    mean_deviation = np.abs(windows - mean[:, None]).mean(axis=1)
    degenerate = mean_deviation <= _ZERO_TOLERANCE * np.abs(mean)

    with np.errstate(divide="ignore", invalid="ignore"):
        values = np.where(
            degenerate, 0.0, (tp[period - 1:] - mean) / (CCI_CONSTANT * mean_deviation)
        )

    return pd.Series(values, index=series.dates[period - 1:], name="cci")


# ==================== ADX ====================


def adx(series: BarSeries, period: int = DEFAULT_OSCILLATOR_PERIOD) -> pd.DataFrame:
    """Calculate the Average Directional Index and directional indicators.

    Per bar, +DM is the up-move when it exceeds the down-move and is positive
    (else 0), -DM symmetrically, and ``TR = max(H - L, |H - prevC|, |L - prevC|)``.
    Each is averaged over the trailing window; ``+DI = 100 * avg(+DM) / avg(TR)``,
    ``-DI`` likewise, and the reported ``adx`` is the windowed
    ``DX = 100 * |+DI - -DI| / (+DI + -DI)``. Points start at bar 2 * period.
    Zero average TR yields DI = 0 and a zero DI sum yields DX = 0.

    Args:
        series: Input bars
        period: Window length (default: 14)

    Returns:
        DataFrame with ``adx``, ``plus_di`` and ``minus_di`` columns; empty
        when N < 2 * period + 1
    """
    check_period(period)
    columns = ["adx", "plus_di", "minus_di"]
    if len(series) < 2 * period + 1:
        return empty_frame(columns)

    high = series.values("high")
    low = series.values("low")
    close = series.values("close")

    # Position j describes bar j + 1 against bar j
    up_move = high[1:] - high[:-1]
    down_move = low[:-1] - low[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    true_range = np.maximum.reduce(
        [
            high[1:] - low[1:],
            np.abs(high[1:] - close[:-1]),
            np.abs(low[1:] - close[:-1]),
        ]
    )

    # Window row r ends at bar r + period; keep rows ending at bar >= 2 * period
    avg_tr = sliding_windows(true_range, period).mean(axis=1)[period:]
    avg_plus_dm = sliding_windows(plus_dm, period).mean(axis=1)[period:]
    avg_minus_dm = sliding_windows(minus_dm, period).mean(axis=1)[period:]

    with np.errstate(divide="ignore", invalid="ignore"):
        plus_di = np.where(avg_tr == 0, 0.0, 100 * avg_plus_dm / avg_tr)
        minus_di = np.where(avg_tr == 0, 0.0, 100 * avg_minus_dm / avg_tr)
        di_sum = plus_di + minus_di
        dx = np.where(di_sum == 0, 0.0, 100 * np.abs(plus_di - minus_di) / di_sum)

    return pd.DataFrame(
        {"adx": dx, "plus_di": plus_di, "minus_di": minus_di},
        index=series.dates[2 * period:],
    )
