"""Window helpers shared by the indicator modules."""

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view


def check_period(period: int, name: str = "period") -> None:
    """Reject non-positive lookback periods.

    Raises:
        ValueError: If period is not a positive integer
    """
    if isinstance(period, bool) or not isinstance(period, (int, np.integer)) or period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period!r}")


def sliding_windows(values: np.ndarray, period: int) -> np.ndarray:
    """Return a read-only (len(values) - period + 1, period) view of trailing windows.

    Row ``r`` holds ``values[r : r + period]``. Fewer than ``period`` values
    yields an empty (0, period) array.
    """
    if len(values) < period:
        return np.empty((0, period), dtype="float64")
    return sliding_window_view(values, period)


def empty_series(name: str) -> pd.Series:
    """Empty indicator series, as returned for insufficient data."""
    return pd.Series(
        [], index=pd.DatetimeIndex([], name="date"), dtype="float64", name=name
    )


def empty_frame(columns: list[str]) -> pd.DataFrame:
    """Empty multi-value indicator frame, as returned for insufficient data."""
    return pd.DataFrame(
        {col: pd.Series([], dtype="float64") for col in columns},
        index=pd.DatetimeIndex([], name="date"),
    )
