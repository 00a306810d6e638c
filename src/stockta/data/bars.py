"""
Bar and BarSeries data model.

A Bar is one daily OHLCV sample. A BarSeries is the ordered, validated,
oldest-first sequence of bars that every indicator consumes. The series wraps
a pandas DataFrame indexed by date; it is never mutated after construction and
only hands out copies of its data.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import numpy as np
import pandas as pd

from stockta.data.validation import (
    PRICE_COLUMNS,
    REQUIRED_COLUMNS,
    BarValidator,
    MalformedBarError,
    coerce_numeric,
)


@dataclass(frozen=True)
class Bar:
    """
    One trading-period OHLCV sample.

    Attributes:
        date: Calendar date of the period
        open: Opening price
        high: Highest price in period
        low: Lowest price in period
        close: Closing price
        volume: Number of shares traded
    """

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bar":
        """
        Create a Bar from a market-data record.

        Args:
            data: Mapping with date, open, high, low, close and volume keys.
                The date may be a date, datetime or ISO string.

        Returns:
            Bar instance

        Raises:
            MalformedBarError: If the volume is not a whole number
        """
        raw_date = data["date"]
        if isinstance(raw_date, datetime):
            bar_date = raw_date.date()
        elif isinstance(raw_date, date):
            bar_date = raw_date
        else:
            bar_date = pd.Timestamp(raw_date).date()

        volume = float(data["volume"])
        if not volume.is_integer():
            raise MalformedBarError([f"Fractional volume ({data['volume']!r})"])

        return cls(
            date=bar_date,
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=int(volume),
        )

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3


class BarSeries:
    """
    Validated, immutable sequence of bars ordered oldest first.

    Construct with from_bars, from_records or from_frame. Construction raises
    MalformedBarError for series that violate OHLCV integrity rules.
    """

    def __init__(self, frame: pd.DataFrame):
        """Initialize from a DataFrame indexed by date.

        Args:
            frame: DataFrame with open, high, low, close, volume columns and
                either a DatetimeIndex or a ``date`` column
        """
        frame = frame.copy()
        if "date" in frame.columns:
            frame = frame.set_index("date")
        frame.index = pd.DatetimeIndex(pd.to_datetime(frame.index, errors="coerce"), name="date")
        frame = coerce_numeric(frame)

        BarValidator().ensure_valid(frame)

        frame = frame[list(REQUIRED_COLUMNS)]
        frame = frame.astype({col: "float64" for col in PRICE_COLUMNS})
        self._frame = frame.astype({"volume": "int64"})

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "BarSeries":
        """Create a series from a DataFrame (``date`` column or date index)."""
        return cls(frame)

    @classmethod
    def from_bars(cls, bars: Iterable[Bar]) -> "BarSeries":
        """Create a series from Bar instances, oldest first."""
        rows = [
            {
                "date": bar.date,
                "open": bar.open,
                "high": bar.high,
                "low": bar.low,
                "close": bar.close,
                "volume": bar.volume,
            }
            for bar in bars
        ]
        return cls(pd.DataFrame(rows, columns=["date", *REQUIRED_COLUMNS]))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "BarSeries":
        """Create a series from dict records as delivered by a market-data client.

        Records are validated as delivered, so a fractional volume or a missing
        date is reported rather than truncated. Dates are normalized to midnight.
        """
        frame = pd.DataFrame(
            [dict(record) for record in records], columns=["date", *REQUIRED_COLUMNS]
        )
        frame["date"] = pd.to_datetime(frame["date"], errors="coerce").dt.normalize()
        return cls(frame)

    def __len__(self) -> int:
        return len(self._frame)

    def __iter__(self) -> Iterator[Bar]:
        for timestamp, row in self._frame.iterrows():
            yield Bar(
                date=timestamp.date(),
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=int(row["volume"]),
            )

    def __repr__(self) -> str:
        if self.empty:
            return "BarSeries(empty)"
        return (
            f"BarSeries({len(self)} bars, "
            f"{self.dates[0].date()} to {self.dates[-1].date()})"
        )

    @property
    def empty(self) -> bool:
        return self._frame.empty

    @property
    def dates(self) -> pd.DatetimeIndex:
        return self._frame.index

    @property
    def open(self) -> pd.Series:
        return self._frame["open"].copy()

    @property
    def high(self) -> pd.Series:
        return self._frame["high"].copy()

    @property
    def low(self) -> pd.Series:
        return self._frame["low"].copy()

    @property
    def close(self) -> pd.Series:
        return self._frame["close"].copy()

    @property
    def volume(self) -> pd.Series:
        return self._frame["volume"].copy()

    @property
    def typical_price(self) -> pd.Series:
        """Per-bar (high + low + close) / 3."""
        tp = (self._frame["high"] + self._frame["low"] + self._frame["close"]) / 3
        return tp.rename("typical_price")

    def values(self, column: str) -> np.ndarray:
        """Return a copy of one column as a float numpy array."""
        return self._frame[column].to_numpy(dtype="float64", copy=True)

    def last(self) -> Bar | None:
        """Return the most recent bar, or None for an empty series."""
        if self.empty:
            return None
        timestamp = self._frame.index[-1]
        row = self._frame.iloc[-1]
        return Bar(
            date=timestamp.date(),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=int(row["volume"]),
        )

    def to_frame(self) -> pd.DataFrame:
        """Return a copy of the underlying DataFrame."""
        return self._frame.copy()
