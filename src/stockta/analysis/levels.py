"""Price levels: Fibonacci retracements, classic pivot points and empirical
support/resistance from local extrema."""

from dataclasses import asdict, dataclass, field

import numpy as np

from stockta.config.constants import (
    FIBONACCI_RATIOS,
    LEVEL_DECIMALS,
    SUPPORT_RESISTANCE_MAX_LEVELS,
    SUPPORT_RESISTANCE_MIN_BARS,
)
from stockta.data import BarSeries


@dataclass(frozen=True)
class FibonacciLevel:
    """
    One retracement level.

    Attributes:
        label: Ratio as a percentage label, e.g. "61.8%"
        ratio: Ratio as a fraction of the close range
        value: Price at low + ratio * (high - low)
    """

    label: str
    ratio: float
    value: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PivotPoints:
    """Classic floor-trader pivot with three resistance and support levels."""

    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SupportResistance:
    """
    Empirical levels from local extrema.

    Attributes:
        supports: Up to three support prices, ascending
        resistances: Up to three resistance prices, descending
        current_price: Last close the levels were ranked against, None when
            the series was too short to analyze
    """

    supports: list[float] = field(default_factory=list)
    resistances: list[float] = field(default_factory=list)
    current_price: float | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def fibonacci_levels(series: BarSeries) -> list[FibonacciLevel]:
    """Calculate retracement levels across the whole series' close range.

    Returns:
        The seven canonical levels from 0% (lowest close) to 100% (highest
        close); empty for an empty series
    """
    if series.empty:
        return []

    close = series.values("close")
    low = float(close.min())
    high = float(close.max())
    diff = high - low

    return [
        FibonacciLevel(label=label, ratio=ratio, value=low + diff * ratio)
        for label, ratio in FIBONACCI_RATIOS
    ]


def pivot_points(series: BarSeries) -> PivotPoints | None:
    """Calculate classic pivot points from the last bar.

    Returns:
        PivotPoints, or None for an empty series
    """
    last = series.last()
    if last is None:
        return None

    high, low, close = last.high, last.low, last.close
    pivot = (high + low + close) / 3

    return PivotPoints(
        pivot=pivot,
        r1=2 * pivot - low,
        r2=pivot + (high - low),
        r3=high + 2 * (pivot - low),
        s1=2 * pivot - high,
        s2=pivot - (high - low),
        s3=low - 2 * (high - pivot),
    )


def _nearest(levels: np.ndarray, price: float, count: int) -> list[float]:
    """Round, deduplicate and keep the count levels closest to price."""
    unique = {round(float(level), LEVEL_DECIMALS) for level in levels}
    return sorted(unique, key=lambda level: (abs(level - price), level))[:count]


def support_resistance(
    series: BarSeries, max_levels: int = SUPPORT_RESISTANCE_MAX_LEVELS
) -> SupportResistance:
    """Detect support and resistance levels from three-bar local extrema.

    A bar is a resistance candidate when its high exceeds both neighbours'
    highs and a support candidate when its low is below both neighbours'
    lows. Candidates are rounded to cents and deduplicated, and the
    max_levels closest to the last close are kept on each side.

    Args:
        series: Input bars
        max_levels: Levels to keep per side (default: 3)

    Returns:
        SupportResistance; empty when the series has fewer than 20 bars
    """
    if len(series) < SUPPORT_RESISTANCE_MIN_BARS:
        return SupportResistance()

    highs = series.values("high")
    lows = series.values("low")
    current_price = float(series.values("close")[-1])

    is_peak = (highs[1:-1] > highs[:-2]) & (highs[1:-1] > highs[2:])
    is_trough = (lows[1:-1] < lows[:-2]) & (lows[1:-1] < lows[2:])

    resistances = _nearest(highs[1:-1][is_peak], current_price, max_levels)
    supports = _nearest(lows[1:-1][is_trough], current_price, max_levels)

    return SupportResistance(
        supports=sorted(supports),
        resistances=sorted(resistances, reverse=True),
        current_price=current_price,
    )
