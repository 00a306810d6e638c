"""Signal synthesis.

Converts the latest point of each oscillator into a directional Signal with a
strength score in [0, 100]. Indicators with no computed points (insufficient
data or disabled) are omitted from the signal set.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import numpy as np
import pandas as pd

from stockta.config.constants import (
    ADX_MODERATE,
    ADX_STRONG,
    CCI_OVERBOUGHT,
    CCI_OVERSOLD,
    RSI_OVERBOUGHT,
    RSI_OVERSOLD,
    STOCHASTIC_OVERBOUGHT,
    STOCHASTIC_OVERSOLD,
)


class IndicatorKind(str, Enum):
    """Indicators that produce a trading signal."""

    RSI = "RSI"
    MACD = "MACD"
    BOLLINGER = "Bollinger Bands"
    STOCHASTIC = "Stochastic"
    CCI = "CCI"
    ADX = "ADX"


class Reading(str, Enum):
    """Qualitative reading of an indicator's latest value."""

    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"
    BULLISH = "bullish"
    BEARISH = "bearish"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class Action(str, Enum):
    """Suggested action derived from a reading."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"
    TREND = "TREND"
    RANGE = "RANGE"


_ACTIONS: dict[Reading, Action] = {
    Reading.OVERSOLD: Action.BUY,
    Reading.OVERBOUGHT: Action.SELL,
    Reading.NEUTRAL: Action.HOLD,
    Reading.BULLISH: Action.BUY,
    Reading.BEARISH: Action.SELL,
    Reading.STRONG: Action.TREND,
    Reading.MODERATE: Action.RANGE,
    Reading.WEAK: Action.RANGE,
}


@dataclass(frozen=True)
class Signal:
    """
    Trading signal from one indicator's latest point.

    Attributes:
        kind: Indicator that produced the signal
        date: Date of the latest indicator point
        value: Latest indicator value (RSI, MACD histogram, Bollinger
            bandwidth, Stochastic %K, CCI or ADX)
        reading: Qualitative reading of value
        action: Suggested action
        strength: Signal strength from 0 (weak) to 100 (strong)
    """

    kind: IndicatorKind
    date: datetime
    value: float
    reading: Reading
    action: Action
    strength: float

    def to_dict(self) -> dict:
        """Convert signal to a JSON-friendly dictionary."""
        return {
            "indicator": self.kind.value,
            "date": self.date.isoformat(),
            "value": round(self.value, 4),
            "signal": self.reading.value,
            "action": self.action.value,
            "strength": round(self.strength, 2),
        }


def _band_reading(value: float, overbought: float, oversold: float) -> Reading:
    if value > overbought:
        return Reading.OVERBOUGHT
    if value < oversold:
        return Reading.OVERSOLD
    return Reading.NEUTRAL


def rsi_reading(value: float) -> Reading:
    """Above 70 overbought, below 30 oversold."""
    return _band_reading(value, RSI_OVERBOUGHT, RSI_OVERSOLD)


def stochastic_reading(k: float) -> Reading:
    """Above 80 overbought, below 20 oversold."""
    return _band_reading(k, STOCHASTIC_OVERBOUGHT, STOCHASTIC_OVERSOLD)


def cci_reading(value: float) -> Reading:
    """Above 100 overbought, below -100 oversold."""
    return _band_reading(value, CCI_OVERBOUGHT, CCI_OVERSOLD)


def macd_reading(histogram: float) -> Reading:
    return Reading.BULLISH if histogram > 0 else Reading.BEARISH


def bollinger_reading(price: float, upper: float, lower: float) -> Reading:
    """Close above the upper band is overbought, below the lower band oversold."""
    if price > upper:
        return Reading.OVERBOUGHT
    if price < lower:
        return Reading.OVERSOLD
    return Reading.NEUTRAL


def adx_reading(value: float) -> Reading:
    """DX above 25 is a strong trend, above 20 moderate, otherwise weak."""
    if value > ADX_STRONG:
        return Reading.STRONG
    if value > ADX_MODERATE:
        return Reading.MODERATE
    return Reading.WEAK


def _clamp_strength(strength: float) -> float:
    return float(np.clip(strength, 0.0, 100.0))


def _make_signal(
    kind: IndicatorKind, date, value: float, reading: Reading, strength: float
) -> Signal:
    return Signal(
        kind=kind,
        date=pd.Timestamp(date).to_pydatetime(),
        value=float(value),
        reading=reading,
        action=_ACTIONS[reading],
        strength=_clamp_strength(strength),
    )


def rsi_signal(rsi: pd.Series | None) -> Signal | None:
    if rsi is None or rsi.empty:
        return None
    value = float(rsi.iloc[-1])
    return _make_signal(
        IndicatorKind.RSI, rsi.index[-1], value, rsi_reading(value), abs(50 - value) / 50 * 100
    )


def macd_signal(macd: pd.DataFrame | None) -> Signal | None:
    if macd is None or macd.empty:
        return None
    histogram = float(macd["histogram"].iloc[-1])
    return _make_signal(
        IndicatorKind.MACD,
        macd.index[-1],
        histogram,
        macd_reading(histogram),
        abs(histogram) / 2 * 100,
    )


def bollinger_signal(bollinger: pd.DataFrame | None) -> Signal | None:
    if bollinger is None or bollinger.empty:
        return None
    last = bollinger.iloc[-1]
    bandwidth = float(last["bandwidth"])
    return _make_signal(
        IndicatorKind.BOLLINGER,
        bollinger.index[-1],
        bandwidth,
        bollinger_reading(last["price"], last["upper"], last["lower"]),
        bandwidth * 100,
    )


def stochastic_signal(stochastic: pd.DataFrame | None) -> Signal | None:
    if stochastic is None or stochastic.empty:
        return None
    k = float(stochastic["k"].iloc[-1])
    return _make_signal(
        IndicatorKind.STOCHASTIC,
        stochastic.index[-1],
        k,
        stochastic_reading(k),
        abs(50 - k) / 50 * 100,
    )


def cci_signal(cci: pd.Series | None) -> Signal | None:
    if cci is None or cci.empty:
        return None
    value = float(cci.iloc[-1])
    return _make_signal(
        IndicatorKind.CCI, cci.index[-1], value, cci_reading(value), abs(value) / 200 * 100
    )


def adx_signal(adx: pd.DataFrame | None) -> Signal | None:
    if adx is None or adx.empty:
        return None
    value = float(adx["adx"].iloc[-1])
    return _make_signal(IndicatorKind.ADX, adx.index[-1], value, adx_reading(value), value)


def generate_signals(
    *,
    rsi: pd.Series | None = None,
    macd: pd.DataFrame | None = None,
    bollinger: pd.DataFrame | None = None,
    stochastic: pd.DataFrame | None = None,
    cci: pd.Series | None = None,
    adx: pd.DataFrame | None = None,
) -> list[Signal]:
    """Build the signal set from computed indicator outputs.

    Args:
        rsi: Output of oscillators.rsi
        macd: Output of trend.macd
        bollinger: Output of volatility.bollinger_bands
        stochastic: Output of oscillators.stochastic
        cci: Output of oscillators.cci
        adx: Output of oscillators.adx

    Returns:
        Signals in RSI, MACD, Bollinger, Stochastic, CCI, ADX order, skipping
        indicators that are missing or empty
    """
    candidates = [
        rsi_signal(rsi),
        macd_signal(macd),
        bollinger_signal(bollinger),
        stochastic_signal(stochastic),
        cci_signal(cci),
        adx_signal(adx),
    ]
    return [signal for signal in candidates if signal is not None]
