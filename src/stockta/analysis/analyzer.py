"""Technical analysis facade.

Runs the full indicator battery over a BarSeries, synthesizes signals and
rates them. Every call recomputes from scratch and returns a new
TechnicalAnalysis value; the analyzer holds only its parameters, so one
instance can serve concurrent callers with independent series.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

import orjson
import pandas as pd
from pydantic import BaseModel, ConfigDict

from stockta.analysis.levels import (
    FibonacciLevel,
    PivotPoints,
    SupportResistance,
    fibonacci_levels,
    pivot_points,
    support_resistance,
)
from stockta.analysis.moving_average import ema, sma
from stockta.analysis.oscillators import adx, cci, rsi, stochastic
from stockta.analysis.rating import TechnicalRating, rate
from stockta.analysis.signals import Signal, generate_signals
from stockta.analysis.trend import macd
from stockta.analysis.volatility import bollinger_bands
from stockta.analysis.volume import obv, vwap
from stockta.analysis.windows import check_period, empty_frame, empty_series
from stockta.config.constants import (
    DEFAULT_BAND_PERIOD,
    DEFAULT_EMA_PERIODS,
    DEFAULT_OSCILLATOR_PERIOD,
    DEFAULT_SMA_PERIODS,
    DEFAULT_STD_DEV_MULTIPLIER,
)
from stockta.config.settings import AnalysisSettings
from stockta.data import BarSeries
from stockta.utils import get_logger

logger = get_logger(__name__)


class IndicatorToggles(BaseModel):
    """Which indicators to compute.

    Unknown indicator names are rejected at construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rsi: bool = True
    macd: bool = True
    bollinger: bool = True
    moving_average: bool = True
    stochastic: bool = True
    cci: bool = True
    adx: bool = True
    obv: bool = True
    vwap: bool = True
    fibonacci: bool = True
    pivot: bool = True
    support_resistance: bool = True

    @classmethod
    def from_mapping(cls, flags: Mapping[str, bool]) -> "IndicatorToggles":
        """
        Build toggles from an ``{indicator: enabled}`` mapping.

        Indicators missing from the mapping keep their default (enabled).

        Raises:
            pydantic.ValidationError: If a name is not a known indicator
        """
        return cls.model_validate(dict(flags))

    @classmethod
    def names(cls) -> list[str]:
        """Known indicator names."""
        return list(cls.model_fields)

    def enabled(self) -> list[str]:
        return [name for name in self.names() if getattr(self, name)]


@dataclass(frozen=True)
class TechnicalAnalysis:
    """
    Complete analysis of one bar series.

    Indicator series cover only the suffix of the input that had enough
    lookback; disabled or under-supplied indicators are empty.

    Attributes:
        bars: The analyzed series
        symbol: Optional label of the analyzed instrument
        sma: SMA series keyed by period
        ema: EMA series keyed by period
        rsi: RSI series
        macd: MACD frame (macd, signal, histogram)
        bollinger: Bollinger frame (upper, middle, lower, price, bandwidth)
        stochastic: Stochastic frame (k, d)
        cci: CCI series
        adx: ADX frame (adx, plus_di, minus_di)
        obv: On-Balance Volume series
        vwap: VWAP series
        fibonacci: Retracement levels
        pivot_points: Pivot levels from the last bar, if any
        support_resistance: Empirical support/resistance levels
        signals: Signal set
        rating: Aggregate technical rating
        computed_at: Computation timestamp (UTC)
    """

    bars: BarSeries
    symbol: str | None
    sma: dict[int, pd.Series]
    ema: dict[int, pd.Series]
    rsi: pd.Series
    macd: pd.DataFrame
    bollinger: pd.DataFrame
    stochastic: pd.DataFrame
    cci: pd.Series
    adx: pd.DataFrame
    obv: pd.Series
    vwap: pd.Series
    fibonacci: list[FibonacciLevel]
    pivot_points: PivotPoints | None
    support_resistance: SupportResistance
    signals: list[Signal]
    rating: TechnicalRating
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def chart_frame(self) -> pd.DataFrame:
        """
        Merge the bars with overlay columns for charting.

        Adds ``sma`` and ``ema`` (first configured period of each), ``rsi``,
        ``macd``, ``signal``, ``upper_band`` and ``lower_band``, aligned by
        date. Bars without a value for an overlay hold NaN.

        Returns:
            New DataFrame indexed by date
        """
        frame = self.bars.to_frame()
        first_sma = next(iter(self.sma.values()), None)
        first_ema = next(iter(self.ema.values()), None)

        overlays = {
            "sma": first_sma,
            "ema": first_ema,
            "rsi": self.rsi,
            "macd": self.macd.get("macd"),
            "signal": self.macd.get("signal"),
            "upper_band": self.bollinger.get("upper"),
            "lower_band": self.bollinger.get("lower"),
        }
        for column, values in overlays.items():
            if values is None:
                frame[column] = float("nan")
            else:
                frame[column] = values.reindex(frame.index).astype("float64")
        return frame

    def to_dict(self) -> dict:
        """Export signals, rating and levels as a JSON-friendly dictionary."""
        return {
            "symbol": self.symbol,
            "timestamp": self.computed_at.isoformat(),
            "signals": [signal.to_dict() for signal in self.signals],
            "rating": self.rating.to_dict(),
            "support_resistance": self.support_resistance.to_dict(),
            "pivot_points": self.pivot_points.to_dict() if self.pivot_points else None,
            "fibonacci_levels": [level.to_dict() for level in self.fibonacci],
        }

    def to_json(self) -> bytes:
        """Export to_dict() as indented JSON bytes."""
        return orjson.dumps(
            self.to_dict(), option=orjson.OPT_INDENT_2 | orjson.OPT_SERIALIZE_NUMPY
        )


class TechnicalAnalyzer:
    """Indicator battery with fixed parameters.

    Example:
        ```python
        analyzer = TechnicalAnalyzer(oscillator_period=14)
        analysis = analyzer.analyze(BarSeries.from_records(records), symbol="AAPL")
        print(analysis.rating.label, analysis.rating.score)
        ```
    """

    def __init__(
        self,
        oscillator_period: int = DEFAULT_OSCILLATOR_PERIOD,
        band_period: int = DEFAULT_BAND_PERIOD,
        std_dev_multiplier: float = DEFAULT_STD_DEV_MULTIPLIER,
        sma_periods: Sequence[int] = DEFAULT_SMA_PERIODS,
        ema_periods: Sequence[int] = DEFAULT_EMA_PERIODS,
        toggles: IndicatorToggles | None = None,
    ):
        """Initialize analyzer parameters.

        Args:
            oscillator_period: RSI/Stochastic/ADX period (default: 14)
            band_period: Bollinger/CCI period (default: 20)
            std_dev_multiplier: Bollinger width (default: 2.0)
            sma_periods: SMA windows to compute (default: 20, 50)
            ema_periods: EMA windows to compute (default: 12, 26)
            toggles: Indicators to compute (default: all)

        Raises:
            ValueError: If a period is not positive or the multiplier is negative
        """
        check_period(oscillator_period, "oscillator_period")
        check_period(band_period, "band_period")
        for period in (*sma_periods, *ema_periods):
            check_period(period, "moving average period")
        if std_dev_multiplier < 0:
            raise ValueError(f"std_dev_multiplier must be non-negative, got {std_dev_multiplier}")

        self.oscillator_period = oscillator_period
        self.band_period = band_period
        self.std_dev_multiplier = std_dev_multiplier
        self.sma_periods = tuple(sma_periods)
        self.ema_periods = tuple(ema_periods)
        self.toggles = toggles or IndicatorToggles()

    @classmethod
    def from_settings(
        cls,
        settings: AnalysisSettings | None = None,
        toggles: IndicatorToggles | None = None,
    ) -> "TechnicalAnalyzer":
        """
        Create an analyzer from AnalysisSettings.

        Args:
            settings: Analysis settings (default: loaded from environment)
            toggles: Indicators to compute (default: all)

        Returns:
            Configured TechnicalAnalyzer
        """
        settings = settings or AnalysisSettings()
        return cls(
            oscillator_period=settings.oscillator_period,
            band_period=settings.band_period,
            std_dev_multiplier=settings.std_dev_multiplier,
            sma_periods=settings.sma_periods,
            ema_periods=settings.ema_periods,
            toggles=toggles,
        )

    def analyze(self, series: BarSeries, symbol: str | None = None) -> TechnicalAnalysis:
        """
        Compute every enabled indicator, the signal set and the rating.

        Args:
            series: Bars to analyze
            symbol: Optional instrument label for logging and export

        Returns:
            TechnicalAnalysis
        """
        log = logger.bind(symbol=symbol, bars=len(series))
        on = self.toggles

        rsi_values = rsi(series, self.oscillator_period) if on.rsi else empty_series("rsi")
        macd_values = macd(series) if on.macd else empty_frame(["macd", "signal", "histogram"])
        bollinger_values = (
            bollinger_bands(series, self.band_period, self.std_dev_multiplier)
            if on.bollinger
            else empty_frame(["upper", "middle", "lower", "price", "bandwidth"])
        )
        stochastic_values = (
            stochastic(series, self.oscillator_period) if on.stochastic else empty_frame(["k", "d"])
        )
        cci_values = cci(series, self.band_period) if on.cci else empty_series("cci")
        adx_values = (
            adx(series, self.oscillator_period)
            if on.adx
            else empty_frame(["adx", "plus_di", "minus_di"])
        )

        computed = {
            "rsi": rsi_values,
            "macd": macd_values,
            "bollinger": bollinger_values,
            "stochastic": stochastic_values,
            "cci": cci_values,
            "adx": adx_values,
        }
        starved = [name for name, values in computed.items() if getattr(on, name) and values.empty]
        if starved:
            log.debug("indicator_insufficient_data", indicators=starved)

        signals = generate_signals(**computed)
        rating = rate(signals)

        analysis = TechnicalAnalysis(
            bars=series,
            symbol=symbol,
            sma={p: sma(series, p) for p in self.sma_periods} if on.moving_average else {},
            ema={p: ema(series, p) for p in self.ema_periods} if on.moving_average else {},
            rsi=rsi_values,
            macd=macd_values,
            bollinger=bollinger_values,
            stochastic=stochastic_values,
            cci=cci_values,
            adx=adx_values,
            obv=obv(series) if on.obv else empty_series("obv"),
            vwap=vwap(series) if on.vwap else empty_series("vwap"),
            fibonacci=fibonacci_levels(series) if on.fibonacci else [],
            pivot_points=pivot_points(series) if on.pivot else None,
            support_resistance=(
                support_resistance(series) if on.support_resistance else SupportResistance()
            ),
            signals=signals,
            rating=rating,
        )

        log.info(
            "analysis_computed",
            signals=len(signals),
            rating=rating.label.value,
            score=round(rating.score, 2),
        )
        return analysis

