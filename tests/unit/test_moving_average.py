"""
Unit tests for the moving average module.
"""

import numpy as np
import pandas as pd
import pytest
from hypothesis import given, settings, strategies as st

from factories import series_from_closes
from stockta.analysis import ema, exponential_average, sma

prices = st.lists(
    st.integers(min_value=100, max_value=1_000_000).map(lambda cents: cents / 100),
    min_size=1,
    max_size=120,
)


@pytest.mark.unit
class TestSMA:
    """Tests for the Simple Moving Average."""

    def test_constant_series(self, constant_bars):
        result = sma(constant_bars, 20)
        assert len(result) == 11
        assert (result == 100.0).all()
        assert result.index[0] == constant_bars.dates[19]

    def test_known_values(self):
        series = series_from_closes([1, 2, 3, 4, 5, 6])
        result = sma(series, 3)
        assert list(result) == pytest.approx([2.0, 3.0, 4.0, 5.0])
        assert result.name == "sma"

    @pytest.mark.parametrize("period", [1, 5, 10, 20])
    def test_point_count(self, sample_bars, period):
        assert len(sma(sample_bars, period)) == len(sample_bars) - period + 1

    def test_insufficient_data_is_empty(self, short_bars):
        result = sma(short_bars, 20)
        assert result.empty
        assert isinstance(result.index, pd.DatetimeIndex)

    @pytest.mark.parametrize("period", [0, -5])
    def test_invalid_period(self, sample_bars, period):
        with pytest.raises(ValueError):
            sma(sample_bars, period)

    @settings(max_examples=50, deadline=None)
    @given(closes=prices, period=st.integers(min_value=1, max_value=30))
    def test_within_window_range(self, closes, period):
        series = series_from_closes(closes, spread=0.0)
        result = sma(series, period).to_numpy()
        values = np.asarray(closes)
        for offset, mean in enumerate(result):
            window = values[offset : offset + period]
            assert window.min() - 1e-9 <= mean <= window.max() + 1e-9


@pytest.mark.unit
class TestEMA:
    """Tests for the Exponential Moving Average."""

    def test_constant_series(self, constant_bars):
        result = ema(constant_bars, 12)
        assert len(result) == len(constant_bars)
        assert np.allclose(result, 100.0)

    def test_seeded_at_first_close(self):
        closes = [10.0, 11.0, 12.0, 11.0, 13.0]
        result = ema(series_from_closes(closes), 3)

        k = 2 / (3 + 1)
        expected = [closes[0]]
        for close in closes[1:]:
            expected.append(close * k + expected[-1] * (1 - k))

        assert list(result) == pytest.approx(expected)
        assert result.name == "ema"

    def test_no_warmup_gap(self, sample_bars):
        result = ema(sample_bars, 26)
        assert result.index.equals(sample_bars.dates)

    def test_insufficient_data_is_empty(self, short_bars):
        assert ema(short_bars, 12).empty

    def test_reacts_faster_than_sma(self, ramp_bars):
        assert ema(ramp_bars, 20).iloc[-1] > sma(ramp_bars, 20).iloc[-1]

    def test_exponential_average_of_arbitrary_series(self):
        values = pd.Series([0.0, 10.0])
        result = exponential_average(values, 9)
        assert result.iloc[1] == pytest.approx(10.0 * 0.2)
