"""
Unit tests for RSI, Stochastic, CCI and ADX.
"""

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from factories import build_series, series_from_closes
from stockta.analysis import adx, cci, rsi, stochastic

SATURATED_RSI = 100 - 100 / (1 + 100)

prices = st.lists(
    st.integers(min_value=100, max_value=1_000_000).map(lambda cents: cents / 100),
    min_size=16,
    max_size=150,
)


@pytest.mark.unit
class TestRSI:
    """Tests for the Relative Strength Index."""

    def test_ramp_saturates_from_bar_14(self, ramp_bars):
        result = rsi(ramp_bars, 14)
        assert result.index[0] == ramp_bars.dates[14]
        assert len(result) == len(ramp_bars) - 14
        assert np.allclose(result, SATURATED_RSI)

    def test_falling_series_is_zero(self):
        series = series_from_closes([200.0 - i for i in range(20)])
        assert np.allclose(rsi(series, 14), 0.0)

    def test_flat_window_is_fifty(self, constant_bars):
        result = rsi(constant_bars, 14)
        assert len(result) == 16
        assert (result == 50.0).all()

    def test_known_value(self):
        # Deltas: +2, -1, +1, -2 -> avg gain 0.75, avg loss 0.75
        series = series_from_closes([10.0, 12.0, 11.0, 12.0, 10.0])
        result = rsi(series, 4)
        assert len(result) == 1
        assert result.iloc[0] == pytest.approx(50.0)

    def test_simple_window_average(self):
        # Deltas: +3, +1, -2 -> avg gain 4/3, avg loss 2/3, RS = 2
        series = series_from_closes([10.0, 13.0, 14.0, 12.0])
        assert rsi(series, 3).iloc[0] == pytest.approx(100 - 100 / 3)

    def test_minimum_bars(self):
        assert rsi(series_from_closes([1.0 + i for i in range(14)]), 14).empty
        assert len(rsi(series_from_closes([1.0 + i for i in range(15)]), 14)) == 1

    def test_insufficient_data_is_empty(self, short_bars):
        assert rsi(short_bars).empty

    @settings(max_examples=50, deadline=None)
    @given(closes=prices, period=st.integers(min_value=2, max_value=14))
    def test_bounded(self, closes, period):
        result = rsi(series_from_closes(closes, spread=0.0), period)
        assert ((result >= 0) & (result <= 100)).all()


@pytest.mark.unit
class TestStochastic:
    """Tests for the Stochastic Oscillator."""

    def test_d_equals_k(self, sample_bars):
        result = stochastic(sample_bars, 14)
        assert (result["k"] == result["d"]).all()

    def test_constant_series_mid_range(self, constant_bars):
        result = stochastic(constant_bars, 14)
        assert len(result) == 17
        assert np.allclose(result["k"], 50.0)

    def test_zero_range_sentinel(self):
        series = series_from_closes([50.0] * 14, spread=0.0)
        assert stochastic(series, 14)["k"].iloc[0] == 50.0

    def test_close_at_high_is_100(self):
        series = build_series(
            [10.0, 11.0, 12.0], highs=[10.5, 11.5, 12.0], lows=[9.0, 10.0, 11.0]
        )
        assert stochastic(series, 3)["k"].iloc[0] == pytest.approx(100.0)

    def test_bounded(self, sample_bars):
        k = stochastic(sample_bars, 14)["k"]
        assert ((k >= 0) & (k <= 100)).all()

    def test_insufficient_data_is_empty(self, short_bars):
        result = stochastic(short_bars)
        assert result.empty
        assert list(result.columns) == ["k", "d"]


@pytest.mark.unit
class TestCCI:
    """Tests for the Commodity Channel Index."""

    def test_constant_series_is_zero(self, constant_bars):
        result = cci(constant_bars, 20)
        assert len(result) == 11
        assert (result == 0.0).all()

    def test_ramp_value(self, ramp_bars):
        # Typical price equals close; last window is 120..139
        expected = (139 - 129.5) / (0.015 * 5.0)
        assert cci(ramp_bars, 20).iloc[-1] == pytest.approx(expected)

    def test_spike_is_overbought(self):
        closes = [100.0] * 19 + [110.0]
        assert cci(series_from_closes(closes), 20).iloc[-1] > 100

    def test_insufficient_data_is_empty(self, short_bars):
        assert cci(short_bars).empty


@pytest.mark.unit
class TestADX:
    """Tests for the Average Directional Index."""

    def test_starts_at_twice_period(self, sample_bars):
        result = adx(sample_bars, 14)
        assert result.index[0] == sample_bars.dates[28]
        assert len(result) == len(sample_bars) - 28

    def test_minimum_bars(self):
        assert adx(series_from_closes([100.0 + i for i in range(28)]), 14).empty
        assert len(adx(series_from_closes([100.0 + i for i in range(29)]), 14)) == 1

    def test_constant_series_has_no_direction(self, constant_bars):
        result = adx(constant_bars, 14)
        assert len(result) == 2
        assert (result["plus_di"] == 0).all()
        assert (result["minus_di"] == 0).all()
        assert (result["adx"] == 0).all()

    def test_ramp_is_strong_uptrend(self, ramp_bars):
        last = adx(ramp_bars, 14).iloc[-1]
        assert last["plus_di"] == pytest.approx(50.0)
        assert last["minus_di"] == 0.0
        assert last["adx"] == pytest.approx(100.0)

    def test_zero_true_range_sentinel(self):
        series = series_from_closes([42.0] * 30, spread=0.0)
        result = adx(series, 14)
        assert not result.isna().any().any()
        assert (result["adx"] == 0).all()

    def test_bounded(self, sample_bars):
        result = adx(sample_bars, 14)
        assert ((result["adx"] >= 0) & (result["adx"] <= 100)).all()
        assert (result[["plus_di", "minus_di"]] >= 0).all().all()
