"""Tests for MeanRevStrategy."""

import pytest

from folio_core.strategies.meanrev import MeanRevStrategy

# Sine fixture: troughs at t % 40 == 30, peaks at t % 40 == 10
SINE_PARAMS = {
    "bb_period": 20,
    "bb_std": 1.0,
    "zscore_lookback": 20,
    "zscore_threshold": 1.0,
}


class TestMeanRevParams:
    """Parameter validation."""

    def test_default_warmup(self):
        assert MeanRevStrategy().get_warmup_period() == 59

    def test_rsi_thresholds_ordered(self):
        with pytest.raises(ValueError, match=r"rsi_oversold \(70\) must be < rsi_overbought \(30\)"):
            MeanRevStrategy(params={"rsi_oversold": 70, "rsi_overbought": 30})

    def test_rsi_threshold_range(self):
        with pytest.raises(ValueError, match=r"rsi_overbought must be in \[0, 100\]"):
            MeanRevStrategy(params={"rsi_overbought": 120})

    def test_rsi_period_minimum(self):
        with pytest.raises(ValueError, match="rsi_period must be int >= 2"):
            MeanRevStrategy(params={"rsi_period": 1})

    def test_bb_std_range(self):
        with pytest.raises(ValueError, match="bb_std must be in"):
            MeanRevStrategy(params={"bb_std": 0})

    def test_zscore_lookback_minimum(self):
        with pytest.raises(ValueError, match="zscore_lookback must be int >= 10"):
            MeanRevStrategy(params={"zscore_lookback": 5})

    def test_zscore_threshold_range(self):
        with pytest.raises(ValueError, match="zscore_threshold must be in"):
            MeanRevStrategy(params={"zscore_threshold": -1})


class TestMeanRevSignals:
    """Signal generation on an oscillating price path."""

    def test_buys_troughs_sells_peaks(self, oscillating_ohlcv):
        signals = MeanRevStrategy(params=SINE_PARAMS).generate_signals(oscillating_ohlcv)
        assert signals.iloc[270] == 1
        assert signals.iloc[250] == -1

    def test_component_signals_at_trough(self, oscillating_ohlcv):
        strategy = MeanRevStrategy(params=SINE_PARAMS)
        assert strategy.calculate_rsi_signal(oscillating_ohlcv).iloc[270] == 1
        assert strategy.calculate_bb_signal(oscillating_ohlcv).iloc[270] == 1
        assert strategy.calculate_zscore_signal(oscillating_ohlcv).iloc[270] == 1

    def test_all_requires_every_indicator(self, oscillating_ohlcv):
        strategy = MeanRevStrategy(params={**SINE_PARAMS, "combination_method": "all"})
        signals = strategy.generate_signals(oscillating_ohlcv)
        assert signals.iloc[270] == 1
        assert signals.iloc[250] == -1

    def test_trend_is_not_mean_reverting(self, trending_ohlcv):
        """A steady rise never looks oversold."""
        signals = MeanRevStrategy(params=SINE_PARAMS).generate_signals(trending_ohlcv)
        assert (signals.iloc[200:] <= 0).all()

    def test_signal_values(self, sample_ohlcv):
        signals = MeanRevStrategy().generate_signals(sample_ohlcv)
        assert set(signals.unique()) <= {-1, 0, 1}
