"""Tests for TrendStrategy."""

import pytest

from folio_core.strategies.trend import TrendStrategy

FAST_PARAMS = {
    "momentum_lookback": 20,
    "sma_short": 5,
    "sma_long": 20,
    "breakout_period": 20,
}


class TestTrendStrategyParams:
    """Parameter validation."""

    def test_default_warmup(self):
        assert TrendStrategy().get_warmup_period() == 252

    def test_warmup_uses_longest_window(self):
        strategy = TrendStrategy(params={**FAST_PARAMS, "sma_long": 60})
        assert strategy.get_warmup_period() == 59

    def test_sma_ordering(self):
        with pytest.raises(ValueError, match=r"sma_short \(50\) must be < sma_long \(20\)"):
            TrendStrategy(params={"sma_short": 50, "sma_long": 20})

    def test_breakout_tolerance_range(self):
        with pytest.raises(ValueError, match="breakout_tolerance must be in"):
            TrendStrategy(params={"breakout_tolerance": 0.5})

    def test_unknown_combination(self):
        with pytest.raises(ValueError, match="combination_method must be one of"):
            TrendStrategy(params={"combination_method": "vote"})

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="weights must sum to 1.0"):
            TrendStrategy(params={"combination_method": "weighted", "weights": [0.5, 0.5, 0.5]})

    def test_weights_length(self):
        with pytest.raises(ValueError, match="weights must be list/tuple of length 3"):
            TrendStrategy(params={"combination_method": "weighted", "weights": [0.5, 0.5]})

    def test_weights_ignored_for_majority(self):
        TrendStrategy(params={"combination_method": "majority", "weights": [9, 9, 9]})

    def test_weighted_threshold_range(self):
        with pytest.raises(ValueError, match="weighted_threshold must be in"):
            TrendStrategy(params={"combination_method": "weighted", "weighted_threshold": 2})


class TestTrendStrategySignals:
    """Signal generation on a down-then-up price path."""

    @pytest.mark.parametrize("method", ["majority", "all", "weighted"])
    def test_follows_trend(self, trending_ohlcv, method):
        strategy = TrendStrategy(params={**FAST_PARAMS, "combination_method": method})
        signals = strategy.generate_signals(trending_ohlcv)

        assert signals.iloc[140] == -1
        assert signals.iloc[-1] == 1

    def test_component_signals(self, trending_ohlcv):
        strategy = TrendStrategy(params=FAST_PARAMS)
        assert strategy.calculate_momentum_signal(trending_ohlcv).iloc[-1] == 1
        assert strategy.calculate_ma_crossover_signal(trending_ohlcv).iloc[140] == -1
        assert strategy.calculate_breakout_signal(trending_ohlcv).iloc[-1] == 1

    def test_signal_values(self, sample_ohlcv):
        signals = TrendStrategy(params=FAST_PARAMS).generate_signals(sample_ohlcv)
        assert set(signals.unique()) <= {-1, 0, 1}
        assert signals.index.equals(sample_ohlcv.index)

    def test_run_masks_warmup(self, trending_ohlcv):
        strategy = TrendStrategy(params=FAST_PARAMS)
        signal = strategy.run({"X": trending_ohlcv})["X"]["signal"]
        assert signal.iloc[:20].isna().all()
        assert signal.iloc[20:].notna().all()
