"""Tests for the Strategy base class and signal helpers."""

import pytest
import pandas as pd
import numpy as np

from folio_core.strategies import STRATEGY_REGISTRY, get_strategy
from folio_core.strategies.base import Strategy, combine_votes, sign_signal


class AlwaysLong(Strategy):
    DEFAULT_PARAMS = {"warmup": 3}

    def validate_params(self):
        self._require_int("warmup", minimum=0)

    def get_warmup_period(self):
        return self.params["warmup"]

    def generate_signals(self, ohlcv):
        return pd.Series(1, index=ohlcv.index)


class TestStrategyBase:
    """Tests for abstract Strategy base class."""

    def test_strategy_is_abstract(self):
        """Strategy cannot be instantiated directly."""
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            Strategy()

    def test_subclass_requires_generate_signals(self):
        class Incomplete(Strategy):
            def validate_params(self):
                pass

            def get_warmup_period(self):
                return 0

        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            Incomplete()

    def test_params_merged_over_defaults(self):
        strategy = AlwaysLong(params={"extra": 1})
        assert strategy.params == {"warmup": 3, "extra": 1}

    def test_validation_runs_on_init(self):
        with pytest.raises(ValueError, match="warmup must be int >= 0"):
            AlwaysLong(params={"warmup": -1})

    def test_bool_is_not_an_int(self):
        with pytest.raises(ValueError, match="warmup must be int"):
            AlwaysLong(params={"warmup": True})

    def test_name_is_class_name(self):
        assert AlwaysLong().name == "AlwaysLong"

    def test_run_adds_signal_with_warmup_nan(self, sample_ohlcv):
        """run() copies each frame and masks the warmup bars."""
        strategy = AlwaysLong()
        result = strategy.run({"SPY": sample_ohlcv, "QQQ": sample_ohlcv})

        assert set(result) == {"SPY", "QQQ"}
        signal = result["SPY"]["signal"]
        assert signal.iloc[:3].isna().all()
        assert (signal.iloc[3:] == 1.0).all()
        assert "signal" not in sample_ohlcv.columns


class TestCombineVotes:
    """Tests for combine_votes."""

    @pytest.fixture
    def votes(self):
        index = pd.RangeIndex(5)
        return [
            pd.Series([1, 1, 1, -1, 0], index=index),
            pd.Series([1, 1, 0, -1, 0], index=index),
            pd.Series([1, -1, 0, -1, 1], index=index),
        ]

    def test_all(self, votes):
        assert combine_votes(votes, "all").tolist() == [1, 0, 0, -1, 0]

    def test_majority(self, votes):
        # Row 1 nets +1 (two for, one against), which is not a majority of 2
        assert combine_votes(votes, "majority").tolist() == [1, 0, 0, -1, 0]

    def test_majority_two_of_three(self):
        index = pd.RangeIndex(2)
        votes = [pd.Series([1, -1], index=index), pd.Series([1, -1], index=index),
                 pd.Series([0, 0], index=index)]
        assert combine_votes(votes, "majority").tolist() == [1, -1]

    def test_weighted(self, votes):
        combined = combine_votes(votes, "weighted", [0.4, 0.3, 0.3], 0.1)
        # Row 1: 0.4 + 0.3 - 0.3 = 0.4; row 2: 0.4; row 4: 0.3
        assert combined.tolist() == [1, 1, 1, -1, 1]

    def test_unknown_method(self, votes):
        with pytest.raises(ValueError, match="Unknown combination method"):
            combine_votes(votes, "unanimous")


class TestSignSignal:
    """Tests for sign_signal."""

    def test_nan_comparisons_are_flat(self):
        values = pd.Series([np.nan, 1.0, -1.0, 0.0])
        out = sign_signal(values > 0, values < 0)
        assert out.tolist() == [0, 1, -1, 0]


class TestStrategyRegistry:
    """Tests for the registry and factory."""

    def test_registry_names(self):
        assert set(STRATEGY_REGISTRY) == {"ma_cross", "trend", "meanrev"}

    @pytest.mark.parametrize("name", ["ma_cross", "trend", "meanrev"])
    def test_get_strategy_defaults(self, name):
        strategy = get_strategy(name)
        assert isinstance(strategy, STRATEGY_REGISTRY[name])

    def test_get_strategy_params(self):
        strategy = get_strategy("ma_cross", {"fast_window": 10, "slow_window": 30})
        assert strategy.params["fast_window"] == 10

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy: momentum"):
            get_strategy("momentum")
