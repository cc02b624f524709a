"""
Multi-indicator trend-following strategy.

Combines three complementary trend indicators:
1. Momentum (12-month return)
2. Moving Average Crossover (50/200 SMA)
3. Breakout (52-week high/low)

Signals are combined using configurable methods (majority, all, weighted).
"""

import pandas as pd
from typing import Any, Dict

from folio_core.indicators.technical import momentum, rolling_high, rolling_low, sma
from folio_core.strategies.base import Strategy, combine_votes, sign_signal


class TrendStrategy(Strategy):
    """
    Multi-indicator trend-following strategy.

    Parameters:
        momentum_lookback: Days for momentum calculation (default: 252)
        sma_short: Short SMA period (default: 50)
        sma_long: Long SMA period (default: 200)
        breakout_period: Days for breakout calculation (default: 252)
        breakout_tolerance: Distance from the rolling extreme that still
            counts as "at" the high/low (default: 0.01)
        combination_method: "majority", "all" or "weighted" (default: "majority")
        weights: [momentum, ma, breakout] weights for "weighted"
        weighted_threshold: Threshold for "weighted" (default: 0.1)

    Example:
        >>> strategy = TrendStrategy(params={"combination_method": "all"})
    """

    DEFAULT_PARAMS: Dict[str, Any] = {
        "momentum_lookback": 252,
        "sma_short": 50,
        "sma_long": 200,
        "breakout_period": 252,
        "breakout_tolerance": 0.01,
        "combination_method": "majority",
        "weights": [0.4, 0.3, 0.3],
        "weighted_threshold": 0.1,
    }

    def validate_params(self) -> None:
        self._require_int("momentum_lookback", maximum=504)
        sma_short = self._require_int("sma_short")
        sma_long = self._require_int("sma_long")
        if sma_short >= sma_long:
            raise ValueError(
                f"sma_short ({sma_short}) must be < sma_long ({sma_long})"
            )
        self._require_int("breakout_period", maximum=504)

        tolerance = self.params["breakout_tolerance"]
        if not isinstance(tolerance, (int, float)) or not 0 <= tolerance < 0.5:
            raise ValueError(f"breakout_tolerance must be in [0, 0.5), got {tolerance}")

        self._validate_combination()

    def get_warmup_period(self) -> int:
        """
        Momentum is first valid at index momentum_lookback; the SMA and
        breakout windows at period - 1.
        """
        return max(
            self.params["momentum_lookback"],
            self.params["sma_long"] - 1,
            self.params["breakout_period"] - 1,
        )

    def calculate_momentum_signal(self, ohlcv: pd.DataFrame) -> pd.Series:
        """1 if trailing return > 0, -1 if < 0, 0 otherwise."""
        mom = momentum(ohlcv['close'], self.params["momentum_lookback"])
        return sign_signal(mom > 0, mom < 0)

    def calculate_ma_crossover_signal(self, ohlcv: pd.DataFrame) -> pd.Series:
        """1 if short SMA > long SMA, -1 if below."""
        short_ma = sma(ohlcv['close'], self.params["sma_short"])
        long_ma = sma(ohlcv['close'], self.params["sma_long"])
        return sign_signal(short_ma > long_ma, short_ma < long_ma)

    def calculate_breakout_signal(self, ohlcv: pd.DataFrame) -> pd.Series:
        """
        1 near the rolling high, -1 near the rolling low.

        When the range is so narrow that both hold, the signal is neutral.
        """
        period = self.params["breakout_period"]
        tolerance = self.params["breakout_tolerance"]
        close = ohlcv['close']

        at_high = close >= rolling_high(close, period) * (1 - tolerance)
        at_low = close <= rolling_low(close, period) * (1 + tolerance)
        overlap = at_high & at_low

        return sign_signal(at_high & ~overlap, at_low & ~overlap)

    def generate_signals(self, ohlcv: pd.DataFrame) -> pd.Series:
        votes = [
            self.calculate_momentum_signal(ohlcv),
            self.calculate_ma_crossover_signal(ohlcv),
            self.calculate_breakout_signal(ohlcv),
        ]
        return combine_votes(
            votes,
            self.params["combination_method"],
            self.params["weights"],
            self.params["weighted_threshold"],
        )
