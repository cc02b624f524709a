"""
Multi-indicator mean reversion strategy.

Combines RSI, Bollinger Bands and a rolling z-score. Signals are
contrarian: buy oversold, sell overbought.
"""

import pandas as pd
from typing import Any, Dict

from folio_core.indicators.technical import bollinger_bands, rsi, zscore
from folio_core.strategies.base import Strategy, combine_votes, sign_signal


class MeanRevStrategy(Strategy):
    """
    Multi-indicator mean reversion strategy.

    Parameters:
        rsi_period: Period for RSI calculation (default: 14)
        rsi_oversold: RSI threshold for oversold (default: 30)
        rsi_overbought: RSI threshold for overbought (default: 70)
        bb_period: Period for Bollinger Bands (default: 20)
        bb_std: Standard deviation multiplier for BB (default: 2.0)
        zscore_lookback: Lookback period for Z-Score (default: 60)
        zscore_threshold: Z-Score threshold for extremes (default: 1.5)
        combination_method: "majority", "all" or "weighted" (default: "majority")
        weights: [rsi, bb, zscore] weights for "weighted"
        weighted_threshold: Threshold for "weighted" (default: 0.1)

    Example:
        >>> strategy = MeanRevStrategy(params={"rsi_oversold": 40, "rsi_overbought": 60})
    """

    DEFAULT_PARAMS: Dict[str, Any] = {
        "rsi_period": 14,
        "rsi_oversold": 30,
        "rsi_overbought": 70,
        "bb_period": 20,
        "bb_std": 2.0,
        "zscore_lookback": 60,
        "zscore_threshold": 1.5,
        "combination_method": "majority",
        "weights": [0.4, 0.3, 0.3],
        "weighted_threshold": 0.1,
    }

    def validate_params(self) -> None:
        self._require_int("rsi_period", minimum=2, maximum=100)

        oversold = self.params["rsi_oversold"]
        overbought = self.params["rsi_overbought"]
        for key, value in (("rsi_oversold", oversold), ("rsi_overbought", overbought)):
            if not isinstance(value, (int, float)) or value < 0 or value > 100:
                raise ValueError(f"{key} must be in [0, 100], got {value}")
        if oversold >= overbought:
            raise ValueError(
                f"rsi_oversold ({oversold}) must be < rsi_overbought ({overbought})"
            )

        self._require_int("bb_period", minimum=2, maximum=200)
        bb_std = self.params["bb_std"]
        if not isinstance(bb_std, (int, float)) or bb_std <= 0 or bb_std > 5:
            raise ValueError(f"bb_std must be in (0, 5], got {bb_std}")

        self._require_int("zscore_lookback", minimum=10, maximum=252)
        threshold = self.params["zscore_threshold"]
        if not isinstance(threshold, (int, float)) or threshold <= 0 or threshold > 5:
            raise ValueError(f"zscore_threshold must be in (0, 5], got {threshold}")

        self._validate_combination()

    def get_warmup_period(self) -> int:
        # RSI needs one extra bar for the first price difference
        return max(
            self.params["rsi_period"],
            self.params["bb_period"] - 1,
            self.params["zscore_lookback"] - 1,
        )

    def calculate_rsi_signal(self, ohlcv: pd.DataFrame) -> pd.Series:
        """1 below the oversold line, -1 above the overbought line."""
        values = rsi(ohlcv['close'], self.params["rsi_period"])
        return sign_signal(
            values < self.params["rsi_oversold"],
            values > self.params["rsi_overbought"],
        )

    def calculate_bb_signal(self, ohlcv: pd.DataFrame) -> pd.Series:
        """1 below the lower band, -1 above the upper band."""
        bands = bollinger_bands(ohlcv['close'], self.params["bb_period"], self.params["bb_std"])
        close = ohlcv['close']
        return sign_signal(close < bands["lower"], close > bands["upper"])

    def calculate_zscore_signal(self, ohlcv: pd.DataFrame) -> pd.Series:
        """1 when z < -threshold, -1 when z > threshold."""
        z = zscore(ohlcv['close'], self.params["zscore_lookback"])
        threshold = self.params["zscore_threshold"]
        return sign_signal(z < -threshold, z > threshold)

    def generate_signals(self, ohlcv: pd.DataFrame) -> pd.Series:
        votes = [
            self.calculate_rsi_signal(ohlcv),
            self.calculate_bb_signal(ohlcv),
            self.calculate_zscore_signal(ohlcv),
        ]
        return combine_votes(
            votes,
            self.params["combination_method"],
            self.params["weights"],
            self.params["weighted_threshold"],
        )
