"""
Moving-average crossover strategy.

The first walkthrough on the blog: go long while the fast SMA is above the
slow SMA, short (or flat) while it is below.
"""

import pandas as pd
from typing import Any, Dict

from folio_core.indicators.technical import sma
from folio_core.strategies.base import Strategy, sign_signal


class MovingAverageCrossStrategy(Strategy):
    """
    Fast/slow simple moving average crossover.

    Parameters:
        fast_window: Fast SMA period (default: 50)
        slow_window: Slow SMA period (default: 200)
        allow_short: Short when fast < slow; otherwise stay flat (default: False)

    Example:
        >>> strategy = MovingAverageCrossStrategy(params={"fast_window": 20, "slow_window": 100})
        >>> signals = strategy.generate_signals(ohlcv)
    """

    DEFAULT_PARAMS: Dict[str, Any] = {
        "fast_window": 50,
        "slow_window": 200,
        "allow_short": False,
    }

    def validate_params(self) -> None:
        fast = self._require_int("fast_window", maximum=504)
        slow = self._require_int("slow_window", maximum=504)
        if fast >= slow:
            raise ValueError(f"fast_window ({fast}) must be < slow_window ({slow})")
        if not isinstance(self.params["allow_short"], bool):
            raise ValueError(
                f"allow_short must be bool, got {self.params['allow_short']}"
            )

    def get_warmup_period(self) -> int:
        # Slow SMA first becomes valid at index slow_window - 1
        return self.params["slow_window"] - 1

    def generate_signals(self, ohlcv: pd.DataFrame) -> pd.Series:
        fast = sma(ohlcv['close'], self.params["fast_window"])
        slow = sma(ohlcv['close'], self.params["slow_window"])

        short_mask = fast < slow
        if not self.params["allow_short"]:
            short_mask = pd.Series(False, index=ohlcv.index)

        return sign_signal(fast > slow, short_mask)
