"""
Abstract base class for the walkthrough trading strategies.

All strategies must implement:
- Parameter validation
- Warmup period calculation
- Signal generation from OHLCV data (intent at time t, unshifted)

Strategies return signals only. Turning signals into positions and
returns (with an execution delay) is done by folio_core.backtest.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

import pandas as pd

COMBINATION_METHODS = ["majority", "all", "weighted"]


class Strategy(ABC):
    """Abstract base class for trading strategies.

    Subclasses declare DEFAULT_PARAMS; user params are merged over them
    before validate_params() runs.

    Signals are discrete intent in {-1, 0, 1} at decision time t using
    data <= t.
    """

    DEFAULT_PARAMS: Dict[str, Any] = {}

    def __init__(self, params: Dict[str, Any] = None):
        """
        Initialize strategy with parameters.

        Args:
            params: Strategy-specific parameters, merged over DEFAULT_PARAMS
        """
        merged = {**self.DEFAULT_PARAMS, **(params or {})}
        self.params = merged
        self.validate_params()

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def validate_params(self) -> None:
        """
        Validate strategy parameters.

        Raises:
            ValueError: If parameters are invalid
        """

    @abstractmethod
    def get_warmup_period(self) -> int:
        """
        Return the number of bars needed before signals are valid.
        """

    @abstractmethod
    def generate_signals(self, ohlcv: pd.DataFrame) -> pd.Series:
        """
        Generate trading signals from OHLCV data.

        Args:
            ohlcv: DataFrame with at least a 'close' column (date index)

        Returns:
            Series of signals in {-1, 0, 1}
        """

    def run(self, asset_data: Dict[str, pd.DataFrame]) -> Dict[str, pd.DataFrame]:
        """
        Run the strategy over several assets.

        Args:
            asset_data: Dict mapping symbol to OHLCV DataFrame

        Returns:
            Dict mapping symbol to a copy of its DataFrame with a 'signal'
            column; the first get_warmup_period() rows are NaN
        """
        result = {}
        warmup = self.get_warmup_period()

        for symbol, df in asset_data.items():
            df_copy = df.copy()
            signals = self.generate_signals(df_copy).astype(float)

            if warmup > 0:
                signals.iloc[:warmup] = float("nan")

            df_copy['signal'] = signals
            result[symbol] = df_copy

        return result

    # ------------------------------------------------------------------
    # Shared parameter checks
    # ------------------------------------------------------------------

    def _require_int(self, key: str, minimum: int = 1, maximum: int = None) -> int:
        value = self.params[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            raise ValueError(f"{key} must be int >= {minimum}, got {value}")
        if maximum is not None and value > maximum:
            raise ValueError(f"{key} too large (>{maximum}), got {value}")
        return value

    def _validate_combination(self, n_signals: int = 3) -> None:
        method = self.params["combination_method"]
        if method not in COMBINATION_METHODS:
            raise ValueError(
                f"combination_method must be one of {COMBINATION_METHODS}, got {method}"
            )

        if method != "weighted":
            return

        weights = self.params["weights"]
        if not isinstance(weights, (list, tuple)) or len(weights) != n_signals:
            raise ValueError(
                f"weights must be list/tuple of length {n_signals}, got {weights}"
            )
        if not all(isinstance(w, (int, float)) and w >= 0 for w in weights):
            raise ValueError(f"weights must be non-negative numbers, got {weights}")
        if abs(sum(weights) - 1.0) > 1e-6:
            raise ValueError(f"weights must sum to 1.0, got sum={sum(weights)}")

        threshold = self.params["weighted_threshold"]
        if not isinstance(threshold, (int, float)):
            raise ValueError(f"weighted_threshold must be a number, got {threshold}")
        if threshold < 0 or threshold > 1:
            raise ValueError(f"weighted_threshold must be in [0, 1], got {threshold}")


def combine_votes(
    signals: List[pd.Series],
    method: str,
    weights: Sequence[float] = None,
    threshold: float = 0.0,
) -> pd.Series:
    """
    Combine indicator votes into one signal.

    Args:
        signals: Signals in {-1, 0, 1} on a shared index
        method: "all" (unanimous), "majority" (net vote of at least
            len(signals) // 2 + 1, so 2 of 3 with no opposing vote),
            or "weighted" (weighted sum beyond ±threshold)
        weights: Weights for "weighted"
        threshold: Threshold for "weighted"

    Returns:
        Combined signal in {-1, 0, 1}
    """
    index = signals[0].index
    combined = pd.Series(0, index=index, dtype=int)

    if method == "all":
        all_long = pd.concat([s == 1 for s in signals], axis=1).all(axis=1)
        all_short = pd.concat([s == -1 for s in signals], axis=1).all(axis=1)
        combined[all_long] = 1
        combined[all_short] = -1

    elif method == "majority":
        needed = len(signals) // 2 + 1
        total = sum(signals)
        combined[total >= needed] = 1
        combined[total <= -needed] = -1

    elif method == "weighted":
        weighted_sum = sum(w * s for w, s in zip(weights, signals))
        combined[weighted_sum > threshold] = 1
        combined[weighted_sum < -threshold] = -1

    else:
        raise ValueError(f"Unknown combination method: {method}")

    return combined


def sign_signal(condition_long: pd.Series, condition_short: pd.Series) -> pd.Series:
    """Build a {-1, 0, 1} signal from two boolean masks (NaN comparisons are False)."""
    out = pd.Series(0, index=condition_long.index, dtype=int)
    out[condition_long.fillna(False).astype(bool)] = 1
    out[condition_short.fillna(False).astype(bool)] = -1
    return out
