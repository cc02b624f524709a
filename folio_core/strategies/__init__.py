"""Strategy module exports."""

from folio_core.strategies.base import Strategy, combine_votes
from folio_core.strategies.ma_cross import MovingAverageCrossStrategy
from folio_core.strategies.trend import TrendStrategy
from folio_core.strategies.meanrev import MeanRevStrategy

# Strategy registry for dynamic instantiation
STRATEGY_REGISTRY = {
    'ma_cross': MovingAverageCrossStrategy,
    'trend': TrendStrategy,
    'meanrev': MeanRevStrategy,
}


def get_strategy(name: str, params: dict = None) -> Strategy:
    """
    Factory function to instantiate a strategy by name.

    Args:
        name: Strategy name ('ma_cross', 'trend', 'meanrev')
        params: Strategy parameters (default: {})

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name is not recognized

    Example:
        >>> strategy = get_strategy('ma_cross', {'fast_window': 20, 'slow_window': 100})
    """
    if name not in STRATEGY_REGISTRY:
        raise ValueError(
            f"Unknown strategy: {name}. "
            f"Available strategies: {list(STRATEGY_REGISTRY.keys())}"
        )

    return STRATEGY_REGISTRY[name](params=params or {})


__all__ = [
    "Strategy",
    "combine_votes",
    "MovingAverageCrossStrategy",
    "TrendStrategy",
    "MeanRevStrategy",
    "STRATEGY_REGISTRY",
    "get_strategy",
]
