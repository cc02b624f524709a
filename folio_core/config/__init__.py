"""Configuration exports."""

from folio_core.config.walkthrough_config import (
    BacktestConfig,
    ClusteringConfig,
    DataConfig,
    StrategyConfig,
    WalkthroughConfig,
)

__all__ = [
    "BacktestConfig",
    "ClusteringConfig",
    "DataConfig",
    "StrategyConfig",
    "WalkthroughConfig",
]
