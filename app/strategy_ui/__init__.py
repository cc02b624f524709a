"""Strategy UI registry and renderers."""

from app.strategy_ui.registry import STRATEGY_SPECS, StrategySpec

__all__ = [
    "STRATEGY_SPECS",
    "StrategySpec",
]
