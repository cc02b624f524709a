"""Registry for strategy UI renderers (app-side only)."""

from dataclasses import dataclass
from typing import Any, Callable, Dict

from app.strategy_ui.ma_cross import render_params as render_ma_cross_params
from app.strategy_ui.meanrev import render_params as render_meanrev_params
from app.strategy_ui.trend import render_params as render_trend_params

RenderParams = Callable[[str], Dict[str, Any]]


@dataclass(frozen=True)
class StrategySpec:
    name: str
    display_name: str
    description: str
    render_params: RenderParams


STRATEGY_SPECS: Dict[str, StrategySpec] = {
    "ma_cross": StrategySpec(
        name="ma_cross",
        display_name="Moving Average Crossover",
        description="Long while the fast SMA is above the slow SMA (golden cross)",
        render_params=render_ma_cross_params,
    ),
    "trend": StrategySpec(
        name="trend",
        display_name="Trend Following",
        description="Momentum, MA crossover and breakout signals combined by vote",
        render_params=render_trend_params,
    ),
    "meanrev": StrategySpec(
        name="meanrev",
        display_name="Mean Reversion",
        description="RSI, Bollinger band and z-score signals combined by vote",
        render_params=render_meanrev_params,
    ),
}
