"""
Single-asset backtest for the strategy walkthroughs.

Signals are decided at the close of bar t. With execution_delay=1 the
position is held from bar t+1, so the return earned on bar t+1 is
signal[t] × raw_ret[t+1]. Transaction costs are charged on every change
in position.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import pandas as pd

from folio_core.metrics.performance import calculate_all_metrics
from folio_core.strategies.base import Strategy
from folio_core.utils.constants import DEFAULT_COST_BPS, DEFAULT_EXECUTION_DELAY

logger = logging.getLogger(__name__)


@dataclass
class BacktestResult:
    """
    Output of run_backtest().

    Attributes:
        strategy_name: Class name of the strategy
        params: Strategy parameters used
        signals: Raw signals (NaN during warmup)
        positions: Held positions after the execution delay
        returns: Net strategy returns per bar
        equity_curve: Growth of 1.0 invested in the strategy
        benchmark_equity: Growth of 1.0 held in the asset (buy and hold)
        trades: One row per position change (date, from, to, cost)
        metrics: Output of calculate_all_metrics()
    """

    strategy_name: str
    params: Dict[str, Any]
    signals: pd.Series
    positions: pd.Series
    returns: pd.Series
    equity_curve: pd.Series
    benchmark_equity: pd.Series
    trades: pd.DataFrame
    metrics: Dict[str, Any] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        """Scalar metrics only (drops the yearly table)."""
        return {k: v for k, v in self.metrics.items() if k != "yearly_summary"}

    def to_frame(self) -> pd.DataFrame:
        """Per-bar table of signal, position, return, equity and benchmark."""
        return pd.DataFrame({
            "signal": self.signals,
            "position": self.positions,
            "return": self.returns,
            "equity": self.equity_curve,
            "benchmark": self.benchmark_equity,
        })


def run_backtest(
    ohlcv: pd.DataFrame,
    strategy: Strategy,
    cost_bps: float = DEFAULT_COST_BPS,
    execution_delay: int = DEFAULT_EXECUTION_DELAY,
) -> BacktestResult:
    """
    Backtest a strategy on one asset.

    Args:
        ohlcv: Price frame with 'close' and 'raw_ret' columns
        strategy: Strategy instance
        cost_bps: Cost per unit of position change, in basis points
        execution_delay: Bars between signal and position (>= 1)

    Returns:
        BacktestResult

    Raises:
        ValueError: If inputs are invalid or there are fewer bars than the
            strategy's warmup

    Example:
        >>> ohlcv = load_price_csv("data/prices/SPY.csv")
        >>> result = run_backtest(ohlcv, MovingAverageCrossStrategy())
        >>> result.metrics["sharpe_ratio"]
    """
    if isinstance(execution_delay, bool) or not isinstance(execution_delay, int) or execution_delay < 1:
        raise ValueError(
            f"execution_delay must be int >= 1 (same-bar execution looks ahead), got {execution_delay}"
        )
    if not isinstance(cost_bps, (int, float)) or cost_bps < 0:
        raise ValueError(f"cost_bps must be >= 0, got {cost_bps}")

    missing = [c for c in ('close', 'raw_ret') if c not in ohlcv.columns]
    if missing:
        raise ValueError(f"ohlcv missing required columns: {missing}")

    warmup = strategy.get_warmup_period()
    if len(ohlcv) <= warmup + execution_delay:
        raise ValueError(
            f"Need more than {warmup + execution_delay} bars for {strategy.name} "
            f"(warmup {warmup} + delay {execution_delay}), got {len(ohlcv)}"
        )

    signals = strategy.generate_signals(ohlcv).astype(float)
    if warmup > 0:
        signals.iloc[:warmup] = float("nan")

    positions = signals.shift(execution_delay).fillna(0.0)
    raw_ret = ohlcv['raw_ret'].fillna(0.0)

    turnover = positions.diff().abs()
    turnover.iloc[0] = abs(positions.iloc[0])
    costs = turnover * cost_bps / 10_000

    returns = positions * raw_ret - costs
    returns.name = "strategy_ret"

    equity_curve = (1 + returns).cumprod()
    equity_curve.name = "equity"
    benchmark_equity = (1 + raw_ret).cumprod()
    benchmark_equity.name = "benchmark"

    changed = turnover[turnover > 0].index
    trades = pd.DataFrame({
        "date": changed,
        "from_position": positions.shift(1).fillna(0.0).loc[changed].values,
        "to_position": positions.loc[changed].values,
        "cost": costs.loc[changed].values,
    })

    metrics = calculate_all_metrics(returns, equity_curve, positions)
    logger.info(
        f"Backtested {strategy.name} over {len(ohlcv)} bars: "
        f"{len(trades)} trades, total return {metrics['total_return']:.2%}"
    )

    return BacktestResult(
        strategy_name=strategy.name,
        params=dict(strategy.params),
        signals=signals,
        positions=positions,
        returns=returns,
        equity_curve=equity_curve,
        benchmark_equity=benchmark_equity,
        trades=trades,
        metrics=metrics,
    )
