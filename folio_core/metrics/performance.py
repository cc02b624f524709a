"""
Performance metrics for strategy walkthroughs.

This module provides functions to calculate:
- Sharpe ratio and CAGR
- Drawdown series and maximum drawdown
- Hit rate, market exposure and trade count
- Yearly summaries
"""

import pandas as pd
import numpy as np
from typing import Dict, Any, Optional

from folio_core.utils.constants import TRADING_DAYS_PER_YEAR


def calculate_sharpe_ratio(
    returns: pd.Series,
    risk_free_rate: float = 0.0,
    annualization_factor: float = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Calculate annualized Sharpe ratio.

    Args:
        returns: Series of periodic returns
        risk_free_rate: Annual risk-free rate (default: 0.0)
        annualization_factor: Periods per year (default: 252)

    Returns:
        Annualized Sharpe ratio (0.0 for empty or constant returns)
    """
    returns_clean = returns.dropna()
    if len(returns_clean) == 0:
        return 0.0

    excess_returns = returns_clean - (risk_free_rate / annualization_factor)
    std = excess_returns.std()

    if np.isnan(std) or np.isclose(std, 0.0, atol=1e-12):
        return 0.0

    return float(excess_returns.mean() / std * np.sqrt(annualization_factor))


def calculate_drawdown_series(equity_curve: pd.Series) -> pd.Series:
    """
    Percentage drawdown from the running peak at every date (<= 0).
    """
    if len(equity_curve) == 0:
        return pd.Series(dtype=float)
    running_max = equity_curve.cummax()
    return equity_curve / running_max - 1.0


def calculate_max_drawdown(equity_curve: pd.Series) -> Dict[str, Any]:
    """
    Calculate maximum drawdown and related dates.

    Args:
        equity_curve: Series of cumulative equity values

    Returns:
        Dictionary with:
            - max_drawdown_pct: Maximum drawdown as a fraction (negative)
            - peak_date: Last date at the peak before the trough
            - trough_date: Date of the trough
            - recovery_date: First date back at the peak (None if never)
            - drawdown_duration_days: Calendar days from peak to trough
            - recovery_duration_days: Days from trough to recovery (None if never)
    """
    empty = {
        "max_drawdown_pct": 0.0,
        "peak_date": None,
        "trough_date": None,
        "recovery_date": None,
        "drawdown_duration_days": 0,
        "recovery_duration_days": None,
    }
    if len(equity_curve) == 0:
        return empty

    drawdown = calculate_drawdown_series(equity_curve)
    trough_idx = drawdown.idxmin()
    max_dd_pct = float(drawdown[trough_idx])

    if max_dd_pct == 0.0:
        return empty

    # Last occurrence of the peak value before the trough
    pre_trough = equity_curve.loc[:trough_idx]
    peak_value = pre_trough.max()
    peak_idx = pre_trough[pre_trough == peak_value].index[-1]

    post_trough = equity_curve.loc[trough_idx:]
    recovered = post_trough[post_trough >= peak_value]
    recovery_idx = recovered.index[0] if len(recovered) > 0 else None

    def _days(later, earlier) -> int:
        delta = later - earlier
        return delta.days if hasattr(delta, 'days') else int(delta)

    return {
        "max_drawdown_pct": max_dd_pct,
        "peak_date": peak_idx,
        "trough_date": trough_idx,
        "recovery_date": recovery_idx,
        "drawdown_duration_days": _days(trough_idx, peak_idx),
        "recovery_duration_days": _days(recovery_idx, trough_idx) if recovery_idx is not None else None,
    }


def calculate_cagr(equity_curve: pd.Series) -> float:
    """Compound annual growth rate from a dated equity curve."""
    if len(equity_curve) < 2:
        return 0.0
    years = (equity_curve.index[-1] - equity_curve.index[0]).days / 365.25
    if years <= 0 or equity_curve.iloc[0] <= 0:
        return 0.0
    return float((equity_curve.iloc[-1] / equity_curve.iloc[0]) ** (1 / years) - 1)


def calculate_hit_rate(returns: pd.Series, positions: Optional[pd.Series] = None) -> float:
    """
    Fraction of invested periods with a positive return.

    Periods where the position is zero (or the return is exactly zero when
    no positions are given) are not counted.
    """
    if positions is not None:
        active = returns[positions.reindex(returns.index).fillna(0) != 0]
    else:
        active = returns[returns != 0]
    active = active.dropna()
    if len(active) == 0:
        return 0.0
    return float((active > 0).mean())


def calculate_exposure(positions: pd.Series) -> float:
    """Fraction of periods with a non-zero position."""
    if len(positions) == 0:
        return 0.0
    return float((positions.fillna(0) != 0).mean())


def calculate_trade_count(positions: pd.Series) -> int:
    """Number of position changes (entries, exits and reversals)."""
    if len(positions) == 0:
        return 0
    changes = positions.fillna(0).diff().fillna(positions.fillna(0).iloc[0])
    return int((changes != 0).sum())


def calculate_yearly_summary(
    returns: pd.Series,
    equity_curve: pd.Series = None,
) -> pd.DataFrame:
    """
    Calculate per-year performance.

    Returns:
        DataFrame indexed by year with total_return, sharpe, max_drawdown
        and volatility
    """
    if len(returns) == 0:
        return pd.DataFrame()

    yearly_data = []
    for year in returns.index.year.unique():
        year_returns = returns[returns.index.year == year]

        max_dd_pct = 0.0
        if equity_curve is not None:
            year_equity = equity_curve[equity_curve.index.year == year]
            max_dd_pct = calculate_max_drawdown(year_equity)["max_drawdown_pct"]

        yearly_data.append({
            "year": year,
            "total_return": (1 + year_returns.fillna(0)).prod() - 1,
            "sharpe": calculate_sharpe_ratio(year_returns),
            "max_drawdown": max_dd_pct,
            "volatility": year_returns.std() * np.sqrt(TRADING_DAYS_PER_YEAR),
        })

    return pd.DataFrame(yearly_data).set_index("year")


def calculate_all_metrics(
    returns: pd.Series,
    equity_curve: pd.Series,
    positions: pd.Series = None,
) -> Dict[str, Any]:
    """
    Calculate every metric shown in the walkthrough tables.

    Args:
        returns: Series of strategy returns
        equity_curve: Series of cumulative equity
        positions: Optional position series for exposure/trades/hit rate

    Returns:
        Dictionary with all metrics (yearly_summary is a DataFrame)
    """
    metrics: Dict[str, Any] = {}

    metrics["sharpe_ratio"] = calculate_sharpe_ratio(returns)
    metrics.update(calculate_max_drawdown(equity_curve))
    metrics["volatility"] = float(returns.std() * np.sqrt(TRADING_DAYS_PER_YEAR)) if len(returns) > 1 else 0.0
    metrics["total_return"] = (
        float(equity_curve.iloc[-1] / equity_curve.iloc[0] - 1) if len(equity_curve) > 0 else 0.0
    )
    metrics["cagr"] = calculate_cagr(equity_curve)
    metrics["hit_rate"] = calculate_hit_rate(returns, positions)

    if positions is not None:
        metrics["exposure"] = calculate_exposure(positions)
        metrics["trade_count"] = calculate_trade_count(positions)

    metrics["yearly_summary"] = calculate_yearly_summary(returns, equity_curve)
    return metrics
