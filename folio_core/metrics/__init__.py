"""Performance metric exports."""

from folio_core.metrics.performance import (
    calculate_all_metrics,
    calculate_cagr,
    calculate_drawdown_series,
    calculate_max_drawdown,
    calculate_sharpe_ratio,
    calculate_yearly_summary,
)

__all__ = [
    "calculate_all_metrics",
    "calculate_cagr",
    "calculate_drawdown_series",
    "calculate_max_drawdown",
    "calculate_sharpe_ratio",
    "calculate_yearly_summary",
]
