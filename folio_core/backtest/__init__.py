"""Backtest exports."""

from folio_core.backtest.engine import BacktestResult, run_backtest

__all__ = ["BacktestResult", "run_backtest"]
