"""Formatting utilities for displaying metrics and values."""

import math
from typing import Any, Dict, Optional

import pandas as pd


def _missing(value) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def format_percentage(value: Optional[float], decimals: int = 2) -> str:
    """
    Format a decimal value as a percentage.

    Args:
        value: Decimal value (e.g., 0.15 for 15%)
        decimals: Number of decimal places

    Returns:
        Formatted percentage string (e.g., "15.00%"), "N/A" for None/NaN
    """
    if _missing(value):
        return "N/A"
    return f"{value * 100:.{decimals}f}%"


def format_ratio(value: Optional[float], decimals: int = 2) -> str:
    if _missing(value):
        return "N/A"
    return f"{value:.{decimals}f}"


def format_days(days: Optional[int]) -> str:
    """
    Format a duration in days.

    Args:
        days: Number of days

    Returns:
        Formatted duration string ("Not recovered" for None)
    """
    if days is None:
        return "Not recovered"
    if days == 1:
        return "1 day"
    return f"{days} days"


def format_date(date_obj) -> str:
    if date_obj is None:
        return "N/A"
    if hasattr(date_obj, 'strftime'):
        return date_obj.strftime("%Y-%m-%d")
    return str(date_obj)


def get_metric_color(value: Optional[float], positive_is_good: bool = True) -> str:
    """
    Get a color indicator based on metric value.

    Args:
        value: Metric value
        positive_is_good: If True, positive values are green

    Returns:
        Color indicator: "green", "red", or "neutral"
    """
    if _missing(value) or value == 0:
        return "neutral"
    if (value > 0) == positive_is_good:
        return "green"
    return "red"


# (label, key, kind) rows of the headline metrics table
_METRIC_ROWS = [
    ("Total Return", "total_return", "pct"),
    ("CAGR", "cagr", "pct"),
    ("Sharpe Ratio", "sharpe_ratio", "ratio"),
    ("Volatility", "volatility", "pct"),
    ("Max Drawdown", "max_drawdown_pct", "pct"),
    ("Drawdown Duration", "drawdown_duration_days", "days"),
    ("Recovery Duration", "recovery_duration_days", "days"),
    ("Hit Rate", "hit_rate", "pct"),
    ("Exposure", "exposure", "pct"),
    ("Trades", "trade_count", "int"),
]


def format_metrics_table(metrics: Dict[str, Any]) -> pd.DataFrame:
    """
    Turn a calculate_all_metrics() dict into a two-column display table.

    Keys missing from metrics are skipped.
    """
    rows = []
    for label, key, kind in _METRIC_ROWS:
        if key not in metrics:
            continue
        value = metrics[key]
        if kind == "pct":
            text = format_percentage(value)
        elif kind == "ratio":
            text = format_ratio(value)
        elif kind == "days":
            text = format_days(value)
        else:
            text = "N/A" if value is None else str(int(value))
        rows.append({"Metric": label, "Value": text})
    return pd.DataFrame(rows, columns=["Metric", "Value"])
