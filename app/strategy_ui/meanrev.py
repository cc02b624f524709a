"""Mean reversion strategy UI renderer (app-side)."""

from typing import Any, Dict

import streamlit as st

from app.strategy_ui.combination import render_combination
from folio_core.strategies.meanrev import MeanRevStrategy

DEFAULTS = MeanRevStrategy.DEFAULT_PARAMS

BOUNDS = {
    "rsi_period": (2, 100, 1),
    "bb_period": (2, 200, 1),
    "bb_std": (0.5, 5.0, 0.1),
    "zscore_lookback": (10, 252, 5),
    "zscore_threshold": (0.5, 5.0, 0.1),
}


def render_params(key_prefix: str) -> Dict[str, Any]:
    """Render Mean Reversion strategy parameters and return params dict."""
    rsi_period = st.slider(
        "RSI period (days)",
        min_value=BOUNDS["rsi_period"][0],
        max_value=BOUNDS["rsi_period"][1],
        value=DEFAULTS["rsi_period"],
        step=BOUNDS["rsi_period"][2],
        key=f"{key_prefix}rsi_period",
    )

    rsi_oversold, rsi_overbought = st.slider(
        "RSI oversold / overbought",
        min_value=0,
        max_value=100,
        value=(DEFAULTS["rsi_oversold"], DEFAULTS["rsi_overbought"]),
        help="Buy below the lower bound, sell above the upper bound",
        key=f"{key_prefix}rsi_bounds",
    )

    bb_period = st.slider(
        "Bollinger period (days)",
        min_value=BOUNDS["bb_period"][0],
        max_value=BOUNDS["bb_period"][1],
        value=DEFAULTS["bb_period"],
        step=BOUNDS["bb_period"][2],
        key=f"{key_prefix}bb_period",
    )

    bb_std = st.slider(
        "Bollinger width (std)",
        min_value=BOUNDS["bb_std"][0],
        max_value=BOUNDS["bb_std"][1],
        value=float(DEFAULTS["bb_std"]),
        step=BOUNDS["bb_std"][2],
        key=f"{key_prefix}bb_std",
    )

    zscore_lookback = st.slider(
        "Z-score lookback (days)",
        min_value=BOUNDS["zscore_lookback"][0],
        max_value=BOUNDS["zscore_lookback"][1],
        value=DEFAULTS["zscore_lookback"],
        step=BOUNDS["zscore_lookback"][2],
        key=f"{key_prefix}zscore_lookback",
    )

    zscore_threshold = st.slider(
        "Z-score threshold",
        min_value=BOUNDS["zscore_threshold"][0],
        max_value=BOUNDS["zscore_threshold"][1],
        value=float(DEFAULTS["zscore_threshold"]),
        step=BOUNDS["zscore_threshold"][2],
        key=f"{key_prefix}zscore_threshold",
    )

    params = {
        "rsi_period": rsi_period,
        "rsi_oversold": rsi_oversold,
        "rsi_overbought": rsi_overbought,
        "bb_period": bb_period,
        "bb_std": bb_std,
        "zscore_lookback": zscore_lookback,
        "zscore_threshold": zscore_threshold,
    }
    params.update(
        render_combination(key_prefix, DEFAULTS, ["RSI", "Bollinger", "Z-score"])
    )
    return params
