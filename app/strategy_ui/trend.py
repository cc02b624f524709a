"""Trend strategy UI renderer (app-side)."""

from typing import Any, Dict

import streamlit as st

from app.strategy_ui.combination import render_combination
from folio_core.strategies.trend import TrendStrategy

DEFAULTS = TrendStrategy.DEFAULT_PARAMS

BOUNDS = {
    "momentum_lookback": (20, 504, 10),
    "sma_short": (5, 200, 5),
    "sma_long": (20, 400, 10),
    "breakout_period": (20, 504, 10),
}


def render_params(key_prefix: str) -> Dict[str, Any]:
    """Render Trend strategy parameters and return params dict."""
    momentum_lookback = st.slider(
        "Momentum lookback (days)",
        min_value=BOUNDS["momentum_lookback"][0],
        max_value=BOUNDS["momentum_lookback"][1],
        value=DEFAULTS["momentum_lookback"],
        step=BOUNDS["momentum_lookback"][2],
        key=f"{key_prefix}momentum_lookback",
    )

    sma_short = st.slider(
        "Short SMA (days)",
        min_value=BOUNDS["sma_short"][0],
        max_value=BOUNDS["sma_short"][1],
        value=DEFAULTS["sma_short"],
        step=BOUNDS["sma_short"][2],
        key=f"{key_prefix}sma_short",
    )

    sma_long_min = max(BOUNDS["sma_long"][0], sma_short + 1)
    sma_long_default = min(max(DEFAULTS["sma_long"], sma_long_min), BOUNDS["sma_long"][1])
    sma_long = st.slider(
        "Long SMA (days)",
        min_value=sma_long_min,
        max_value=BOUNDS["sma_long"][1],
        value=sma_long_default,
        help="Long moving average window (must be > short SMA)",
        key=f"{key_prefix}sma_long",
    )

    breakout_period = st.slider(
        "Breakout period (days)",
        min_value=BOUNDS["breakout_period"][0],
        max_value=BOUNDS["breakout_period"][1],
        value=DEFAULTS["breakout_period"],
        step=BOUNDS["breakout_period"][2],
        help="Lookback window for the rolling high/low breakout",
        key=f"{key_prefix}breakout_period",
    )

    params = {
        "momentum_lookback": momentum_lookback,
        "sma_short": sma_short,
        "sma_long": sma_long,
        "breakout_period": breakout_period,
    }
    params.update(
        render_combination(key_prefix, DEFAULTS, ["Momentum", "MA", "Breakout"])
    )
    return params
