"""Moving-average crossover UI renderer (app-side)."""

from typing import Any, Dict

import streamlit as st

from folio_core.strategies.ma_cross import MovingAverageCrossStrategy

DEFAULTS = MovingAverageCrossStrategy.DEFAULT_PARAMS

BOUNDS = {
    "fast_window": (5, 200, 5),
    "slow_window": (10, 400, 10),
}


def render_params(key_prefix: str) -> Dict[str, Any]:
    """Render MA crossover parameters and return params dict."""
    fast_window = st.slider(
        "Fast SMA (days)",
        min_value=BOUNDS["fast_window"][0],
        max_value=BOUNDS["fast_window"][1],
        value=DEFAULTS["fast_window"],
        step=BOUNDS["fast_window"][2],
        key=f"{key_prefix}fast_window",
    )

    slow_min = max(BOUNDS["slow_window"][0], fast_window + 1)
    slow_default = min(max(DEFAULTS["slow_window"], slow_min), BOUNDS["slow_window"][1])
    slow_window = st.slider(
        "Slow SMA (days)",
        min_value=slow_min,
        max_value=BOUNDS["slow_window"][1],
        value=slow_default,
        help="Must be longer than the fast SMA",
        key=f"{key_prefix}slow_window",
    )

    allow_short = st.checkbox(
        "Allow short positions",
        value=DEFAULTS["allow_short"],
        help="Go short when the fast SMA is below the slow SMA instead of flat",
        key=f"{key_prefix}allow_short",
    )

    return {
        "fast_window": fast_window,
        "slow_window": slow_window,
        "allow_short": allow_short,
    }
