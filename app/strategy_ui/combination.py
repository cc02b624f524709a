"""Signal-combination widgets shared by the multi-signal strategies."""

from typing import Any, Dict, Sequence

import streamlit as st

COMBINATION_METHODS = [
    ("majority", "Majority vote"),
    ("all", "All agree"),
    ("weighted", "Weighted blend"),
]

WEIGHT_STEP = 0.05


def render_combination(
    key_prefix: str,
    defaults: Dict[str, Any],
    signal_labels: Sequence[str],
) -> Dict[str, Any]:
    """
    Render combination method, weights and threshold.

    The last weight is computed so the weights sum to 1.

    Returns:
        Dict with combination_method, weights and weighted_threshold
    """
    method_options = [method for method, _ in COMBINATION_METHODS]
    method_labels = dict(COMBINATION_METHODS)
    default_method = defaults["combination_method"]
    method_index = method_options.index(default_method) if default_method in method_options else 0

    combination_method = st.selectbox(
        "Signal combination method",
        options=method_options,
        index=method_index,
        format_func=lambda value: method_labels.get(value, value),
        help=f"How to combine {', '.join(signal_labels)} signals",
        key=f"{key_prefix}combination_method",
    )

    weights = list(defaults["weights"])
    weighted_threshold = defaults["weighted_threshold"]

    if combination_method == "weighted":
        st.markdown("**Weights (sum to 1)**")
        remaining = 1.0
        chosen = []
        for i, label in enumerate(signal_labels[:-1]):
            weight = st.slider(
                f"{label} weight",
                min_value=0.0,
                max_value=max(remaining, WEIGHT_STEP),
                value=min(weights[i], remaining),
                step=WEIGHT_STEP,
                key=f"{key_prefix}weight_{i}",
            )
            chosen.append(weight)
            remaining = max(0.0, remaining - weight)

        st.caption(f"{signal_labels[-1]} weight (computed): {remaining:.2f}")
        weights = chosen + [remaining]

        weighted_threshold = st.slider(
            "Weighted threshold",
            min_value=0.0,
            max_value=1.0,
            value=defaults["weighted_threshold"],
            step=0.01,
            help="Lower threshold = more aggressive, higher = more conservative",
            key=f"{key_prefix}weighted_threshold",
        )

    return {
        "combination_method": combination_method,
        "weights": weights,
        "weighted_threshold": weighted_threshold,
    }
