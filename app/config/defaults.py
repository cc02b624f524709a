"""Default configuration values for the Streamlit app."""

from datetime import date

from folio_core.utils.constants import DEFAULT_COST_BPS, DEFAULT_EXECUTION_DELAY

# Default data window
DEFAULT_TICKER = "SPY"
DEFAULT_START_DATE = date(2015, 1, 1)
DEFAULT_END_DATE = date(2020, 12, 31)
EARLIEST_START_DATE = date(1990, 1, 1)

# Execution defaults
DEFAULT_STRATEGY = "ma_cross"
DEFAULT_COST = DEFAULT_COST_BPS
DEFAULT_DELAY = DEFAULT_EXECUTION_DELAY

# Clustering tab
DEFAULT_N_CLUSTERS = 3
MAX_ELBOW_K = 10

# Parameter bounds (min, max)
BOUNDS = {
    "cost_bps": (0.0, 100.0),
    "execution_delay": (1, 5),
    "n_clusters": (1, 12),
}
