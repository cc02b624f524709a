"""
Constants and default values for Folio.

Centralizes the defaults shared by the loaders, cleaning helpers,
indicators and ML code so the scripts and dashboard stay consistent.
"""

from typing import Dict, List, Tuple


# Post defaults
DEFAULT_LAYOUT = "post"
FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_END_DELIMITERS: Tuple[str, ...] = ("---", "...")


# Price data
REQUIRED_PRICE_COLUMNS: List[str] = ["open", "high", "low", "close"]
OHLCV_COLUMNS: List[str] = ["open", "high", "low", "close", "volume"]
TRADING_DAYS_PER_YEAR = 252


# CSV memoization
MAX_MEMO_ENTRIES = 32


# Name deduplication
DEFAULT_SIMILARITY_THRESHOLD = 0.85

# Tokens dropped when normalizing organisation names
NAME_STOPWORDS: Tuple[str, ...] = (
    "the",
    "inc",
    "incorporated",
    "llc",
    "ltd",
    "limited",
    "co",
    "corp",
    "corporation",
    "company",
    "plc",
)


# Mortgage tutorial columns
MORTGAGE_NUMERIC_COLUMNS: List[str] = [
    "loan_amount",
    "interest_rate",
    "property_value",
    "income",
]
MORTGAGE_DATE_COLUMNS: List[str] = ["origination_date"]


# Indicator defaults used by add_indicators()
DEFAULT_SMA_WINDOWS: Tuple[int, ...] = (20, 50, 200)
DEFAULT_RSI_PERIOD = 14
DEFAULT_BB_WINDOW = 20
DEFAULT_BB_STD = 2.0


# Backtest defaults
DEFAULT_COST_BPS = 0.0
DEFAULT_EXECUTION_DELAY = 1


# ML defaults
DEFAULT_RANDOM_STATE = 42

SPLIT_CRITERIA: Dict[str, str] = {
    "gini": "Gini impurity",
    "entropy": "Shannon entropy",
}
