"""Data loading exports."""

from folio_core.data.csv_loader import clear_memo, load_csv, memo_info
from folio_core.data.prices import load_price_csv, load_prices, normalize_price_frame
from folio_core.data.validation import validate_date_format

__all__ = [
    "clear_memo",
    "load_csv",
    "memo_info",
    "load_price_csv",
    "load_prices",
    "normalize_price_frame",
    "validate_date_format",
]
