"""
Stock price loading for the trading-strategy walkthroughs.

Prices come either from a CSV export (Yahoo Finance, broker downloads) or
straight from yfinance. Both paths produce the same frame: a DatetimeIndex
named 'date' and columns open, high, low, close, volume, raw_ret.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from folio_core.data.cache import load_from_cache, save_to_cache
from folio_core.data.csv_loader import load_csv
from folio_core.data.validation import (
    add_raw_returns,
    validate_date_format,
    validate_date_range,
    validate_ohlc,
)
from folio_core.data.yfinance_loader import fetch_ohlcv_yfinance

logger = logging.getLogger(__name__)

_TICKER_RE = re.compile(r"^[A-Za-z0-9.\-^=]{1,15}$")


def _normalize_header(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", str(name).strip().lower()).strip("_")


def normalize_price_frame(raw: pd.DataFrame, name: str) -> pd.DataFrame:
    """
    Normalize a raw price table into the standard OHLCV frame.

    Args:
        raw: Table with a date column (or DatetimeIndex) and OHLC columns
            in any common capitalization ("Adj Close" becomes adj_close)
        name: Dataset name used in log and error messages

    Returns:
        Sorted frame indexed by date with open, high, low, close, volume
        (plus adj_close when present) and raw_ret

    Raises:
        ValueError: If required columns are missing or prices are invalid
    """
    df = raw.copy()
    df.columns = [_normalize_header(c) for c in df.columns]

    if not isinstance(df.index, pd.DatetimeIndex):
        if 'date' not in df.columns:
            raise ValueError(f"Data for {name} must have a 'date' column or DatetimeIndex")
        df['date'] = pd.to_datetime(df['date'])
        df = df.set_index('date')
    df.index.name = 'date'

    if 'volume' not in df.columns:
        df['volume'] = 0

    columns = ['open', 'high', 'low', 'close', 'volume']
    if 'adj_close' in df.columns:
        columns.append('adj_close')

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(
            f"Data for {name} missing required columns: {missing}. "
            f"Available columns: {list(df.columns)}"
        )
    df = df[columns].copy()

    for col in columns:
        df[col] = pd.to_numeric(df[col], errors='coerce')

    df = df.sort_index()

    dupes = df.index.duplicated(keep='first')
    if dupes.any():
        logger.warning(f"Data for {name}: dropping {int(dupes.sum())} duplicate dates")
        df = df[~dupes].copy()

    if df[['open', 'high', 'low', 'close']].isnull().any().any():
        before = len(df)
        df = df.dropna(subset=['open', 'high', 'low', 'close'])
        logger.warning(f"Data for {name}: dropped {before - len(df)} rows with missing prices")

    df['volume'] = df['volume'].fillna(0)

    if df.empty:
        raise ValueError(f"No valid price rows for {name}")

    validate_ohlc(df, name)
    return add_raw_returns(df)


def _filter_dates(
    df: pd.DataFrame,
    name: str,
    start_date: Optional[str],
    end_date: Optional[str],
) -> pd.DataFrame:
    if start_date is not None:
        validate_date_format(start_date)
    if end_date is not None:
        validate_date_format(end_date)

    filtered = df.loc[start_date:end_date]
    if filtered.empty:
        raise ValueError(
            f"No data for {name} in date range {start_date} to {end_date}. "
            f"Available range: {df.index.min().date()} to {df.index.max().date()}"
        )

    # raw_ret of the first kept row must not reach back before the window
    filtered = filtered.copy()
    filtered.loc[filtered.index[0], 'raw_ret'] = 0.0
    return filtered


def load_price_csv(
    path: Union[str, Path],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    use_cache: bool = True,
) -> pd.DataFrame:
    """
    Load a stock price CSV.

    Args:
        path: Path to the CSV
        start_date: Optional inclusive start date (YYYY-MM-DD)
        end_date: Optional inclusive end date (YYYY-MM-DD)
        use_cache: Reuse the memoized parse when the file is unchanged

    Returns:
        Standard OHLCV frame with raw_ret

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If columns, prices or dates are invalid

    Example:
        >>> df = load_price_csv("data/prices/AAPL.csv", "2020-01-01", "2020-12-31")
    """
    path = Path(path)
    raw = load_csv(path, use_cache=use_cache)
    df = normalize_price_frame(raw, path.stem)
    if start_date is None and end_date is None:
        return df
    return _filter_dates(df, path.stem, start_date, end_date)


def is_ticker(source: str) -> bool:
    """True when source looks like a ticker symbol rather than a file path."""
    return (
        not source.lower().endswith(".csv")
        and not Path(source).exists()
        and bool(_TICKER_RE.match(source))
    )


def load_prices(
    source: Union[str, Path],
    start_date: str,
    end_date: str,
    use_cache: bool = True,
) -> pd.DataFrame:
    """
    Load prices from a CSV path or a ticker symbol.

    Tickers are downloaded via yfinance and snapshotted to the disk cache.

    Args:
        source: CSV path or ticker symbol
        start_date: Start date in YYYY-MM-DD format
        end_date: End date in YYYY-MM-DD format
        use_cache: Use memo / disk cache (default: True)

    Returns:
        Standard OHLCV frame with raw_ret
    """
    validate_date_range(start_date, end_date)

    source = str(source)
    if not is_ticker(source):
        return load_price_csv(source, start_date, end_date, use_cache=use_cache)

    ticker = source.upper()
    fingerprint = f"{start_date}_{end_date}"

    df = load_from_cache(ticker, fingerprint) if use_cache else None
    if df is None:
        df = fetch_ohlcv_yfinance(ticker, start_date, end_date)
        if use_cache:
            save_to_cache(ticker, fingerprint, df)

    return df
