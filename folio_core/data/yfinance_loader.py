"""
yfinance data loader with retry logic.

This module fetches daily OHLCV data from Yahoo Finance for the
trading-strategy walkthroughs, using exponential backoff on network errors.
"""

import pandas as pd
import yfinance as yf
import time
from typing import Optional
import logging

from folio_core.data.validation import add_raw_returns, validate_ohlc
from folio_core.utils.constants import OHLCV_COLUMNS

logger = logging.getLogger(__name__)


def fetch_ohlcv_yfinance(
    ticker: str,
    start_date: str,
    end_date: str,
    max_retries: int = 3,
) -> pd.DataFrame:
    """
    Fetch OHLCV data from Yahoo Finance with retry logic.

    Args:
        ticker: Ticker symbol (e.g., "AAPL", "SPY")
        start_date: Start date in YYYY-MM-DD format
        end_date: End date in YYYY-MM-DD format
        max_retries: Maximum number of attempts (default: 3)

    Returns:
        DataFrame with columns: open, high, low, close, volume, raw_ret
        Index: DatetimeIndex named 'date'

    Raises:
        ValueError: If ticker invalid, no data in range, or validation fails
        RuntimeError: If all retry attempts fail
    """
    last_error: Optional[Exception] = None

    for attempt in range(max_retries):
        try:
            logger.info(
                f"Fetching {ticker} from {start_date} to {end_date} "
                f"(attempt {attempt + 1}/{max_retries})"
            )

            data = yf.download(
                ticker,
                start=start_date,
                end=end_date,
                progress=False,
                auto_adjust=False,
                actions=False,
            )

            if data.empty:
                raise ValueError(
                    f"No data returned for {ticker} in range {start_date} to {end_date}. "
                    f"Ticker may be invalid or no trading data available for this period."
                )

            # Single-ticker downloads still come back with MultiIndex columns
            if isinstance(data.columns, pd.MultiIndex):
                data.columns = data.columns.get_level_values(0)

            data.columns = [str(c).lower().replace(" ", "_") for c in data.columns]

            missing_cols = [col for col in OHLCV_COLUMNS if col not in data.columns]
            if missing_cols:
                raise ValueError(
                    f"Data for {ticker} missing required columns: {missing_cols}. "
                    f"Available columns: {list(data.columns)}"
                )

            df = data[OHLCV_COLUMNS].copy()
            df.index.name = 'date'

            if df.isnull().any().any():
                nan_cols = df.columns[df.isnull().any()].tolist()
                df = df.dropna()
                logger.warning(f"Dropped rows with NaN values in columns: {nan_cols}")

            if df.empty:
                raise ValueError(
                    f"No valid data for {ticker} after removing NaN values. "
                    f"Data may be incomplete for this period."
                )

            validate_ohlc(df, ticker)
            df = add_raw_returns(df)

            logger.info(f"Successfully fetched {len(df)} rows for {ticker}")
            return df

        except ValueError:
            # Validation errors won't succeed on retry
            raise
        except Exception as e:
            last_error = e
            logger.warning(f"Attempt {attempt + 1}/{max_retries} failed for {ticker}: {e}")

            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                logger.info(f"Retrying in {wait_time}s...")
                time.sleep(wait_time)

    raise RuntimeError(
        f"Failed to fetch data for {ticker} after {max_retries} attempts. "
        f"Last error: {last_error}"
    )
