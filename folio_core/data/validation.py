"""
Validation helpers shared by the price loaders.
"""

import re

import pandas as pd

from folio_core.utils.constants import REQUIRED_PRICE_COLUMNS


def validate_date_format(date_str: str) -> None:
    """
    Validate date string is in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Raises:
        ValueError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(
            f"Invalid date format: '{date_str}'. "
            f"Expected YYYY-MM-DD format (e.g., '2020-01-01')"
        )


def validate_date_range(start_date: str, end_date: str) -> None:
    """
    Validate both dates and that start_date is before end_date.

    Raises:
        ValueError: If either date is malformed or the range is empty
    """
    validate_date_format(start_date)
    validate_date_format(end_date)

    if pd.Timestamp(start_date) >= pd.Timestamp(end_date):
        raise ValueError(
            f"start_date ({start_date}) must be before end_date ({end_date})"
        )


def validate_ohlc(df: pd.DataFrame, name: str) -> None:
    """
    Validate price columns of an OHLC frame.

    Args:
        df: Frame with open, high, low, close columns
        name: Dataset name used in error messages

    Raises:
        ValueError: If columns are missing, prices are non-positive, or
            high/low do not bound open/close
    """
    missing_cols = [col for col in REQUIRED_PRICE_COLUMNS if col not in df.columns]
    if missing_cols:
        raise ValueError(
            f"Data for {name} missing required columns: {missing_cols}. "
            f"Available columns: {list(df.columns)}"
        )

    for col in REQUIRED_PRICE_COLUMNS:
        if (df[col] <= 0).any():
            raise ValueError(
                f"Data for {name} contains non-positive prices in column '{col}'"
            )

    if not (df['high'] >= df['close']).all():
        raise ValueError(f"Data for {name}: high must be >= close")
    if not (df['high'] >= df['open']).all():
        raise ValueError(f"Data for {name}: high must be >= open")
    if not (df['low'] <= df['close']).all():
        raise ValueError(f"Data for {name}: low must be <= close")
    if not (df['low'] <= df['open']).all():
        raise ValueError(f"Data for {name}: low must be <= open")


def add_raw_returns(df: pd.DataFrame) -> pd.DataFrame:
    """Add the daily close-to-close return column 'raw_ret' (first row 0.0)."""
    df['raw_ret'] = df['close'].pct_change()
    if len(df) > 0:
        df.loc[df.index[0], 'raw_ret'] = 0.0
    return df
