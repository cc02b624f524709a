"""
Table sanity checks used by the data-cleaning tutorials.

These helpers cover the clean-up steps the mortgage walkthrough repeats on
every dataset: normalizing headers, stripping stray whitespace, coercing
money and rate columns to numbers, and warning about duplicate keys.
"""

import logging
import re
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from folio_core.utils.constants import MORTGAGE_DATE_COLUMNS, MORTGAGE_NUMERIC_COLUMNS

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"[^0-9a-zA-Z]+")
_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NUMERIC_JUNK_RE = re.compile(r"[$,%\s]")

DUPLICATE_ACTIONS = ("warn", "raise", "drop")


class DuplicateKeyError(ValueError):
    """Raised when a table has duplicate keys and action='raise'."""


def _snake_case(name: str) -> str:
    name = _CAMEL_RE.sub("_", str(name).strip())
    return _HEADER_RE.sub("_", name).strip("_").lower()


def normalize_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy with snake_case column names.

    Example:
        >>> normalize_column_names(pd.DataFrame(columns=["Loan Amount", "InterestRate"])).columns.tolist()
        ['loan_amount', 'interest_rate']
    """
    out = df.copy()
    out.columns = [_snake_case(c) for c in out.columns]
    return out


def strip_strings(df: pd.DataFrame) -> pd.DataFrame:
    """Strip whitespace in text columns; empty strings become NaN."""
    out = df.copy()
    for col in out.select_dtypes(include=["object", "string"]).columns:
        stripped = out[col].map(lambda v: v.strip() if isinstance(v, str) else v)
        out[col] = stripped.replace("", np.nan)
    return out


def coerce_numeric(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Convert columns to numbers, dropping currency, thousands and percent marks.

    Values that still fail to parse become NaN and are reported with a
    warning. Columns not present in the frame are ignored.
    """
    out = df.copy()
    for col in columns:
        if col not in out.columns:
            continue

        original = out[col]
        if not pd.api.types.is_numeric_dtype(original):
            cleaned = original.map(
                lambda v: _NUMERIC_JUNK_RE.sub("", v) if isinstance(v, str) else v
            )
        else:
            cleaned = original

        converted = pd.to_numeric(cleaned, errors="coerce")
        failed = int((converted.isna() & original.notna()).sum())
        if failed:
            logger.warning(f"Column '{col}': {failed} values could not be parsed as numbers")
        out[col] = converted
    return out


def _as_key_list(keys: Union[str, List[str]]) -> List[str]:
    return [keys] if isinstance(keys, str) else list(keys)


def find_duplicate_keys(df: pd.DataFrame, keys: Union[str, List[str]]) -> pd.DataFrame:
    """
    Return every row whose key appears more than once.

    Raises:
        KeyError: If a key column is missing
    """
    key_cols = _as_key_list(keys)
    missing = [k for k in key_cols if k not in df.columns]
    if missing:
        raise KeyError(f"Key columns not found: {missing}")

    mask = df.duplicated(subset=key_cols, keep=False)
    return df[mask].sort_values(key_cols)


def check_duplicate_keys(
    df: pd.DataFrame,
    keys: Union[str, List[str]],
    action: str = "warn",
) -> pd.DataFrame:
    """
    Check a table for duplicate keys.

    Args:
        df: Table to check
        keys: Key column or columns
        action: "warn" logs and returns the table unchanged, "raise" raises
            DuplicateKeyError, "drop" keeps the first row of each key

    Returns:
        The (possibly de-duplicated) table

    Raises:
        ValueError: If action is unknown
        DuplicateKeyError: If duplicates exist and action is "raise"
        KeyError: If a key column is missing
    """
    if action not in DUPLICATE_ACTIONS:
        raise ValueError(f"action must be one of {list(DUPLICATE_ACTIONS)}, got {action}")

    key_cols = _as_key_list(keys)
    dupes = find_duplicate_keys(df, key_cols)
    if dupes.empty:
        return df

    n_keys = len(dupes.drop_duplicates(subset=key_cols))
    message = f"Found {len(dupes)} rows sharing {n_keys} duplicate keys on {key_cols}"

    if action == "raise":
        raise DuplicateKeyError(message)

    logger.warning(message)
    if action == "drop":
        return df.drop_duplicates(subset=key_cols, keep="first")
    return df


def missing_value_report(df: pd.DataFrame) -> pd.DataFrame:
    """
    Count missing values per column.

    Returns:
        DataFrame indexed by column with 'missing' and 'fraction', sorted by
        most missing first
    """
    missing = df.isna().sum()
    fraction = missing / len(df) if len(df) else missing.astype(float)
    report = pd.DataFrame({"missing": missing, "fraction": fraction})
    return report.sort_values("missing", ascending=False, kind="stable")


def clean_mortgage_records(
    df: pd.DataFrame,
    key: Optional[str] = "loan_id",
    duplicate_action: str = "warn",
) -> pd.DataFrame:
    """
    Run the mortgage tutorial's clean-up pipeline.

    Steps: snake_case headers, strip text, coerce money/rate columns,
    parse origination dates, check duplicate loan ids.

    Args:
        df: Raw mortgage records
        key: Loan identifier column (None to skip the duplicate check)
        duplicate_action: Passed to check_duplicate_keys

    Returns:
        Cleaned copy of the records
    """
    out = normalize_column_names(df)
    out = strip_strings(out)
    out = coerce_numeric(out, MORTGAGE_NUMERIC_COLUMNS)

    for col in MORTGAGE_DATE_COLUMNS:
        if col in out.columns:
            parsed = pd.to_datetime(out[col], errors="coerce")
            failed = int((parsed.isna() & out[col].notna()).sum())
            if failed:
                logger.warning(f"Column '{col}': {failed} values could not be parsed as dates")
            out[col] = parsed

    if key is not None:
        if key in out.columns:
            out = check_duplicate_keys(out, key, action=duplicate_action)
        else:
            logger.warning(f"Key column '{key}' not found; skipping duplicate check")

    logger.info(f"Cleaned {len(out)} mortgage records")
    return out
