"""
Disk caching for parsed tables.

This module snapshots parsed DataFrames to parquet so repeated runs of the
tutorial scripts skip CSV parsing and network fetches. A snapshot is keyed by
a dataset name plus a fingerprint of the source (file stat or request
parameters).
"""

import pandas as pd
from pathlib import Path
from typing import Optional
from datetime import datetime, timedelta
import logging

from folio_core.utils import paths

logger = logging.getLogger(__name__)

# Cache directory
CACHE_DIR = paths.CSV_CACHE_DIR

# Snapshots older than this are treated as stale even if the source is unchanged
CACHE_EXPIRY = timedelta(days=7)


def _safe_name(name: str) -> str:
    return "".join(c if c.isalnum() or c in "-." else "-" for c in name)


def get_cache_path(name: str, fingerprint: str) -> Path:
    """
    Get cache file path for a dataset snapshot.

    Args:
        name: Dataset name (e.g., CSV stem or ticker)
        fingerprint: Short string identifying the source version

    Returns:
        Path to cache file

    Example:
        >>> path = get_cache_path("mortgages", "a1b2c3")
        >>> path.name
        'mortgages__a1b2c3.parquet'
    """
    CACHE_DIR.mkdir(parents=True, exist_ok=True)

    filename = f"{_safe_name(name)}__{_safe_name(fingerprint)}.parquet"
    return CACHE_DIR / filename


def is_cache_valid(cache_path: Path, source_mtime: Optional[float] = None) -> bool:
    """
    Check if a snapshot is valid (exists, not expired, newer than its source).

    Args:
        cache_path: Path to cache file
        source_mtime: Modification time (epoch seconds) of the source file,
            or None for sources without a file (e.g. downloads)

    Returns:
        True if cache is valid, False otherwise
    """
    if not cache_path.exists():
        return False

    mtime = cache_path.stat().st_mtime
    age = datetime.now() - datetime.fromtimestamp(mtime)

    if age > CACHE_EXPIRY:
        logger.debug(f"Cache expired: {cache_path.name} (age: {age})")
        return False

    if source_mtime is not None and source_mtime > mtime:
        logger.debug(f"Cache older than source: {cache_path.name}")
        return False

    return True


def load_from_cache(
    name: str,
    fingerprint: str,
    source_mtime: Optional[float] = None,
) -> Optional[pd.DataFrame]:
    """
    Load a snapshot if available and valid.

    Returns:
        DataFrame if cache hit, None if cache miss
    """
    cache_path = get_cache_path(name, fingerprint)

    if not is_cache_valid(cache_path, source_mtime):
        return None

    try:
        df = pd.read_parquet(cache_path)
        logger.info(f"Cache hit: {name} ({len(df)} rows)")
        return df
    except Exception as e:
        logger.warning(f"Failed to load cache for {name}: {e}")
        return None


def save_to_cache(name: str, fingerprint: str, data: pd.DataFrame) -> None:
    """
    Save a snapshot. Failures are logged and otherwise ignored.
    """
    cache_path = get_cache_path(name, fingerprint)

    try:
        data.to_parquet(cache_path)
        logger.info(f"Saved to cache: {name} ({len(data)} rows)")
    except Exception as e:
        logger.warning(f"Failed to save cache for {name}: {e}")


def purge_stale_cache() -> int:
    """
    Delete expired snapshots.

    Returns:
        Number of files deleted
    """
    if not CACHE_DIR.exists():
        return 0

    deleted = 0
    for file in CACHE_DIR.glob("*.parquet"):
        if is_cache_valid(file):
            continue
        try:
            file.unlink()
            deleted += 1
            logger.info(f"Deleted expired cache file: {file.name}")
        except OSError as e:
            logger.warning(f"Failed to delete {file.name}: {e}")

    return deleted


def clear_cache(name: Optional[str] = None) -> int:
    """
    Clear snapshots for one dataset or all datasets.

    Args:
        name: Dataset name to clear, or None to clear all

    Returns:
        Number of files deleted
    """
    if not CACHE_DIR.exists():
        return 0

    pattern = "*.parquet" if name is None else f"{_safe_name(name)}__*.parquet"

    deleted = 0
    for file in CACHE_DIR.glob(pattern):
        try:
            file.unlink()
            deleted += 1
            logger.info(f"Deleted cache file: {file.name}")
        except OSError as e:
            logger.warning(f"Failed to delete {file.name}: {e}")

    return deleted


def get_cache_size() -> tuple[int, int]:
    """
    Get cache statistics.

    Returns:
        Tuple of (number of files, total size in bytes)
    """
    if not CACHE_DIR.exists():
        return 0, 0

    files = list(CACHE_DIR.glob("*.parquet"))
    return len(files), sum(f.stat().st_size for f in files)
