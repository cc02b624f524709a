"""
Memoizing CSV loader.

Tutorial scripts tend to re-read the same CSV many times while iterating.
load_csv() keeps parsed frames in an in-process memo keyed by the file's
identity (resolved path, mtime, size) and the read options, so an edited
file is always re-read. An optional parquet snapshot on disk carries the
parsed frame across runs.
"""

import hashlib
import json
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import pandas as pd

from folio_core.data.cache import load_from_cache, save_to_cache
from folio_core.utils.constants import MAX_MEMO_ENTRIES

logger = logging.getLogger(__name__)

_MemoKey = Tuple[str, int, int, str]

_memo: "OrderedDict[_MemoKey, pd.DataFrame]" = OrderedDict()
_stats = {"hits": 0, "misses": 0}


def _options_key(read_kwargs: Dict[str, Any]) -> str:
    return json.dumps(read_kwargs, sort_keys=True, default=repr)


def _memo_key(path: Path, read_kwargs: Dict[str, Any]) -> _MemoKey:
    stat = path.stat()
    return (str(path.resolve()), stat.st_mtime_ns, stat.st_size, _options_key(read_kwargs))


def _fingerprint(key: _MemoKey) -> str:
    return hashlib.md5(repr(key).encode("utf-8")).hexdigest()[:12]


def load_csv(
    path: Union[str, Path],
    use_cache: bool = True,
    use_disk_cache: bool = False,
    **read_kwargs: Any,
) -> pd.DataFrame:
    """
    Load a CSV file, reusing an earlier parse when the file is unchanged.

    Args:
        path: Path to the CSV file
        use_cache: If True, use the in-process memo (default: True)
        use_disk_cache: If True, also use a parquet snapshot on disk
        **read_kwargs: Passed through to pandas.read_csv

    Returns:
        A fresh copy of the parsed DataFrame (safe to mutate)

    Raises:
        FileNotFoundError: If the file does not exist

    Example:
        >>> df = load_csv("data/raw/mortgages.csv", parse_dates=["origination_date"])
        >>> df2 = load_csv("data/raw/mortgages.csv", parse_dates=["origination_date"])
        >>> memo_info()["hits"]
        1
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")

    key = _memo_key(path, read_kwargs)

    if use_cache and key in _memo:
        _memo.move_to_end(key)
        _stats["hits"] += 1
        logger.debug(f"Memo hit: {path.name}")
        return _memo[key].copy()

    _stats["misses"] += 1

    df = None
    if use_disk_cache:
        df = load_from_cache(path.stem, _fingerprint(key), source_mtime=path.stat().st_mtime)

    if df is None:
        logger.info(f"Reading {path}")
        df = pd.read_csv(path, **read_kwargs)
        if use_disk_cache:
            save_to_cache(path.stem, _fingerprint(key), df)

    if use_cache:
        _memo[key] = df
        _memo.move_to_end(key)
        while len(_memo) > MAX_MEMO_ENTRIES:
            evicted, _ = _memo.popitem(last=False)
            logger.debug(f"Evicted memo entry: {evicted[0]}")

    return df.copy()


def clear_memo() -> int:
    """
    Empty the in-process memo and reset statistics.

    Returns:
        Number of entries removed
    """
    count = len(_memo)
    _memo.clear()
    _stats["hits"] = 0
    _stats["misses"] = 0
    return count


def memo_info() -> Dict[str, int]:
    """Return memo statistics: hits, misses, size, max_size."""
    return {
        "hits": _stats["hits"],
        "misses": _stats["misses"],
        "size": len(_memo),
        "max_size": MAX_MEMO_ENTRIES,
    }
