"""
Levenshtein-based name deduplication.

Free-text name columns (lenders, companies, people) arrive with typos and
formatting variants: "Wells Fargo Bank", "WELLS FARGO BANK, N.A.", "Wells Frago".
Names are normalized, linked when their edit-distance similarity clears a
threshold, and each connected group is mapped to one canonical spelling.
"""

import logging
import re
import unicodedata
from collections import Counter
from typing import Dict, Hashable, Iterable, List, Optional

import pandas as pd

from folio_core.utils.constants import DEFAULT_SIMILARITY_THRESHOLD, NAME_STOPWORDS

logger = logging.getLogger(__name__)

_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance between two strings (insert, delete, substitute cost 1).

    Example:
        >>> levenshtein_distance("kitten", "sitting")
        3
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,              # deletion
                current[j - 1] + 1,           # insertion
                previous[j - 1] + (ca != cb), # substitution
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1]: 1 - distance / length of the longer string.

    Two empty strings are identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def normalize_name(name: str) -> str:
    """
    Normalize a name for comparison.

    Casefolds, strips accents and punctuation, drops corporate suffixes and
    a leading "the", and collapses whitespace.

    Example:
        >>> normalize_name("The Café Company, Inc.")
        'cafe'
    """
    text = unicodedata.normalize("NFKD", str(name))
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = _PUNCT_RE.sub(" ", text.casefold())
    tokens = [t for t in _SPACE_RE.split(text) if t and t not in NAME_STOPWORDS]
    return " ".join(tokens)


class _UnionFind:
    def __init__(self, n: int):
        self.parent = list(range(n))

    def find(self, i: int) -> int:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, i: int, j: int) -> None:
        ri, rj = self.find(i), self.find(j)
        if ri != rj:
            self.parent[max(ri, rj)] = min(ri, rj)


def _is_missing(value) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def _validate_threshold(threshold: float) -> None:
    if not isinstance(threshold, (int, float)) or not 0 < threshold <= 1:
        raise ValueError(f"threshold must be in (0, 1], got {threshold}")


def _group_indices(
    distinct: List[str],
    threshold: float,
    max_distance: Optional[int],
) -> List[List[int]]:
    normalized = [normalize_name(n) for n in distinct]
    uf = _UnionFind(len(distinct))

    for i in range(len(distinct)):
        for j in range(i + 1, len(distinct)):
            a, b = normalized[i], normalized[j]
            if a == b:
                uf.union(i, j)
                continue
            # Length gap alone already rules the pair out
            longest = max(len(a), len(b))
            if longest and abs(len(a) - len(b)) / longest > 1 - threshold and max_distance is None:
                continue
            distance = levenshtein_distance(a, b)
            if max_distance is not None:
                linked = distance <= max_distance
            else:
                linked = (1.0 - distance / longest if longest else 1.0) >= threshold
            if linked:
                uf.union(i, j)

    groups: Dict[int, List[int]] = {}
    for i in range(len(distinct)):
        groups.setdefault(uf.find(i), []).append(i)
    return list(groups.values())


def find_duplicate_groups(
    names: Iterable[Hashable],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    max_distance: Optional[int] = None,
) -> List[List[str]]:
    """
    Group names that look like spellings of the same entity.

    Two names are linked when their normalized forms are equal, or their
    similarity is >= threshold (or, when max_distance is given, their edit
    distance is <= max_distance). Groups are the connected components of
    those links, so A~B and B~C puts A, B and C together.

    Args:
        names: Names to compare; missing values are ignored
        threshold: Minimum similarity in (0, 1] (default: 0.85)
        max_distance: Optional absolute edit-distance cutoff instead of threshold

    Returns:
        Groups of distinct original spellings with more than one member,
        each in first-seen order
    """
    _validate_threshold(threshold)
    if max_distance is not None and (not isinstance(max_distance, int) or max_distance < 0):
        raise ValueError(f"max_distance must be int >= 0, got {max_distance}")

    distinct: List[str] = []
    seen = set()
    for name in names:
        if _is_missing(name):
            continue
        name = str(name)
        if name not in seen:
            seen.add(name)
            distinct.append(name)

    groups = [
        [distinct[i] for i in sorted(group)]
        for group in _group_indices(distinct, threshold, max_distance)
        if len(group) > 1
    ]
    logger.info(f"Found {len(groups)} duplicate groups among {len(distinct)} distinct names")
    return groups


def dedupe_names(
    names: Iterable[Hashable],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    max_distance: Optional[int] = None,
) -> Dict[str, str]:
    """
    Map every name to a canonical spelling.

    The canonical spelling of a group is its most frequent spelling in the
    input, ties broken by first occurrence. Names without duplicates map to
    themselves.

    Example:
        >>> dedupe_names(["Acme Corp", "ACME corp.", "Acme Corp", "Globex"])
        {'Acme Corp': 'Acme Corp', 'ACME corp.': 'Acme Corp', 'Globex': 'Globex'}
    """
    all_names = [str(n) for n in names if not _is_missing(n)]
    counts = Counter(all_names)
    first_seen = {}
    for i, name in enumerate(all_names):
        first_seen.setdefault(name, i)

    mapping = {name: name for name in first_seen}
    for group in find_duplicate_groups(all_names, threshold, max_distance):
        canonical = min(group, key=lambda n: (-counts[n], first_seen[n]))
        for name in group:
            mapping[name] = canonical

    return mapping


def dedupe_column(
    df: pd.DataFrame,
    column: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    output_column: Optional[str] = None,
    max_distance: Optional[int] = None,
) -> pd.DataFrame:
    """
    Canonicalize a name column.

    Args:
        df: Input table
        column: Name column to deduplicate
        threshold: Minimum similarity (default: 0.85)
        output_column: Column to write canonical names to (default: overwrite)
        max_distance: Optional absolute edit-distance cutoff

    Returns:
        Copy of df with canonical names; missing values are left as-is

    Raises:
        KeyError: If column is missing
    """
    if column not in df.columns:
        raise KeyError(f"Column not found: {column}")

    mapping = dedupe_names(df[column].tolist(), threshold, max_distance)
    changed = sum(1 for k, v in mapping.items() if k != v)
    if changed:
        logger.info(f"Column '{column}': merged {changed} spellings into canonical names")

    out = df.copy()
    target = output_column or column
    out[target] = df[column].map(
        lambda v: v if _is_missing(v) else mapping[str(v)]
    )
    return out
