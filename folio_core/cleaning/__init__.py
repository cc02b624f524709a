"""Cleaning module exports."""

from folio_core.cleaning.dedup import (
    dedupe_column,
    dedupe_names,
    find_duplicate_groups,
    levenshtein_distance,
    normalize_name,
    similarity,
)
from folio_core.cleaning.tidy import (
    DuplicateKeyError,
    check_duplicate_keys,
    clean_mortgage_records,
    coerce_numeric,
    find_duplicate_keys,
    missing_value_report,
    normalize_column_names,
    strip_strings,
)

__all__ = [
    "dedupe_column",
    "dedupe_names",
    "find_duplicate_groups",
    "levenshtein_distance",
    "normalize_name",
    "similarity",
    "DuplicateKeyError",
    "check_duplicate_keys",
    "clean_mortgage_records",
    "coerce_numeric",
    "find_duplicate_keys",
    "missing_value_report",
    "normalize_column_names",
    "strip_strings",
]
