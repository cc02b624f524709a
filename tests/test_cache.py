"""Tests for data caching functionality."""

import os
import time
from datetime import timedelta
from pathlib import Path

import pandas as pd
import pytest

from folio_core.data import cache
from folio_core.data.cache import (
    clear_cache,
    get_cache_path,
    get_cache_size,
    is_cache_valid,
    load_from_cache,
    purge_stale_cache,
    save_to_cache,
)


@pytest.fixture
def sample_data():
    """Create sample OHLCV data for testing."""
    return pd.DataFrame({
        'open': [100.0, 101.0, 102.0],
        'high': [101.0, 102.0, 103.0],
        'low': [99.0, 100.0, 101.0],
        'close': [100.5, 101.5, 102.5],
        'volume': [1000000, 1100000, 1200000],
        'raw_ret': [0.0, 0.01, 0.01],
    }, index=pd.date_range('2023-01-01', periods=3, freq='D', name='date'))


def _age_file(path: Path, days: float) -> None:
    old = time.time() - days * 86400
    os.utime(path, (old, old))


class TestCachePath:
    """Tests for cache path generation."""

    def test_get_cache_path(self, isolated_cache):
        path = get_cache_path("SPY", "2023-01-01_2023-12-31")

        assert isinstance(path, Path)
        assert path.parent == isolated_cache
        assert path.name == "SPY__2023-01-01-2023-12-31.parquet"

    def test_cache_dir_created(self, isolated_cache):
        assert not isolated_cache.exists()
        get_cache_path("SPY", "x")
        assert isolated_cache.exists()

    def test_unsafe_characters_replaced(self):
        path = get_cache_path("my data/file", "a:b")
        assert path.name == "my-data-file__a-b.parquet"


class TestCacheValidity:
    """Tests for cache validation logic."""

    def test_missing_file_invalid(self, isolated_cache):
        assert not is_cache_valid(isolated_cache / "nope.parquet")

    def test_fresh_file_valid(self, sample_data):
        save_to_cache("SPY", "fp", sample_data)
        assert is_cache_valid(get_cache_path("SPY", "fp"))

    def test_expired_file_invalid(self, sample_data):
        save_to_cache("SPY", "fp", sample_data)
        path = get_cache_path("SPY", "fp")
        _age_file(path, cache.CACHE_EXPIRY.days + 1)
        assert not is_cache_valid(path)

    def test_older_than_source_invalid(self, sample_data):
        save_to_cache("SPY", "fp", sample_data)
        path = get_cache_path("SPY", "fp")
        assert not is_cache_valid(path, source_mtime=time.time() + 60)
        assert is_cache_valid(path, source_mtime=time.time() - 60)


class TestCacheOperations:
    """Tests for cache save/load operations."""

    def test_save_and_load(self, sample_data):
        save_to_cache("SPY", "fp", sample_data)
        loaded = load_from_cache("SPY", "fp")

        pd.testing.assert_frame_equal(loaded, sample_data, check_freq=False)

    def test_load_miss_returns_none(self):
        assert load_from_cache("SPY", "never-saved") is None

    def test_corrupt_file_returns_none(self):
        path = get_cache_path("SPY", "fp")
        path.write_text("not parquet")
        assert load_from_cache("SPY", "fp") is None

    def test_clear_single_dataset(self, sample_data):
        save_to_cache("SPY", "a", sample_data)
        save_to_cache("SPY", "b", sample_data)
        save_to_cache("QQQ", "a", sample_data)

        assert clear_cache("SPY") == 2
        assert get_cache_size()[0] == 1

    def test_clear_does_not_touch_underscored_names(self, sample_data):
        save_to_cache("SPY", "a", sample_data)
        save_to_cache("SPY_", "a", sample_data)

        assert clear_cache("SPY") == 1
        assert load_from_cache("SPY_", "a") is not None

    def test_clear_all(self, sample_data):
        save_to_cache("SPY", "a", sample_data)
        save_to_cache("QQQ", "a", sample_data)
        assert clear_cache() == 2
        assert get_cache_size() == (0, 0)

    def test_clear_without_dir(self):
        assert clear_cache() == 0

    def test_purge_stale(self, sample_data):
        save_to_cache("SPY", "old", sample_data)
        save_to_cache("SPY", "new", sample_data)
        _age_file(get_cache_path("SPY", "old"), 30)

        assert purge_stale_cache() == 1
        assert load_from_cache("SPY", "new") is not None

    def test_cache_size(self, sample_data):
        save_to_cache("SPY", "a", sample_data)
        count, size = get_cache_size()
        assert count == 1
        assert size > 0

    def test_expiry_constant(self):
        assert cache.CACHE_EXPIRY == timedelta(days=7)
