"""
Pytest configuration and shared fixtures for Folio tests.

This module provides reusable fixtures for testing, including:
- Synthetic OHLCV data (trending, mean-reverting)
- Price CSV and post files written to tmp_path
- Isolation of the CSV memo and disk cache
"""

import pytest
import pandas as pd
import numpy as np

from folio_core.data import cache
from folio_core.data.csv_loader import clear_memo


# ============================================================================
# Isolation
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_cache(tmp_path, monkeypatch):
    """Point the disk cache at a temp dir and empty the CSV memo."""
    cache_dir = tmp_path / "cache"
    monkeypatch.setattr(cache, "CACHE_DIR", cache_dir)
    clear_memo()
    yield cache_dir
    clear_memo()


# ============================================================================
# Price Fixtures
# ============================================================================

def make_ohlcv(close: np.ndarray, start: str = "2020-01-01") -> pd.DataFrame:
    """Build a valid OHLCV frame (with raw_ret) around a close series."""
    close = np.asarray(close, dtype=float)
    dates = pd.bdate_range(start=start, periods=len(close), name="date")
    open_ = np.concatenate([[close[0]], close[:-1]])
    high = np.maximum(open_, close) * 1.005
    low = np.minimum(open_, close) * 0.995
    df = pd.DataFrame({
        "open": open_,
        "high": high,
        "low": low,
        "close": close,
        "volume": np.full(len(close), 1_000_000),
    }, index=dates)
    df["raw_ret"] = df["close"].pct_change().fillna(0.0)
    return df


@pytest.fixture
def sample_ohlcv():
    """500 business days of a random walk with upward drift."""
    np.random.seed(42)  # Reproducible
    returns = np.random.normal(0.0004, 0.01, 500)
    close = 100 * np.cumprod(1 + returns)
    return make_ohlcv(close)


@pytest.fixture
def trending_ohlcv():
    """300 bars falling for 150, then rising for 150."""
    close = np.concatenate([
        np.linspace(150, 100, 150),
        np.linspace(100, 180, 150),
    ])
    return make_ohlcv(close)


@pytest.fixture
def oscillating_ohlcv():
    """300 bars of a sine wave around 100."""
    t = np.arange(300)
    close = 100 + 10 * np.sin(2 * np.pi * t / 40)
    return make_ohlcv(close)


@pytest.fixture
def price_csv(tmp_path):
    """Yahoo-style price CSV with 60 business days."""
    np.random.seed(42)
    n = 60
    close = 100 * np.cumprod(1 + np.random.normal(0, 0.01, n))
    dates = pd.bdate_range("2021-01-04", periods=n)
    df = pd.DataFrame({
        "Date": dates.strftime("%Y-%m-%d"),
        "Open": close,
        "High": close * 1.01,
        "Low": close * 0.99,
        "Close": close,
        "Adj Close": close,
        "Volume": np.full(n, 5000),
    })
    path = tmp_path / "TEST.csv"
    df.to_csv(path, index=False)
    return path


# ============================================================================
# Post Fixtures
# ============================================================================

POST_GOLDEN_CROSS = """---
layout: post
title: "The Golden Cross, Backtested"
subtitle: Does the 50/200 crossover beat buy and hold?
tags: [Trading, python]
---
We compute two simple moving averages and go long when the fast one
crosses above the slow one.
"""

POST_MORTGAGE = """---
title: Cleaning Mortgage Data
date: 2020-06-01
tags: pandas, cleaning
---
Duplicate loan ids are the first thing to check.
"""

POST_BROKEN = """---
title: [unclosed
---
Body
"""


@pytest.fixture
def posts_dir(tmp_path):
    """A _posts directory with two valid posts and one malformed post."""
    directory = tmp_path / "_posts"
    directory.mkdir()
    (directory / "2021-03-14-golden-cross.md").write_text(POST_GOLDEN_CROSS, encoding="utf-8")
    (directory / "mortgage-cleaning.md").write_text(POST_MORTGAGE, encoding="utf-8")
    (directory / "2019-01-01-broken.md").write_text(POST_BROKEN, encoding="utf-8")
    return directory
