"""
Technical trading indicators.

Each indicator takes a price series (or an OHLCV frame where noted) and
returns a series or frame on the same index. Rolling indicators are NaN
until their window is full; no value ever uses data after its own date.
"""

import numpy as np
import pandas as pd
from typing import Iterable

from folio_core.utils.constants import (
    DEFAULT_BB_STD,
    DEFAULT_BB_WINDOW,
    DEFAULT_RSI_PERIOD,
    DEFAULT_SMA_WINDOWS,
)


def _check_window(value: int, name: str, minimum: int = 1) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < minimum:
        raise ValueError(f"{name} must be int >= {minimum}, got {value}")


def sma(series: pd.Series, window: int) -> pd.Series:
    """
    Simple moving average: mean of the trailing window.

    Example:
        >>> sma(pd.Series([1.0, 2.0, 3.0, 4.0]), 2).tolist()
        [nan, 1.5, 2.5, 3.5]
    """
    _check_window(window, "window")
    return series.rolling(window=window).mean()


def ema(series: pd.Series, span: int, adjust: bool = False) -> pd.Series:
    """Exponential moving average with smoothing 2 / (span + 1)."""
    _check_window(span, "span")
    return series.ewm(span=span, adjust=adjust, min_periods=span).mean()


def momentum(series: pd.Series, lookback: int) -> pd.Series:
    """Percentage change over the lookback period."""
    _check_window(lookback, "lookback")
    return series.pct_change(periods=lookback)


def rsi(series: pd.Series, period: int = DEFAULT_RSI_PERIOD, method: str = "sma") -> pd.Series:
    """
    Relative Strength Index.

    RSI = 100 - 100 / (1 + average gain / average loss)

    Args:
        series: Price series
        period: Averaging period (default: 14)
        method: "sma" for a plain rolling mean, "wilder" for Wilder's
            smoothing (alpha = 1 / period)

    Returns:
        RSI in [0, 100]; windows with no losses are 100, flat windows are 50
    """
    _check_window(period, "period", minimum=2)
    if method not in ("sma", "wilder"):
        raise ValueError(f"method must be 'sma' or 'wilder', got {method}")

    delta = series.diff()
    gain = delta.clip(lower=0)
    loss = -delta.clip(upper=0)

    if method == "sma":
        avg_gain = gain.rolling(window=period).mean()
        avg_loss = loss.rolling(window=period).mean()
    else:
        avg_gain = gain.ewm(alpha=1 / period, adjust=False, min_periods=period).mean()
        avg_loss = loss.ewm(alpha=1 / period, adjust=False, min_periods=period).mean()

    rs = avg_gain / avg_loss
    out = 100 - (100 / (1 + rs))

    # Division by a zero average loss
    out = out.where(avg_loss != 0, 100.0)
    out = out.where(~((avg_gain == 0) & (avg_loss == 0)), 50.0)
    out[avg_gain.isna() | avg_loss.isna()] = np.nan
    out.name = "rsi"
    return out


def bollinger_bands(
    series: pd.Series,
    window: int = DEFAULT_BB_WINDOW,
    num_std: float = DEFAULT_BB_STD,
) -> pd.DataFrame:
    """
    Bollinger Bands: SMA ± num_std × rolling standard deviation.

    Returns:
        DataFrame with middle, upper, lower, bandwidth ((upper - lower) / middle)
        and percent_b ((price - lower) / (upper - lower))
    """
    _check_window(window, "window", minimum=2)
    if not isinstance(num_std, (int, float)) or num_std <= 0:
        raise ValueError(f"num_std must be > 0, got {num_std}")

    middle = series.rolling(window=window).mean()
    std = series.rolling(window=window).std()
    upper = middle + num_std * std
    lower = middle - num_std * std
    width = (upper - lower).replace(0, np.nan)

    return pd.DataFrame({
        "middle": middle,
        "upper": upper,
        "lower": lower,
        "bandwidth": (upper - lower) / middle,
        "percent_b": (series - lower) / width,
    }, index=series.index)


def macd(
    series: pd.Series,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> pd.DataFrame:
    """
    Moving Average Convergence Divergence.

    Returns:
        DataFrame with macd (fast EMA - slow EMA), signal (EMA of macd) and
        histogram (macd - signal)
    """
    _check_window(fast, "fast")
    _check_window(slow, "slow")
    _check_window(signal, "signal")
    if fast >= slow:
        raise ValueError(f"fast ({fast}) must be < slow ({slow})")

    macd_line = ema(series, fast) - ema(series, slow)
    signal_line = macd_line.ewm(span=signal, adjust=False, min_periods=signal).mean()

    return pd.DataFrame({
        "macd": macd_line,
        "signal": signal_line,
        "histogram": macd_line - signal_line,
    }, index=series.index)


def zscore(series: pd.Series, window: int) -> pd.Series:
    """Rolling z-score; windows with zero standard deviation are NaN."""
    _check_window(window, "window", minimum=2)
    mean = series.rolling(window=window).mean()
    std = series.rolling(window=window).std()
    return (series - mean) / std.replace(0, np.nan)


def average_true_range(ohlcv: pd.DataFrame, period: int = 14) -> pd.Series:
    """
    Average True Range over an OHLCV frame.

    True range = max(high - low, |high - prev close|, |low - prev close|)
    """
    _check_window(period, "period")
    prev_close = ohlcv['close'].shift(1)
    true_range = pd.concat([
        ohlcv['high'] - ohlcv['low'],
        (ohlcv['high'] - prev_close).abs(),
        (ohlcv['low'] - prev_close).abs(),
    ], axis=1).max(axis=1)
    return true_range.rolling(window=period).mean()


def rolling_high(series: pd.Series, window: int) -> pd.Series:
    _check_window(window, "window")
    return series.rolling(window=window).max()


def rolling_low(series: pd.Series, window: int) -> pd.Series:
    _check_window(window, "window")
    return series.rolling(window=window).min()


def crossover(fast: pd.Series, slow: pd.Series) -> pd.Series:
    """
    Mark crossings of two series.

    Returns:
        Series of ints: 1 on the bar fast crosses above slow, -1 on the bar it
        crosses below, 0 otherwise (including bars where either is NaN)
    """
    above = fast > slow
    below = fast < slow
    valid = fast.notna() & slow.notna()
    prev_above = above.shift(1, fill_value=False)
    prev_below = below.shift(1, fill_value=False)
    prev_valid = valid.shift(1, fill_value=False)

    out = pd.Series(0, index=fast.index, dtype=int)
    both_valid = valid & prev_valid
    out[both_valid & above & ~prev_above] = 1
    out[both_valid & below & ~prev_below] = -1
    return out


def add_indicators(
    ohlcv: pd.DataFrame,
    sma_windows: Iterable[int] = DEFAULT_SMA_WINDOWS,
    rsi_period: int = DEFAULT_RSI_PERIOD,
    bb_window: int = DEFAULT_BB_WINDOW,
    bb_std: float = DEFAULT_BB_STD,
) -> pd.DataFrame:
    """
    Return a copy of an OHLCV frame with common indicator columns added.

    Added columns: sma_<n> for each window, rsi, bb_upper, bb_middle,
    bb_lower, macd, macd_signal, macd_hist.
    """
    df = ohlcv.copy()
    close = df['close']

    for window in sma_windows:
        df[f"sma_{window}"] = sma(close, window)

    df["rsi"] = rsi(close, rsi_period)

    bands = bollinger_bands(close, bb_window, bb_std)
    df["bb_upper"] = bands["upper"]
    df["bb_middle"] = bands["middle"]
    df["bb_lower"] = bands["lower"]

    macd_df = macd(close)
    df["macd"] = macd_df["macd"]
    df["macd_signal"] = macd_df["signal"]
    df["macd_hist"] = macd_df["histogram"]

    return df
