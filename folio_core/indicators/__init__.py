"""Indicator exports."""

from folio_core.indicators.technical import (
    add_indicators,
    average_true_range,
    bollinger_bands,
    crossover,
    ema,
    macd,
    momentum,
    rolling_high,
    rolling_low,
    rsi,
    sma,
    zscore,
)

__all__ = [
    "add_indicators",
    "average_true_range",
    "bollinger_bands",
    "crossover",
    "ema",
    "macd",
    "momentum",
    "rolling_high",
    "rolling_low",
    "rsi",
    "sma",
    "zscore",
]
