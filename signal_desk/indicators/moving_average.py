"""SMA / EMA calculations and helpers for reading partially available series"""

from collections.abc import Sequence
from typing import Optional


def sma(values: Sequence[float], period: int) -> list[Optional[float]]:
    """
    Simple moving average aligned to each index

    Args:
        values: Input values in chronological order
        period: Window length

    Returns:
        List the same length as ``values``; None for indices < period - 1
    """
    result: list[Optional[float]] = [None] * len(values)
    if period <= 0:
        return result

    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        result[i] = sum(window) / period

    return result


def ema(values: Sequence[float], period: int) -> list[Optional[float]]:
    """
    Exponential moving average seeded with the SMA of the first ``period`` values

    EMA[i] = EMA[i-1] * (1 - k) + x[i] * k,  k = 2 / (period + 1)

    Args:
        values: Input values in chronological order
        period: EMA period

    Returns:
        List the same length as ``values``; None before index period - 1
    """
    result: list[Optional[float]] = [None] * len(values)
    if period <= 0 or len(values) < period:
        return result

    k = 2 / (period + 1)
    result[period - 1] = sum(values[:period]) / period
    for i in range(period, len(values)):
        result[i] = values[i] * k + result[i - 1] * (1 - k)

    return result


def last_available(series: Sequence[Optional[float]]) -> Optional[float]:
    """Most recent non-None value of a series, or None."""
    for value in reversed(series):
        if value is not None:
            return value
    return None


def previous_available(series: Sequence[Optional[float]], offset: int = 1) -> Optional[float]:
    """
    Available value ``offset`` positions before the most recent one

    Unavailable entries are skipped, so offset=1 is the second most recent
    available value.
    """
    count = 0
    for value in reversed(series):
        if value is None:
            continue
        if count == offset:
            return value
        count += 1
    return None
