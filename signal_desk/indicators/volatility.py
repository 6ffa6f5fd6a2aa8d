"""ATR (Average True Range) and Bollinger Band calculations"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..data.models import Candle
from .moving_average import sma


@dataclass(frozen=True)
class BollingerResult:
    """Bollinger bands and %B aligned to the input closes"""
    upper: list[Optional[float]]
    middle: list[Optional[float]]
    lower: list[Optional[float]]
    pct_b: list[Optional[float]]


def calculate_true_range(current: Candle, previous: Optional[Candle] = None) -> float:
    """
    Calculate True Range for a single candle

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    Args:
        current: Current candle
        previous: Previous candle (None for first candle)

    Returns:
        True Range value
    """
    if previous is None:
        # First candle case - use high-low range
        return current.high - current.low

    range_hl = current.high - current.low
    range_hc = abs(current.high - previous.close)
    range_lc = abs(current.low - previous.close)

    return max(range_hl, range_hc, range_lc)


def atr(candles: Sequence[Candle], period: int = 14) -> list[Optional[float]]:
    """
    Average True Range with Wilder smoothing

    The first value is the simple mean of the first ``period`` true ranges;
    thereafter ATR[i] = (ATR[i-1] * (period - 1) + TR[i]) / period.

    Args:
        candles: Candles in chronological order
        period: ATR period (default 14)

    Returns:
        List aligned to ``candles``; None before index period - 1
    """
    result: list[Optional[float]] = [None] * len(candles)
    if period <= 0 or len(candles) < period:
        return result

    true_ranges = [
        calculate_true_range(candles[i], candles[i - 1] if i > 0 else None)
        for i in range(len(candles))
    ]

    result[period - 1] = sum(true_ranges[:period]) / period
    for i in range(period, len(candles)):
        result[i] = (result[i - 1] * (period - 1) + true_ranges[i]) / period

    return result


def bollinger_bands(closes: Sequence[float], period: int = 20, mult: float = 2.0) -> BollingerResult:
    """
    Bollinger Bands using the population standard deviation

    %B = (close - lower) / (upper - lower); a zero-width band leaves %B
    unavailable instead of dividing by zero.

    Args:
        closes: Close prices in chronological order
        period: SMA window
        mult: Standard deviation multiplier

    Returns:
        BollingerResult with upper, middle, lower and %B series
    """
    middle = sma(closes, period)
    upper: list[Optional[float]] = [None] * len(closes)
    lower: list[Optional[float]] = [None] * len(closes)
    pct_b: list[Optional[float]] = [None] * len(closes)

    for i, mid in enumerate(middle):
        if mid is None:
            continue
        window = closes[i - period + 1:i + 1]
        variance = sum((value - mid) ** 2 for value in window) / period
        band = mult * math.sqrt(variance)
        upper[i] = mid + band
        lower[i] = mid - band
        width = upper[i] - lower[i]
        if width > 0:
            pct_b[i] = (closes[i] - lower[i]) / width

    return BollingerResult(upper=upper, middle=middle, lower=lower, pct_b=pct_b)
