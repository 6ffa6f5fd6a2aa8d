"""RSI, MACD and Stochastic oscillator calculations"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..data.models import Candle
from .moving_average import ema


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram aligned to the input closes"""
    line: list[Optional[float]]
    signal: list[Optional[float]]
    histogram: list[Optional[float]]


@dataclass(frozen=True)
class StochasticResult:
    """%K and %D aligned to the input candles"""
    k: list[Optional[float]]
    d: list[Optional[float]]


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    return 100 - 100 / (1 + avg_gain / avg_loss)


def rsi(closes: Sequence[float], period: int = 14) -> list[Optional[float]]:
    """
    Relative Strength Index with Wilder smoothing

    The first average gain/loss is the simple mean of the first ``period``
    deltas; later averages are (prev * (period - 1) + current) / period.

    Args:
        closes: Close prices in chronological order
        period: RSI period (default 14)

    Returns:
        List aligned to ``closes``; first value at index ``period``
    """
    result: list[Optional[float]] = [None] * len(closes)
    if period <= 0 or len(closes) < period + 1:
        return result

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        delta = closes[i] - closes[i - 1]
        if delta > 0:
            gains += delta
        else:
            losses -= delta

    avg_gain = gains / period
    avg_loss = losses / period
    result[period] = _rsi_value(avg_gain, avg_loss)

    for i in range(period + 1, len(closes)):
        delta = closes[i] - closes[i - 1]
        avg_gain = (avg_gain * (period - 1) + max(delta, 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + max(-delta, 0.0)) / period
        result[i] = _rsi_value(avg_gain, avg_loss)

    return result


def macd(closes: Sequence[float], fast: int = 12, slow: int = 26, signal: int = 9) -> MACDResult:
    """
    Moving Average Convergence Divergence

    The signal line is the EMA of the MACD line with unavailable entries
    stripped, re-aligned to the input indices.

    Args:
        closes: Close prices in chronological order
        fast: Fast EMA period
        slow: Slow EMA period
        signal: Signal EMA period

    Returns:
        MACDResult with line, signal and histogram series
    """
    fast_ema = ema(closes, fast)
    slow_ema = ema(closes, slow)
    line = [
        f - s if f is not None and s is not None else None
        for f, s in zip(fast_ema, slow_ema)
    ]

    signal_line: list[Optional[float]] = [None] * len(closes)
    histogram: list[Optional[float]] = [None] * len(closes)

    compact = [value for value in line if value is not None]
    if compact:
        offset = next(i for i, value in enumerate(line) if value is not None)
        signal_raw = ema(compact, signal)
        for j, value in enumerate(signal_raw):
            i = offset + j
            signal_line[i] = value
            if value is not None and line[i] is not None:
                histogram[i] = line[i] - value

    return MACDResult(line=line, signal=signal_line, histogram=histogram)


def stochastic(candles: Sequence[Candle], k_period: int = 14, d_period: int = 3) -> StochasticResult:
    """
    Stochastic oscillator

    %K = (close - lowest low) / (highest high - lowest low) * 100 over the
    trailing ``k_period`` bars, 50 when the range is zero. %D is the simple
    mean of the trailing ``d_period`` %K values.

    Args:
        candles: Candles in chronological order
        k_period: %K lookback
        d_period: %D smoothing length

    Returns:
        StochasticResult with k and d series
    """
    k: list[Optional[float]] = [None] * len(candles)
    d: list[Optional[float]] = [None] * len(candles)
    if k_period <= 0 or d_period <= 0:
        return StochasticResult(k=k, d=d)

    for i in range(k_period - 1, len(candles)):
        window = candles[i - k_period + 1:i + 1]
        lowest = min(c.low for c in window)
        highest = max(c.high for c in window)
        if highest == lowest:
            k[i] = 50.0
        else:
            k[i] = (candles[i].close - lowest) / (highest - lowest) * 100

    for i in range(k_period + d_period - 2, len(candles)):
        window = [value for value in k[i - d_period + 1:i + 1] if value is not None]
        if len(window) == d_period:
            d[i] = sum(window) / d_period

    return StochasticResult(k=k, d=d)
