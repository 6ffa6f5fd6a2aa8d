"""Relative volume and On-Balance Volume calculations"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..data.models import Candle
from .moving_average import ema, sma


@dataclass(frozen=True)
class VolumeResult:
    """Volume-derived series aligned to the input candles"""
    avg_volume: list[Optional[float]]
    rel_volume: list[Optional[float]]
    obv: list[Optional[float]]
    obv_ema: list[Optional[float]]


def relative_volume(volumes: Sequence[float], period: int = 20) -> tuple[list[Optional[float]], list[Optional[float]]]:
    """
    Calculate Relative Volume (RVOL) for every bar

    RVOL = volume / SMA(volume, period), the average including the current bar

    Args:
        volumes: Bar volumes in chronological order
        period: Lookback period for average (default 20)

    Returns:
        (average volume series, relative volume series); RVOL is None where the
        average is unavailable or zero
    """
    average = sma(volumes, period)
    rvol: list[Optional[float]] = [
        volume / avg if avg else None
        for volume, avg in zip(volumes, average)
    ]
    return average, rvol


def on_balance_volume(candles: Sequence[Candle]) -> list[Optional[float]]:
    """
    On-Balance Volume running total

    Adds the bar volume on an up close, subtracts it on a down close, and
    carries the previous total on a flat close. Starts at 0 on the first bar.
    """
    if not candles:
        return []

    obv: list[Optional[float]] = [0.0]
    for i in range(1, len(candles)):
        close = candles[i].close
        prev_close = candles[i - 1].close
        if close > prev_close:
            obv.append(obv[-1] + candles[i].volume)
        elif close < prev_close:
            obv.append(obv[-1] - candles[i].volume)
        else:
            obv.append(obv[-1])
    return obv


def volume_indicators(candles: Sequence[Candle], period: int = 20, obv_ema_period: int = 10) -> VolumeResult:
    """Compute average volume, RVOL, OBV and the EMA of OBV."""
    volumes = [c.volume for c in candles]
    average, rvol = relative_volume(volumes, period)
    obv = on_balance_volume(candles)
    obv_ema = ema(obv, obv_ema_period)

    return VolumeResult(avg_volume=average, rel_volume=rvol, obv=obv, obv_ema=obv_ema)
