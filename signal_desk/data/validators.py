"""
Candle-series integrity checks.

The indicator library itself never rejects a non-empty series. These checks
are for callers that want to reject bad data from a provider before it reaches
the calculator.
"""

import math
from collections.abc import Sequence

from ..errors import InsufficientDataError, MalformedDataError, TemporalDataError
from .models import Candle


def validate_candle(candle: Candle) -> None:
    """
    Validate a single candle.

    Raises:
        MalformedDataError: On non-finite values, non-positive prices, negative
            volume, or high/low inconsistent with open/close
    """
    prices = [candle.open, candle.high, candle.low, candle.close]
    for price in prices:
        if not isinstance(price, (int, float)) or math.isnan(price) or math.isinf(price):
            raise MalformedDataError(f"Invalid price value: {price}", raw_data=repr(candle))
        if price <= 0:
            raise MalformedDataError(f"Non-positive price: {price}", raw_data=repr(candle))

    if candle.high < max(candle.open, candle.close):
        raise MalformedDataError(
            f"High {candle.high} must be >= max(open {candle.open}, close {candle.close})",
            raw_data=repr(candle)
        )
    if candle.low > min(candle.open, candle.close):
        raise MalformedDataError(
            f"Low {candle.low} must be <= min(open {candle.open}, close {candle.close})",
            raw_data=repr(candle)
        )

    if not isinstance(candle.volume, (int, float)) or not math.isfinite(candle.volume):
        raise MalformedDataError(f"Invalid volume value: {candle.volume}", raw_data=repr(candle))
    if candle.volume < 0:
        raise MalformedDataError(f"Negative volume: {candle.volume}", raw_data=repr(candle))


def validate_candle_series(candles: Sequence[Candle], min_length: int = 1) -> None:
    """
    Validate a chronological candle series.

    Args:
        candles: Series to check
        min_length: Minimum number of bars required

    Raises:
        InsufficientDataError: If the series is shorter than ``min_length``
        MalformedDataError: If any candle fails ``validate_candle``
        TemporalDataError: If timestamps are not strictly ascending
    """
    if len(candles) < min_length:
        raise InsufficientDataError(
            "Candle series too short",
            required_count=min_length,
            available_count=len(candles)
        )

    previous_ts = None
    for candle in candles:
        validate_candle(candle)
        if previous_ts is not None and candle.timestamp <= previous_ts:
            raise TemporalDataError(
                f"Candle timestamps must be strictly ascending: {candle.timestamp} after {previous_ts}",
                timestamp=candle.timestamp,
                previous_timestamp=previous_ts
            )
        previous_ts = candle.timestamp
