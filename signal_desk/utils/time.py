"""
Time semantics utilities for market vs wall-clock time handling.

Candle timestamps are epoch milliseconds supplied by the data collaborator.
Wall-clock time is used only where the caller does not pass an explicit
clock, such as the trading-session check and signal timestamps.
"""

from datetime import UTC, datetime
from typing import Optional


def get_market_time(market_ts: Optional[datetime] = None) -> datetime:
    """
    Get the current market time, preferring an explicit timestamp over wall-clock time.

    Args:
        market_ts: Optional timestamp supplied by the caller

    Returns:
        Aware datetime; naive inputs are interpreted as UTC
    """
    if market_ts is not None:
        if market_ts.tzinfo is None:
            return market_ts.replace(tzinfo=UTC)
        return market_ts

    return datetime.now(UTC)


def ms_to_datetime(timestamp_ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=UTC)


def datetime_to_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are UTC)."""
    return int(get_market_time(value).timestamp() * 1000)
