"""
Canonical data models for candles, quotes and journal positions.

This module defines immutable data structures supplied by the data and
journal collaborators. The analysis core only reads them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..utils.time import ms_to_datetime


class Direction(str, Enum):
    """Trade direction of a signal or position."""
    BUY = "BUY"
    SELL = "SELL"
    WAIT = "WAIT"


class PositionStatus(str, Enum):
    """Journal status of a position record."""
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Candle:
    """OHLCV bar with an epoch-millisecond timestamp."""
    timestamp: int     # Epoch milliseconds, bar open
    open: float
    high: float
    low: float
    close: float
    volume: float      # Non-negative traded volume

    @property
    def dt(self) -> datetime:
        """Bar timestamp as an aware UTC datetime."""
        return ms_to_datetime(self.timestamp)


@dataclass(frozen=True)
class Quote:
    """Latest quote for an instrument."""
    price: float
    change: float = 0.0
    change_pct: float = 0.0
    high: Optional[float] = None
    low: Optional[float] = None
    open: Optional[float] = None
    prev_close: Optional[float] = None


@dataclass(frozen=True)
class OpenPosition:
    """Journal record of a position, as consumed by the exit monitor."""
    symbol: str
    direction: Direction
    entry_price: float
    stop_price: float
    target_price: float
    shares: int
    status: PositionStatus = PositionStatus.OPEN

    @property
    def is_long(self) -> bool:
        return self.direction == Direction.BUY

    @property
    def is_open(self) -> bool:
        return self.status == PositionStatus.OPEN

    def pnl_pct_at(self, price: float) -> float:
        """Directional P&L percentage at ``price`` (unrounded)."""
        if self.is_long:
            return (price - self.entry_price) / self.entry_price * 100
        return (self.entry_price - price) / self.entry_price * 100

    def pnl_at(self, price: float) -> float:
        """Directional P&L in instrument currency for the whole position."""
        if self.is_long:
            return (price - self.entry_price) * self.shares
        return (self.entry_price - price) * self.shares
