"""Data models for indicator series and snapshots"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

# Element of an indicator series; None marks "unavailable", never 0.0
Value = Optional[float]
Series = tuple[Value, ...]


@dataclass(frozen=True)
class PivotLevels:
    """Classic pivot point with two support and two resistance levels"""
    pp: float
    r1: float
    r2: float
    s1: float
    s2: float

    def levels(self) -> tuple[tuple[str, float], ...]:
        """Named levels in stop-snap evaluation order."""
        return (("S1", self.s1), ("S2", self.s2), ("R1", self.r1), ("R2", self.r2), ("PP", self.pp))

    def to_dict(self) -> dict[str, float]:
        return {"PP": self.pp, "R1": self.r1, "R2": self.r2, "S1": self.s1, "S2": self.s2}


@dataclass(frozen=True)
class IndicatorSeries:
    """Every indicator aligned index-for-index with the input candles"""
    ema_fast: Series
    ema_medium: Series
    ema_trend: Series
    ema_long: Series
    rsi: Series
    macd_line: Series
    macd_signal: Series
    macd_hist: Series
    atr: Series
    bb_upper: Series
    bb_mid: Series
    bb_lower: Series
    pct_b: Series
    stoch_k: Series
    stoch_d: Series
    avg_volume: Series
    rel_volume: Series
    obv: Series
    obv_ema: Series

    def __len__(self) -> int:
        return len(self.rsi)


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest available value of each indicator plus the last bar's prices"""
    close: float
    high: float
    low: float
    volume: float
    prev_close: Optional[float] = None
    ema_fast: Optional[float] = None
    ema_medium: Optional[float] = None
    ema_trend: Optional[float] = None
    ema_long: Optional[float] = None
    rsi: Optional[float] = None
    macd_line: Optional[float] = None
    macd_signal: Optional[float] = None
    macd_hist: Optional[float] = None
    macd_hist_prev: Optional[float] = None
    atr: Optional[float] = None
    bb_upper: Optional[float] = None
    bb_mid: Optional[float] = None
    bb_lower: Optional[float] = None
    pct_b: Optional[float] = None
    stoch_k: Optional[float] = None
    stoch_d: Optional[float] = None
    rel_vol: Optional[float] = None
    obv: Optional[float] = None
    obv_ema: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IndicatorResult:
    """Output of one full indicator computation"""
    series: IndicatorSeries
    snapshot: IndicatorSnapshot
    pivots: PivotLevels
