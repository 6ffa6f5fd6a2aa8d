"""Classic pivot point levels"""

from collections.abc import Sequence

from ..data.models import Candle
from ..errors import InsufficientDataError
from ..models.indicators import PivotLevels


def pivot_points(candles: Sequence[Candle], lookback: int = 30) -> PivotLevels:
    """
    Classic pivot levels over the most recent ``lookback`` bars

    PP = (H + L + C) / 3, R1 = 2PP - L, R2 = PP + (H - L),
    S1 = 2PP - H, S2 = PP - (H - L), where H and L are the window extremes
    and C is the last close.

    Raises:
        InsufficientDataError: If ``candles`` is empty
    """
    if not candles:
        raise InsufficientDataError("Pivot points need at least one candle", required_count=1, available_count=0)

    window = candles[-lookback:]
    high = max(c.high for c in window)
    low = min(c.low for c in window)
    close = window[-1].close
    pp = (high + low + close) / 3

    return PivotLevels(
        pp=pp,
        r1=2 * pp - low,
        r2=pp + high - low,
        s1=2 * pp - high,
        s2=pp - high + low,
    )
