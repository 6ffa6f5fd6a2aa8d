"""Tests for classic pivot points"""

import pytest

from signal_desk.data.models import Candle
from signal_desk.errors import InsufficientDataError
from signal_desk.indicators.pivots import pivot_points


def _bar(ts, high, low, close):
    return Candle(timestamp=ts, open=close, high=high, low=low, close=close, volume=1000)


class TestPivotPoints:
    """Test pivot level formulas"""

    def test_classic_levels(self):
        candles = [_bar(1, 11, 9, 10), _bar(2, 12, 8, 11), _bar(3, 11, 9, 10)]
        pivots = pivot_points(candles)
        # H=12, L=8, C=10
        assert pivots.pp == pytest.approx(10.0)
        assert pivots.r1 == pytest.approx(12.0)
        assert pivots.r2 == pytest.approx(14.0)
        assert pivots.s1 == pytest.approx(8.0)
        assert pivots.s2 == pytest.approx(6.0)

    def test_lookback_window(self):
        """Bars older than the lookback are ignored"""
        candles = [_bar(0, 50, 1, 20)] + [_bar(i, 11, 9, 10) for i in range(1, 31)]
        pivots = pivot_points(candles, lookback=30)
        assert pivots.pp == pytest.approx(10.0)
        assert pivots.r2 == pytest.approx(12.0)

    def test_level_ordering(self):
        candles = [_bar(1, 11, 9, 10), _bar(2, 12, 8, 11), _bar(3, 11, 9, 10)]
        pivots = pivot_points(candles)
        assert pivots.s2 <= pivots.s1 <= pivots.pp <= pivots.r1 <= pivots.r2

    def test_levels_in_snap_order(self):
        pivots = pivot_points([_bar(1, 12, 8, 10)])
        assert [name for name, _ in pivots.levels()] == ["S1", "S2", "R1", "R2", "PP"]

    def test_empty_input(self):
        with pytest.raises(InsufficientDataError):
            pivot_points([])
