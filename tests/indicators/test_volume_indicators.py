"""Tests for relative volume and On-Balance Volume"""

import pytest

from signal_desk.data.models import Candle
from signal_desk.indicators.volume import on_balance_volume, relative_volume, volume_indicators


def _candles(closes, volumes):
    return [
        Candle(timestamp=i, open=c, high=c + 1, low=c - 1, close=c, volume=v)
        for i, (c, v) in enumerate(zip(closes, volumes))
    ]


class TestRelativeVolume:
    """Test RVOL calculation"""

    def test_average_includes_current_bar(self):
        average, rvol = relative_volume([100, 100, 100, 400], period=3)
        assert average[3] == pytest.approx(200.0)
        assert rvol[3] == pytest.approx(2.0)
        assert rvol[2] == pytest.approx(1.0)

    def test_unavailable_before_period(self):
        average, rvol = relative_volume([100, 200], period=3)
        assert average == [None, None]
        assert rvol == [None, None]

    def test_zero_average_volume(self):
        """Zero average volume leaves RVOL unavailable"""
        _, rvol = relative_volume([0, 0, 0], period=3)
        assert rvol[2] is None


class TestOnBalanceVolume:
    """Test OBV running total"""

    def test_obv_up_down_flat(self):
        candles = _candles([10, 11, 10, 10], [5, 7, 3, 9])
        assert on_balance_volume(candles) == [0.0, 7.0, 4.0, 4.0]

    def test_obv_zero_is_available(self):
        candles = _candles([10, 11, 10], [5, 7, 7])
        obv = on_balance_volume(candles)
        assert obv[-1] == 0.0
        assert obv[-1] is not None

    def test_empty(self):
        assert on_balance_volume([]) == []


class TestVolumeIndicators:
    """Test combined volume series"""

    def test_series_aligned(self, rising_candles):
        result = volume_indicators(rising_candles, 20, 10)
        n = len(rising_candles)
        assert len(result.avg_volume) == len(result.rel_volume) == len(result.obv) == len(result.obv_ema) == n

    def test_obv_ema_available_after_period(self, rising_candles):
        result = volume_indicators(rising_candles, 20, 10)
        assert result.obv_ema[8] is None
        assert result.obv_ema[9] is not None
        # Rising closes accumulate volume; the EMA lags below OBV
        assert result.obv[-1] > result.obv_ema[-1]
