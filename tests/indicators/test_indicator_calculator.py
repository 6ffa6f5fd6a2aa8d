"""Tests for the indicator calculator"""

import pytest

from signal_desk.errors import IndicatorCalculationError, InsufficientDataError
from signal_desk.indicators.calculator import IndicatorCalculator, compute


class TestIndicatorCalculator:
    """Test full indicator computation"""

    def test_series_aligned_to_candles(self, rising_candles):
        result = IndicatorCalculator().compute(rising_candles)
        series = result.series
        assert len(series) == len(rising_candles)
        assert len(series.ema_fast) == len(series.macd_hist) == len(series.obv_ema) == len(rising_candles)

    def test_idempotent(self, rising_candles):
        """Computing twice on the same candles yields equal results"""
        calculator = IndicatorCalculator()
        assert calculator.compute(rising_candles) == calculator.compute(rising_candles)

    def test_input_not_mutated(self, rising_candles):
        before = list(rising_candles)
        compute(rising_candles)
        assert rising_candles == before

    def test_snapshot_latest_values(self, rising_candles):
        snap = compute(rising_candles).snapshot
        assert snap.close == rising_candles[-1].close
        assert snap.prev_close == rising_candles[-2].close
        assert snap.rsi == 100.0
        assert snap.ema_fast > snap.ema_medium > snap.ema_trend
        # 200-period EMA needs more history
        assert snap.ema_long is None
        assert snap.atr is not None and snap.atr > 0

    def test_snapshot_matches_series(self, rising_candles):
        result = compute(rising_candles)
        assert result.snapshot.macd_hist == result.series.macd_hist[-1]
        assert result.snapshot.macd_hist_prev == result.series.macd_hist[-2]
        assert result.snapshot.rel_vol == result.series.rel_volume[-1]

    def test_short_history_degrades(self, candle_factory):
        """Short histories produce unavailable values, not errors"""
        snap = compute(candle_factory([100.0, 101.0, 102.0, 101.5, 103.0])).snapshot
        assert snap.rsi is None
        assert snap.atr is None
        assert snap.ema_fast is None
        assert snap.macd_hist is None
        assert snap.obv is not None

    def test_single_candle(self, candle_factory):
        result = compute(candle_factory([100.0]))
        assert result.snapshot.prev_close is None
        assert result.pivots.pp == pytest.approx(100.0)

    def test_empty_input(self):
        with pytest.raises(InsufficientDataError):
            IndicatorCalculator().compute([])

    def test_unexpected_failure_wrapped(self, rising_candles, monkeypatch):
        """Unexpected exceptions surface as IndicatorCalculationError"""
        def broken_atr(candles, period):
            raise ZeroDivisionError("boom")

        monkeypatch.setattr("signal_desk.indicators.calculator.atr", broken_atr)

        with pytest.raises(IndicatorCalculationError) as exc_info:
            IndicatorCalculator().compute(rising_candles)
        assert exc_info.value.calculation_input == {"candle_count": len(rising_candles)}
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)

    def test_warmup_period(self, rising_candles):
        calculator = IndicatorCalculator()
        assert calculator.get_warmup_period() == 200
        assert not calculator.is_warmed_up(rising_candles)
