"""Indicator calculator coordinating every series for one candle history"""

from collections.abc import Sequence
from typing import Optional

import structlog

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import Candle
from ..errors import DataQualityError, IndicatorCalculationError, InsufficientDataError
from ..models.indicators import IndicatorResult, IndicatorSeries, IndicatorSnapshot
from .momentum import macd, rsi, stochastic
from .moving_average import ema, last_available, previous_available
from .pivots import pivot_points
from .volatility import atr, bollinger_bands
from .volume import volume_indicators

logger = structlog.get_logger(__name__)


class IndicatorCalculator:
    """
    Computes the full indicator set from a candle series.

    Stateless: every call recomputes all series from the supplied candles and
    never mutates them, so one instance can be shared across symbols.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()
        self.params = self.config.indicators

    def compute(self, candles: Sequence[Candle]) -> IndicatorResult:
        """
        Calculate every indicator series plus the latest-value snapshot

        Args:
            candles: Chronologically ascending candles, at least one

        Returns:
            IndicatorResult with aligned series, snapshot and pivot levels

        Raises:
            InsufficientDataError: If ``candles`` is empty
            IndicatorCalculationError: On an unexpected failure
        """
        if not candles:
            raise InsufficientDataError("Indicator computation needs at least one candle",
                                        required_count=1, available_count=0)

        try:
            series = self._compute_series(tuple(candles))
            snapshot = self._build_snapshot(candles, series)
            pivots = pivot_points(candles, self.params.pivot_lookback)
        except DataQualityError:
            raise
        except Exception as e:
            raise IndicatorCalculationError(
                f"Unexpected error in indicator calculation: {str(e)}",
                indicator_name="unknown",
                calculation_input={"candle_count": len(candles)}
            ) from e

        logger.debug(
            "Indicators computed",
            bars=len(candles),
            warmed_up=self.is_warmed_up(candles),
            atr=snapshot.atr,
            rsi=snapshot.rsi,
        )

        return IndicatorResult(series=series, snapshot=snapshot, pivots=pivots)

    def _compute_series(self, candles: tuple[Candle, ...]) -> IndicatorSeries:
        p = self.params
        closes = [c.close for c in candles]

        macd_data = macd(closes, p.macd_fast, p.macd_slow, p.macd_signal)
        bb_data = bollinger_bands(closes, p.bb_period, p.bb_mult)
        stoch_data = stochastic(candles, p.stoch_k_period, p.stoch_d_period)
        vol_data = volume_indicators(candles, p.volume_period, p.obv_ema_period)

        return IndicatorSeries(
            ema_fast=tuple(ema(closes, p.ema_fast)),
            ema_medium=tuple(ema(closes, p.ema_medium)),
            ema_trend=tuple(ema(closes, p.ema_trend)),
            ema_long=tuple(ema(closes, p.ema_long)),
            rsi=tuple(rsi(closes, p.rsi_period)),
            macd_line=tuple(macd_data.line),
            macd_signal=tuple(macd_data.signal),
            macd_hist=tuple(macd_data.histogram),
            atr=tuple(atr(candles, p.atr_period)),
            bb_upper=tuple(bb_data.upper),
            bb_mid=tuple(bb_data.middle),
            bb_lower=tuple(bb_data.lower),
            pct_b=tuple(bb_data.pct_b),
            stoch_k=tuple(stoch_data.k),
            stoch_d=tuple(stoch_data.d),
            avg_volume=tuple(vol_data.avg_volume),
            rel_volume=tuple(vol_data.rel_volume),
            obv=tuple(vol_data.obv),
            obv_ema=tuple(vol_data.obv_ema),
        )

    @staticmethod
    def _build_snapshot(candles: Sequence[Candle], series: IndicatorSeries) -> IndicatorSnapshot:
        latest = candles[-1]
        return IndicatorSnapshot(
            close=latest.close,
            high=latest.high,
            low=latest.low,
            volume=latest.volume,
            prev_close=candles[-2].close if len(candles) > 1 else None,
            ema_fast=last_available(series.ema_fast),
            ema_medium=last_available(series.ema_medium),
            ema_trend=last_available(series.ema_trend),
            ema_long=last_available(series.ema_long),
            rsi=last_available(series.rsi),
            macd_line=last_available(series.macd_line),
            macd_signal=last_available(series.macd_signal),
            macd_hist=last_available(series.macd_hist),
            macd_hist_prev=previous_available(series.macd_hist),
            atr=last_available(series.atr),
            bb_upper=last_available(series.bb_upper),
            bb_mid=last_available(series.bb_mid),
            bb_lower=last_available(series.bb_lower),
            pct_b=last_available(series.pct_b),
            stoch_k=last_available(series.stoch_k),
            stoch_d=last_available(series.stoch_d),
            rel_vol=last_available(series.rel_volume),
            obv=last_available(series.obv),
            obv_ema=last_available(series.obv_ema),
        )

    def get_warmup_period(self) -> int:
        """Minimum number of candles for every series to be available"""
        p = self.params
        return max(
            p.ema_long,
            p.macd_slow + p.macd_signal - 1,
            p.rsi_period + 1,
            p.atr_period,
            p.bb_period,
            p.stoch_k_period + p.stoch_d_period - 1,
            p.volume_period,
        )

    def is_warmed_up(self, candles: Sequence[Candle]) -> bool:
        """Check if the series is long enough for every indicator"""
        return len(candles) >= self.get_warmup_period()


def compute(candles: Sequence[Candle], config: Optional[DefaultConfig] = None) -> IndicatorResult:
    """Compute indicators with a throwaway calculator."""
    return IndicatorCalculator(config).compute(candles)
