"""Technical indicator library over candle series"""

from .calculator import IndicatorCalculator, compute
from .momentum import macd, rsi, stochastic
from .moving_average import ema, last_available, previous_available, sma
from .pivots import pivot_points
from .volatility import atr, bollinger_bands, calculate_true_range
from .volume import on_balance_volume, relative_volume, volume_indicators

__all__ = [
    "IndicatorCalculator",
    "compute",
    "sma",
    "ema",
    "rsi",
    "macd",
    "atr",
    "calculate_true_range",
    "bollinger_bands",
    "stochastic",
    "relative_volume",
    "on_balance_volume",
    "volume_indicators",
    "pivot_points",
    "last_available",
    "previous_available",
]
