"""
Scoring factor table.

Each evaluator inspects the indicator snapshot and returns the factors that
fired, in a fixed order. Evaluators skip any check whose indicator is
unavailable, so short histories simply fire fewer factors.
"""

from collections.abc import Callable
from typing import Optional

from ..config.defaults import SignalParams
from ..data.models import Quote
from ..models.indicators import IndicatorSnapshot
from ..models.signal import ScoreFactor, Side

# Trend alignment
EMA_CROSS_WEIGHT = 20
EMA_TREND_WEIGHT = 8
EMA_LONG_WEIGHT = 7

# RSI zones
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70
RSI_EXTREME_WEIGHT = 18
RSI_HEALTHY_LOW = 45
RSI_HEALTHY_HIGH = 63
RSI_HEALTHY_WEIGHT = 15
RSI_REBOUND_LOW = 37
RSI_REBOUND_WEIGHT = 6
RSI_HOT_WEIGHT = 10

# MACD
MACD_SIGNAL_WEIGHT = 12
MACD_EXPANSION_WEIGHT = 10
MACD_CROSSOVER_WEIGHT = 15

# Volume
VOLUME_CONFIRM_WEIGHT = 15
OBV_WEIGHT = 8

# Bollinger %B
PCT_B_LOWER = 0.15
PCT_B_UPPER = 0.85
PCT_B_EXTREME_WEIGHT = 12
PCT_B_MID_WEIGHT = 4

# Stochastic
STOCH_OVERSOLD = 20
STOCH_OVERBOUGHT = 80
STOCH_CROSS_WEIGHT = 8
STOCH_EXTREME_WEIGHT = 10

FactorEvaluator = Callable[[IndicatorSnapshot, Optional[Quote], SignalParams], list[ScoreFactor]]


def trend_factors(snap: IndicatorSnapshot, quote: Optional[Quote], params: SignalParams) -> list[ScoreFactor]:
    """Fast/medium EMA crossover state and price position versus trend EMAs."""
    fired = []

    if snap.ema_fast is not None and snap.ema_medium is not None:
        if snap.ema_fast > snap.ema_medium and snap.close > snap.ema_medium:
            fired.append(ScoreFactor("ema_cross", Side.BULL, EMA_CROSS_WEIGHT,
                                     "Fast EMA above medium EMA – short-term uptrend"))
        elif snap.ema_fast < snap.ema_medium and snap.close < snap.ema_medium:
            fired.append(ScoreFactor("ema_cross", Side.BEAR, EMA_CROSS_WEIGHT,
                                     "Fast EMA below medium EMA – short-term downtrend"))

    if snap.ema_trend is not None:
        if snap.close > snap.ema_trend:
            fired.append(ScoreFactor("ema_trend", Side.BULL, EMA_TREND_WEIGHT,
                                     "Price above trend EMA (medium-term trend positive)"))
        else:
            fired.append(ScoreFactor("ema_trend", Side.BEAR, EMA_TREND_WEIGHT,
                                     "Price below trend EMA (medium-term trend negative)"))

    if snap.ema_long is not None:
        if snap.close > snap.ema_long:
            fired.append(ScoreFactor("ema_long", Side.BULL, EMA_LONG_WEIGHT,
                                     "Price above long-term EMA (golden zone)"))
        else:
            fired.append(ScoreFactor("ema_long", Side.BEAR, EMA_LONG_WEIGHT,
                                     "Price below long-term EMA (death zone)"))

    return fired


def rsi_factors(snap: IndicatorSnapshot, quote: Optional[Quote], params: SignalParams) -> list[ScoreFactor]:
    """Map RSI into zones; at most one zone fires."""
    r = snap.rsi
    if r is None:
        return []

    if RSI_HEALTHY_LOW <= r <= RSI_HEALTHY_HIGH:
        return [ScoreFactor("rsi", Side.BULL, RSI_HEALTHY_WEIGHT, f"RSI {r:.1f} – healthy bullish momentum")]
    if r < RSI_OVERSOLD:
        return [ScoreFactor("rsi", Side.BULL, RSI_EXTREME_WEIGHT, f"RSI {r:.1f} – oversold (rebound expected)")]
    if r > RSI_OVERBOUGHT:
        return [ScoreFactor("rsi", Side.BEAR, RSI_EXTREME_WEIGHT, f"RSI {r:.1f} – overbought (pullback expected)")]
    if RSI_REBOUND_LOW <= r < RSI_HEALTHY_LOW:
        return [ScoreFactor("rsi", Side.BULL, RSI_REBOUND_WEIGHT, f"RSI {r:.1f} – possible rebound")]
    if RSI_HEALTHY_HIGH < r <= RSI_OVERBOUGHT:
        return [ScoreFactor("rsi", Side.BEAR, RSI_HOT_WEIGHT, f"RSI {r:.1f} – running hot")]
    return []


def macd_factors(snap: IndicatorSnapshot, quote: Optional[Quote], params: SignalParams) -> list[ScoreFactor]:
    """MACD versus signal line, then histogram zero-cross or expansion."""
    fired = []

    if snap.macd_line is not None and snap.macd_signal is not None:
        if snap.macd_line > snap.macd_signal:
            fired.append(ScoreFactor("macd_signal", Side.BULL, MACD_SIGNAL_WEIGHT, "MACD above signal line"))
        else:
            fired.append(ScoreFactor("macd_signal", Side.BEAR, MACD_SIGNAL_WEIGHT, "MACD below signal line"))

    hist, prev = snap.macd_hist, snap.macd_hist_prev
    if hist is not None and prev is not None:
        # A zero cross outranks plain expansion in the same direction
        if hist > 0 and prev <= 0:
            fired.append(ScoreFactor("macd_crossover", Side.BULL, MACD_CROSSOVER_WEIGHT,
                                     "Bullish MACD crossover (strong signal)"))
        elif hist < 0 and prev >= 0:
            fired.append(ScoreFactor("macd_crossover", Side.BEAR, MACD_CROSSOVER_WEIGHT,
                                     "Bearish MACD crossover (strong signal)"))
        elif hist > 0 and hist > prev:
            fired.append(ScoreFactor("macd_histogram", Side.BULL, MACD_EXPANSION_WEIGHT,
                                     "MACD histogram expanding positive"))
        elif hist < 0 and hist < prev:
            fired.append(ScoreFactor("macd_histogram", Side.BEAR, MACD_EXPANSION_WEIGHT,
                                     "MACD histogram expanding negative"))

    return fired


def volume_factors(snap: IndicatorSnapshot, quote: Optional[Quote], params: SignalParams) -> list[ScoreFactor]:
    """High volume confirms the quote's direction; thin volume dampens both sides."""
    fired = []
    rel_vol = snap.rel_vol

    if rel_vol is not None:
        if rel_vol > params.high_rel_volume:
            if quote is not None and quote.change_pct > 0:
                fired.append(ScoreFactor("volume_confirmation", Side.BULL, VOLUME_CONFIRM_WEIGHT,
                                         f"Volume {rel_vol:.1f}× average confirms the advance"))
            elif quote is not None and quote.change_pct < 0:
                fired.append(ScoreFactor("volume_confirmation", Side.BEAR, VOLUME_CONFIRM_WEIGHT,
                                         f"Volume {rel_vol:.1f}× average confirms the decline"))
        elif rel_vol < params.low_rel_volume:
            fired.append(ScoreFactor("volume_dampening", Side.BOTH,
                                     explanation=f"Volume {rel_vol:.1f}× average – weak participation",
                                     multiplier=params.low_volume_dampening, reported=False))

    if snap.obv is not None and snap.obv_ema is not None:
        if snap.obv > snap.obv_ema:
            fired.append(ScoreFactor("obv_trend", Side.BULL, OBV_WEIGHT, "OBV above its EMA (accumulation)"))
        else:
            fired.append(ScoreFactor("obv_trend", Side.BEAR, OBV_WEIGHT, "OBV below its EMA (distribution)"))

    return fired


def bollinger_factors(snap: IndicatorSnapshot, quote: Optional[Quote], params: SignalParams) -> list[ScoreFactor]:
    """Band extremes score the reversal side; mid-range scores the trend side weakly."""
    pct_b = snap.pct_b
    if pct_b is None:
        return []

    if pct_b < PCT_B_LOWER:
        return [ScoreFactor("bollinger", Side.BULL, PCT_B_EXTREME_WEIGHT,
                            "Price at lower Bollinger band (mean reversion)")]
    if pct_b > PCT_B_UPPER:
        return [ScoreFactor("bollinger", Side.BEAR, PCT_B_EXTREME_WEIGHT,
                            "Price at upper Bollinger band (mean reversion)")]
    if 0.5 < pct_b < 0.8:
        return [ScoreFactor("bollinger_mid", Side.BULL, PCT_B_MID_WEIGHT,
                            "Price in upper half of Bollinger bands", reported=False)]
    if 0.2 < pct_b < 0.5:
        return [ScoreFactor("bollinger_mid", Side.BEAR, PCT_B_MID_WEIGHT,
                            "Price in lower half of Bollinger bands", reported=False)]
    return []


def stochastic_factors(snap: IndicatorSnapshot, quote: Optional[Quote], params: SignalParams) -> list[ScoreFactor]:
    """%K/%D ordering inside the band plus %K extremes; both may fire."""
    k, d = snap.stoch_k, snap.stoch_d
    if k is None or d is None:
        return []

    fired = []
    if k > d and k < STOCH_OVERBOUGHT:
        fired.append(ScoreFactor("stoch_cross", Side.BULL, STOCH_CROSS_WEIGHT,
                                 f"Stochastic bullish K({k:.0f}) > D({d:.0f})"))
    elif k < d and k > STOCH_OVERSOLD:
        fired.append(ScoreFactor("stoch_cross", Side.BEAR, STOCH_CROSS_WEIGHT,
                                 f"Stochastic bearish K({k:.0f}) < D({d:.0f})"))

    if k < STOCH_OVERSOLD:
        fired.append(ScoreFactor("stoch_extreme", Side.BULL, STOCH_EXTREME_WEIGHT,
                                 f"Stochastic oversold ({k:.0f})"))
    if k > STOCH_OVERBOUGHT:
        fired.append(ScoreFactor("stoch_extreme", Side.BEAR, STOCH_EXTREME_WEIGHT,
                                 f"Stochastic overbought ({k:.0f})"))

    return fired


FACTOR_EVALUATORS: tuple[FactorEvaluator, ...] = (
    trend_factors,
    rsi_factors,
    macd_factors,
    volume_factors,
    bollinger_factors,
    stochastic_factors,
)


def evaluate_factors(snap: IndicatorSnapshot, quote: Optional[Quote] = None,
                     params: Optional[SignalParams] = None) -> tuple[ScoreFactor, ...]:
    """Run every evaluator in order and concatenate the fired factors."""
    params = params or SignalParams()
    fired: list[ScoreFactor] = []
    for evaluator in FACTOR_EVALUATORS:
        fired.extend(evaluator(snap, quote, params))
    return tuple(fired)
