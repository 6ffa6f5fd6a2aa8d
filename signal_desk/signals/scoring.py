"""
Multi-factor signal scoring.

Folds the fired factors into bull and bear accumulators in evaluation order,
applies the decision rule, then dampens confidence outside the regular
session. Scoring is pure apart from reading the clock when ``now`` is None.
"""

import math
from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import Direction, Quote
from ..logging.config import get_decision_logger, log_signal_decision
from ..models.indicators import IndicatorSnapshot
from ..models.signal import ScoreFactor, Side, Signal
from ..utils.time import datetime_to_ms, get_market_time
from .factors import evaluate_factors
from .session import session_info

decision_logger = get_decision_logger(__name__)

CONFLICTING_SIGNALS_REASON = "Conflicting signals – wait for a clear direction"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def accumulate(factors: Iterable[ScoreFactor]) -> tuple[float, float]:
    """
    Fold factors into (bull_score, bear_score)

    A BOTH-side factor multiplies whatever has accumulated so far, so its
    effect depends on its position in the sequence.
    """
    bull = 0.0
    bear = 0.0
    for factor in factors:
        if factor.side == Side.BOTH:
            multiplier = factor.multiplier if factor.multiplier is not None else 1.0
            bull *= multiplier
            bear *= multiplier
        elif factor.side == Side.BULL:
            bull += factor.weight
        else:
            bear += factor.weight
    return bull, bear


def _reasons_for(factors: Iterable[ScoreFactor], side: Side) -> list[str]:
    return [f.explanation for f in factors if f.side == side and f.reported]


def score(
    snapshot: IndicatorSnapshot,
    symbol: str,
    quote: Optional[Quote] = None,
    *,
    now: Optional[datetime] = None,
    config: Optional[DefaultConfig] = None,
) -> Signal:
    """
    Score the latest indicator snapshot into a BUY/SELL/WAIT signal

    Args:
        snapshot: Latest indicator values
        symbol: Instrument symbol echoed on the signal
        quote: Optional live quote; without it volume cannot confirm direction
        now: Evaluation time for the session check and timestamp
        config: Parameter set; defaults when None

    Returns:
        A new Signal; WAIT with confidence 0 when the sides do not separate
    """
    config = config or get_default_config()
    params = config.signal
    evaluated_at = get_market_time(now)
    session = session_info(evaluated_at, config.session)

    factors = evaluate_factors(snapshot, quote, params)
    bull, bear = accumulate(factors)

    diff = bull - bear
    total = bull + bear or 1

    if diff >= params.min_score_diff and bull >= params.min_side_score:
        direction = Direction.BUY
        reasons = _reasons_for(factors, Side.BULL)
        confidence = min(params.max_confidence, round_half_up(bull / total * 100))
    elif diff <= -params.min_score_diff and bear >= params.min_side_score:
        direction = Direction.SELL
        reasons = _reasons_for(factors, Side.BEAR)
        confidence = min(params.max_confidence, round_half_up(bear / total * 100))
    else:
        direction = Direction.WAIT
        reasons = [CONFLICTING_SIGNALS_REASON]
        confidence = 0

    if not session.tradeable and confidence > 0:
        confidence = max(0, confidence - params.off_session_penalty)
        reasons.append(f"Caution: market is {session.label} – act only if your broker session is open")

    signal = Signal(
        symbol=symbol,
        direction=direction,
        confidence=confidence,
        bull_score=round(bull, 2),
        bear_score=round(bear, 2),
        reasons=tuple(reasons),
        session=session,
        timestamp=datetime_to_ms(evaluated_at),
        factors=factors,
        indicators={
            "rsi": snapshot.rsi,
            "macd_hist": snapshot.macd_hist,
            "ema_fast": snapshot.ema_fast,
            "ema_medium": snapshot.ema_medium,
            "stoch_k": snapshot.stoch_k,
            "pct_b": snapshot.pct_b,
            "rel_vol": snapshot.rel_vol,
            "atr": snapshot.atr,
        },
    )

    log_signal_decision(
        decision_logger,
        symbol=symbol,
        direction=direction.value,
        confidence=confidence,
        bull_score=signal.bull_score,
        bear_score=signal.bear_score,
        context={"factors": len(factors), "session": session.state.value},
    )

    return signal
