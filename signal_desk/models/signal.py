"""
Signal data models.

A Signal is created fresh per scoring call and never mutated. The fired
factors are kept as typed records so the decision can be audited
factor-by-factor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..data.models import Direction


class Side(str, Enum):
    """Accumulator a scoring factor contributes to."""
    BULL = "bull"
    BEAR = "bear"
    BOTH = "both"   # Multiplicative adjustment applied to both accumulators


class SessionState(str, Enum):
    """US equity trading session state."""
    OPEN = "open"
    PRE_MARKET = "pre_market"
    AFTER_HOURS = "after_hours"
    CLOSED = "closed"


@dataclass(frozen=True)
class SessionInfo:
    """Session state at evaluation time."""
    state: SessionState
    label: str
    tradeable: bool

    def to_dict(self) -> dict[str, Any]:
        return {"state": self.state.value, "label": self.label, "tradeable": self.tradeable}


@dataclass(frozen=True)
class ScoreFactor:
    """
    One fired scoring factor.

    Additive factors carry a ``weight`` for their side. A dampening factor has
    ``side == Side.BOTH`` and a ``multiplier`` applied to both accumulators at
    the point it appears in the sequence. Factors with ``reported=False``
    score but are not listed among a signal's reasons.
    """
    name: str
    side: Side
    weight: float = 0.0
    explanation: str = ""
    multiplier: Optional[float] = None
    reported: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "side": self.side.value,
            "weight": self.weight,
            "explanation": self.explanation,
            "multiplier": self.multiplier,
        }


@dataclass(frozen=True)
class Signal:
    """Directional verdict with confidence and the reasons behind it."""
    symbol: str
    direction: Direction
    confidence: int                                     # 0..95
    bull_score: float
    bear_score: float
    reasons: tuple[str, ...]                            # Display order is evaluation order
    session: SessionInfo
    timestamp: int                                      # Epoch ms of evaluation
    factors: tuple[ScoreFactor, ...] = ()
    indicators: dict[str, Optional[float]] = field(default_factory=dict)

    @property
    def is_actionable(self) -> bool:
        return self.direction != Direction.WAIT

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "direction": self.direction.value,
            "confidence": self.confidence,
            "bull_score": self.bull_score,
            "bear_score": self.bear_score,
            "reasons": list(self.reasons),
            "factors": [f.to_dict() for f in self.factors],
            "session": self.session.to_dict(),
            "indicators": dict(self.indicators),
            "timestamp": self.timestamp,
        }
