"""Exit monitor for open journal positions"""

from typing import Optional

from ..config.defaults import ExitParams
from ..data.models import OpenPosition
from ..logging.config import get_decision_logger, log_exit_decision
from ..models.indicators import IndicatorSnapshot
from ..models.risk import ExitVerdict

decision_logger = get_decision_logger(__name__)


def _exit_reason(position: OpenPosition, price: float, pnl_pct: float,
                 snap: IndicatorSnapshot, params: ExitParams) -> Optional[str]:
    # Priority order: stop, target, RSI extreme, MACD cross; first hit wins
    long = position.is_long

    if (long and price <= position.stop_price) or (not long and price >= position.stop_price):
        return f"Stop loss hit at {position.stop_price:.2f} (-{abs(pnl_pct):.1f}%)"

    if (long and price >= position.target_price) or (not long and price <= position.target_price):
        return f"Take profit reached at {position.target_price:.2f} (+{pnl_pct:.1f}%)"

    if snap.rsi is not None:
        if long and snap.rsi > params.rsi_long_exit:
            return f"RSI overbought {snap.rsi:.1f} – consider exiting"
        if not long and snap.rsi < params.rsi_short_exit:
            return f"RSI oversold {snap.rsi:.1f} – consider exiting"

    hist, prev = snap.macd_hist, snap.macd_hist_prev
    if params.macd_cross_exit and hist is not None and prev is not None:
        if long and hist < 0 and prev >= 0:
            return "Bearish MACD crossover – exit recommended"
        if not long and hist > 0 and prev <= 0:
            return "Bullish MACD crossover – exit recommended"

    return None


def check_exit(
    position: OpenPosition,
    current_price: float,
    snapshot: IndicatorSnapshot,
    *,
    params: Optional[ExitParams] = None,
) -> ExitVerdict:
    """
    Re-evaluate an open position against the latest price and indicators

    Args:
        position: Journal position record (read only)
        current_price: Latest traded price
        snapshot: Indicator snapshot for the position's symbol
        params: Soft exit thresholds

    Returns:
        ExitVerdict; a closed position never exits. The unrealized P&L is
        returned either way for display.
    """
    params = params or ExitParams()
    pnl_pct = position.pnl_pct_at(current_price)

    reasons: tuple[str, ...] = ()
    if position.is_open:
        reason = _exit_reason(position, current_price, pnl_pct, snapshot, params)
        if reason is not None:
            reasons = (reason,)

    verdict = ExitVerdict(
        should_exit=bool(reasons),
        reasons=reasons,
        unrealized_pnl_pct=round(pnl_pct, 2),
        unrealized_pnl=round(position.pnl_at(current_price), 2),
    )

    log_exit_decision(
        decision_logger,
        symbol=position.symbol,
        should_exit=verdict.should_exit,
        reasons=list(verdict.reasons),
        unrealized_pnl_pct=verdict.unrealized_pnl_pct,
    )

    return verdict
