"""US equity session clock"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..config.defaults import SessionParams
from ..models.signal import SessionInfo, SessionState
from ..utils.time import get_market_time


def session_info(now: Optional[datetime] = None, params: Optional[SessionParams] = None) -> SessionInfo:
    """
    Classify ``now`` into a trading session in exchange-local time

    Weekends are closed. On weekdays: pre-market from 04:00, regular session
    09:30-16:00, after-hours until 20:00, closed otherwise. Only the regular
    session is tradeable.

    Args:
        now: Evaluation time; wall clock when None, naive values are UTC
        params: Session boundaries

    Returns:
        SessionInfo for the evaluation time
    """
    params = params or SessionParams()
    local = get_market_time(now).astimezone(ZoneInfo(params.timezone))
    hours = local.hour + local.minute / 60

    if local.weekday() >= 5:
        return SessionInfo(state=SessionState.CLOSED, label="Weekend", tradeable=False)
    if params.regular_open <= hours < params.regular_close:
        return SessionInfo(state=SessionState.OPEN, label="Market Open", tradeable=True)
    if params.pre_market_open <= hours < params.regular_open:
        return SessionInfo(state=SessionState.PRE_MARKET, label="Pre-Market", tradeable=False)
    if params.regular_close <= hours < params.after_hours_close:
        return SessionInfo(state=SessionState.AFTER_HOURS, label="After Hours", tradeable=False)
    return SessionInfo(state=SessionState.CLOSED, label="Closed", tradeable=False)
