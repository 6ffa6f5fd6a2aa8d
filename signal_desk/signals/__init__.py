"""
Signal scoring and exit monitoring module.

Turns an indicator snapshot into a BUY/SELL/WAIT signal with confidence and
reasons, and re-checks open positions for stop, target and technical exits.
"""

from .exit_monitor import check_exit
from .factors import evaluate_factors
from .scoring import score
from .session import session_info

__all__ = ["score", "check_exit", "evaluate_factors", "session_info"]
