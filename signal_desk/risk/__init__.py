"""Risk management: ATR stops, pivot anchoring and position sizing"""

from .planner import plan, quick_size

__all__ = ["plan", "quick_size"]
