"""
Signal Desk - Trade Assistant Core

Computes technical indicators from OHLCV candles, scores them into
BUY/SELL/WAIT signals with confidence and reasons, sizes positions with
ATR-based stops anchored to pivot levels, and monitors open positions for
exit conditions.
"""

__version__ = "0.1.0"
__author__ = "Signal Desk Team"
